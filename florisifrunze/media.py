"""Cloudinary helpers for the background video and site images."""

import logging
import os

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from cloudinary.utils import cloudinary_url
from flask import current_app

logger = logging.getLogger(__name__)

VIDEO_PUBLIC_ID = 'garden-background-video'
VIDEO_FOLDER = 'garden-videos'
IMAGE_FOLDER = 'garden-images'


class MediaConfigError(RuntimeError):
    pass


def configure():
    credentials = current_app.config.get('CLOUDINARY') or {}
    missing = [key for key in ('cloud_name', 'api_key', 'api_secret') if not credentials.get(key)]
    if missing:
        raise MediaConfigError(f"Missing Cloudinary settings: {', '.join(missing)}")
    cloudinary.config(secure=True, **credentials)


def video_url(public_id=f'{VIDEO_FOLDER}/{VIDEO_PUBLIC_ID}'):
    """Optimised delivery URL for an uploaded video."""
    configure()
    url, _ = cloudinary_url(public_id, resource_type='video', quality='auto:good',
                            format='mp4', fetch_format='auto', secure=True)
    return url


def upload_video(path=None, public_id=VIDEO_PUBLIC_ID, folder=VIDEO_FOLDER):
    path = path or os.path.join(current_app.static_folder, current_app.config['MEDIA_FOLDER'], 'gardencut.mp4')
    if not os.path.isfile(path):
        raise FileNotFoundError(path)
    configure()
    logger.info(f"Uploading video {path} to Cloudinary")
    result = cloudinary.uploader.upload(
        path,
        resource_type='video',
        public_id=public_id,
        folder=folder,
        format='mp4',
        transformation=[{'quality': 'auto:good'}, {'fetch_format': 'auto'}],
    )
    return {
        'url': result['secure_url'],
        'publicId': result['public_id'],
        'optimizedUrl': video_url(result['public_id']),
    }


def upload_image(path, public_id=None, folder=IMAGE_FOLDER):
    if not os.path.isfile(path):
        raise FileNotFoundError(path)
    configure()
    logger.info(f"Uploading image {path} to Cloudinary")
    options = {'folder': folder, 'resource_type': 'image'}
    if public_id:
        options['public_id'] = public_id
    result = cloudinary.uploader.upload(path, **options)
    url, _ = cloudinary_url(result['public_id'], quality='auto', fetch_format='auto', secure=True)
    return {'url': result['secure_url'], 'publicId': result['public_id'], 'optimizedUrl': url}
