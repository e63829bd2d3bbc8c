"""
Publish blog posts to a running site through the admin JSON API.

Posts are plain dicts in the API's camelCase shape, usually loaded from JSON
files; the section helpers build the individual blocks.
"""

import json
import logging
import os
from datetime import datetime

import requests

from florisifrunze.schemas import combined_content

logger = logging.getLogger(__name__)


class PublisherError(Exception):
    pass


class BlogPublisher:
    def __init__(self, base_url, email, password, session=None, timeout=30):
        self.base_url = base_url.rstrip('/')
        self.credentials = {'email': email, 'password': password}
        self.session = session or requests.Session()
        self.session.headers.update({'Content-Type': 'application/json'})
        self.timeout = timeout
        self.token = None

    def _url(self, path):
        return f"{self.base_url}{path}"

    def _message(self, response):
        try:
            return response.json().get('message', response.text)
        except ValueError:
            return response.text

    def authenticate(self):
        logger.info(f"Authenticating as {self.credentials['email']}...")
        try:
            response = self.session.post(self._url('/api/admin/login'), json=self.credentials,
                                         timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Authentication error: {e}")
            return False

        if response.status_code == 200 and response.json().get('token'):
            self.token = response.json()['token']
            self.session.headers['Authorization'] = f"Bearer {self.token}"
            logger.info("Authentication successful")
            return True

        logger.error(f"Authentication failed: {self._message(response)}")
        return False

    def _ensure_authenticated(self, action):
        if not self.token and not self.authenticate():
            raise PublisherError(f"Authentication required before {action} a blog post")

    def create_blog_post(self, post):
        self._ensure_authenticated('creating')
        sections = post.get('sections') or []
        data = dict(post)
        data['content'] = combined_content(sections) or post.get('content', '')
        data['imageUrl'] = post.get('imageUrl') or None
        data['publishedAt'] = post.get('publishedAt') or datetime.now().isoformat()
        data['sections'] = sections
        data['tags'] = post.get('tags') or []

        logger.info(f"Creating blog post: {post.get('title')}")
        response = self.session.post(self._url('/api/admin/blog'), json=data, timeout=self.timeout)
        if response.status_code not in (200, 201):
            raise PublisherError(f"Failed to create blog post: {self._message(response)}")
        return response.json()['blogPost']

    def update_blog_post(self, id, changes):
        self._ensure_authenticated('updating')
        data = dict(changes)
        # New sections mean the plain content has to follow
        if changes.get('sections'):
            data['content'] = combined_content(changes['sections'])

        logger.info(f"Updating blog post with ID: {id}")
        response = self.session.put(self._url(f'/api/admin/blog/{id}'), json=data, timeout=self.timeout)
        if response.status_code != 200:
            raise PublisherError(f"Failed to update blog post: {self._message(response)}")
        return response.json()['blogPost']

    def delete_blog_post(self, id):
        self._ensure_authenticated('deleting')
        logger.info(f"Deleting blog post with ID: {id}")
        response = self.session.delete(self._url(f'/api/admin/blog/{id}'), timeout=self.timeout)
        if response.status_code != 200:
            raise PublisherError(f"Failed to delete blog post: {self._message(response)}")
        return True

    @staticmethod
    def load_blog_from_file(path):
        try:
            with open(path, encoding='utf-8') as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            raise PublisherError(f"Failed to load blog post from file: {e}") from e

    @staticmethod
    def save_blog_to_file(post, path):
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(post, f, indent=2, ensure_ascii=False)
        logger.info(f"Blog post saved to {path}")

    # Section builders

    @staticmethod
    def text_section(content, alignment='left'):
        return {'type': 'text', 'content': content, 'alignment': alignment}

    @staticmethod
    def image_section(image_url, caption=None, alignment='center'):
        return {'type': 'image', 'imageUrl': image_url, 'caption': caption, 'alignment': alignment}

    @staticmethod
    def quote_section(content, caption=None):
        return {'type': 'quote', 'content': content, 'caption': caption}

    @staticmethod
    def heading_section(content, level=2):
        return {'type': 'heading', 'content': content, 'level': level}

    @staticmethod
    def list_section(items):
        return {'type': 'list', 'items': list(items)}


def template_post():
    """A starter post showing every section type."""
    return {
        'title': 'Ghid complet de gradinarit organic',
        'excerpt': 'Tehnicile esentiale pentru o gradina organica sanatoasa.',
        'imageUrl': None,
        'tags': ['organic', 'gradinarit'],
        'sections': [
            BlogPublisher.heading_section('Introducere'),
            BlogPublisher.text_section('Gradinaritul organic inseamna sa lucrezi impreuna cu natura.'),
            BlogPublisher.image_section('https://example.com/gradina.jpg', 'O gradina de legume organica'),
            BlogPublisher.heading_section('Principii de baza', 3),
            BlogPublisher.list_section([
                'Construieste un sol sanatos cu compost',
                'Incurajeaza biodiversitatea',
                'Foloseste metode naturale impotriva daunatorilor',
            ]),
            BlogPublisher.quote_section('Hraneste solul, nu plantele.', 'Principiu organic'),
        ],
    }
