"""
Admin JSON API: authentication, registration and CRUD for every collection.

Every collection exposes the same five endpoints; ``RESOURCES`` lists the URL
segment, the storage names and the JSON keys used in responses.
"""

from flask import Blueprint, jsonify
from flask_login import current_user, login_user, logout_user
from sqlalchemy.exc import IntegrityError
from werkzeug.security import check_password_hash, generate_password_hash
import logging

from florisifrunze import db, json_error
from florisifrunze.dashboard import dashboard_stats
from florisifrunze.decorators import admin_required, json_body
from florisifrunze.schemas import (AppointmentIn, BlogPostIn, CarouselImageIn, FeatureCardIn, InquiryIn,
                                   LoginIn, PortfolioItemIn, RegisterIn, RegisterStatusIn, ServiceIn,
                                   SubscriptionIn, TestimonialIn, validate_update)
from florisifrunze.seed import create_sample_subscriptions
from florisifrunze.storage import storage
from florisifrunze.tokens import build_token

bp = Blueprint('admin_api', __name__)

logger = logging.getLogger(__name__)


class Resource:
    def __init__(self, url, entity, plural, key, list_key, schema, label):
        self.url = url
        self.entity = entity      # storage singular, e.g. blog_post
        self.plural = plural      # storage plural, e.g. blog_posts
        self.key = key            # JSON key for one record
        self.list_key = list_key  # JSON key for the list
        self.schema = schema
        self.label = label        # for messages

    def get(self, id):
        return getattr(storage, f'get_{self.entity}')(id)

    def all(self):
        return getattr(storage, f'get_{self.plural}')()

    def create(self, data):
        return getattr(storage, f'create_{self.entity}')(data)

    def update(self, id, data):
        return getattr(storage, f'update_{self.entity}')(id, data)

    def delete(self, id):
        return getattr(storage, f'delete_{self.entity}')(id)


RESOURCES = [
    Resource('services', 'service', 'services', 'service', 'services', ServiceIn, 'Service'),
    Resource('subscriptions', 'subscription', 'subscriptions', 'subscription', 'subscriptions',
             SubscriptionIn, 'Subscription'),
    Resource('blog', 'blog_post', 'blog_posts', 'blogPost', 'blogPosts', BlogPostIn, 'Blog post'),
    Resource('portfolio', 'portfolio_item', 'portfolio_items', 'portfolioItem', 'portfolioItems',
             PortfolioItemIn, 'Portfolio item'),
    Resource('testimonials', 'testimonial', 'testimonials', 'testimonial', 'testimonials',
             TestimonialIn, 'Testimonial'),
    Resource('appointments', 'appointment', 'appointments', 'appointment', 'appointments',
             AppointmentIn, 'Appointment'),
    Resource('inquiries', 'inquiry', 'inquiries', 'inquiry', 'inquiries', InquiryIn, 'Inquiry'),
    Resource('carousel-images', 'carousel_image', 'carousel_images', 'carouselImage', 'carouselImages',
             CarouselImageIn, 'Carousel image'),
    Resource('feature-cards', 'feature_card', 'feature_cards', 'featureCard', 'featureCards',
             FeatureCardIn, 'Feature card'),
]


def service_problem(record):
    """Appointments, inquiries and portfolio items must point at an existing service."""
    service_id = record.get('service_id')
    if service_id is not None and storage.get_service(service_id) is None:
        return 'Service not found'
    return None


# Authentication

@bp.route('/login', methods=['POST'])
def login():
    data = json_body()
    if data is None:
        return json_error('Invalid JSON body', 400)
    credentials = LoginIn.model_validate(data)

    user = None
    if credentials.email:
        user = storage.get_user_by_email(credentials.email)
    elif credentials.username:
        user = storage.get_user_by_username(credentials.username) or storage.get_user_by_email(credentials.username)

    if user is None or not check_password_hash(user.password_hash, credentials.password):
        logger.warning(f"Failed admin login for '{credentials.identifier}'")
        return json_error('Invalid credentials', 401)

    login_user(user)
    logger.info(f"Admin login: {user.username}")
    return jsonify({'success': True, 'message': 'Login successful', 'token': build_token(user),
                    'user': user.to_dict()})


@bp.route('/logout', methods=['POST'])
def logout():
    logout_user()
    return jsonify({'success': True, 'message': 'Logged out'})


@bp.route('/validate-session')
def validate_session():
    if current_user.is_authenticated:
        return jsonify({'valid': True, 'user': current_user.to_dict()})
    return jsonify({'valid': False})


@bp.route('/register-status', methods=['GET'])
def register_status():
    return jsonify({'adminregister': storage.get_admin_register_status()})


@bp.route('/register-status', methods=['PUT'])
@admin_required
def update_register_status():
    data = json_body()
    if data is None:
        return json_error('Invalid JSON body', 400)
    status = RegisterStatusIn.model_validate(data)
    storage.set_admin_register_status(status.adminregister)
    return jsonify({'success': True, 'message': 'Registration status updated',
                    'adminregister': status.adminregister})


@bp.route('/register', methods=['POST'])
def register():
    if not storage.get_admin_register_status():
        return json_error('Admin registration is disabled', 403)
    data = json_body()
    if data is None:
        return json_error('Invalid JSON body', 400)
    registration = RegisterIn.model_validate(data)

    if storage.get_user_by_email(registration.email):
        return json_error('Email already registered', 400)
    if storage.get_user_by_username(registration.username):
        return json_error('Username already taken', 400)

    user = storage.create_user({
        'name': registration.name,
        'email': registration.email,
        'username': registration.username,
        'password_hash': generate_password_hash(registration.password),
        'role': 'admin',
    })
    logger.info(f"Registered admin {user.username}")
    return jsonify({'success': True, 'message': 'Admin account created', 'user': user.to_dict()}), 201


# Dashboard and maintenance

@bp.route('/dashboard')
@admin_required
def dashboard():
    return jsonify({'success': True, **dashboard_stats()})


@bp.route('/create-sample-subscriptions', methods=['POST'])
@admin_required
def sample_subscriptions():
    created = create_sample_subscriptions()
    message = f'Created {created} sample subscriptions' if created else 'Subscriptions already exist'
    return jsonify({'success': True, 'message': message, 'created': created,
                    'subscriptions': [s.to_dict() for s in storage.get_subscriptions()]})


# Collections

def register_resource(resource):
    def list_view():
        return jsonify({'success': True, resource.list_key: [item.to_dict() for item in resource.all()]})

    def get_view(id):
        item = resource.get(id)
        if item is None:
            return json_error(f'{resource.label} not found', 404)
        return jsonify({'success': True, resource.key: item.to_dict()})

    def create_view():
        data = json_body()
        if data is None:
            return json_error('Invalid JSON body', 400)
        record = resource.schema.model_validate(data).to_record()
        problem = service_problem(record)
        if problem:
            return json_error(problem, 400)
        item = resource.create(record)
        logger.info(f"{resource.label} {item.id} created by {current_user.username}")
        return jsonify({'success': True, 'message': f'{resource.label} created',
                        resource.key: item.to_dict()}), 201

    def update_view(id):
        item = resource.get(id)
        if item is None:
            return json_error(f'{resource.label} not found', 404)
        data = json_body()
        if data is None:
            return json_error('Invalid JSON body', 400)
        current = item.to_dict()
        # New sections without explicit content: rebuild the plain content from them
        if resource.schema is BlogPostIn and 'sections' in data and not data.get('content'):
            current.pop('content', None)
        record = validate_update(resource.schema, current, data).to_record()
        problem = service_problem(record)
        if problem:
            return json_error(problem, 400)
        item = resource.update(id, record)
        logger.info(f"{resource.label} {id} updated by {current_user.username}")
        return jsonify({'success': True, 'message': f'{resource.label} updated', resource.key: item.to_dict()})

    def delete_view(id):
        try:
            deleted = resource.delete(id)
        except IntegrityError:
            db.session.rollback()
            return json_error(f'{resource.label} is still referenced by other records', 409)
        if not deleted:
            return json_error(f'{resource.label} not found', 404)
        logger.info(f"{resource.label} {id} deleted by {current_user.username}")
        return jsonify({'success': True, 'message': f'{resource.label} deleted'})

    name = resource.url.replace('-', '_')
    bp.add_url_rule(f'/{resource.url}', f'{name}_list', admin_required(list_view), methods=['GET'])
    bp.add_url_rule(f'/{resource.url}', f'{name}_create', admin_required(create_view), methods=['POST'])
    bp.add_url_rule(f'/{resource.url}/<int:id>', f'{name}_get', admin_required(get_view), methods=['GET'])
    bp.add_url_rule(f'/{resource.url}/<int:id>', f'{name}_update', admin_required(update_view),
                    methods=['PUT', 'PATCH'])
    bp.add_url_rule(f'/{resource.url}/<int:id>', f'{name}_delete', admin_required(delete_view),
                    methods=['DELETE'])


for resource in RESOURCES:
    register_resource(resource)


# Ordering of the home page blocks

@bp.route('/carousel-images/<int:id>/reorder/<direction>', methods=['POST', 'PUT'])
@admin_required
def reorder_carousel_image(id, direction):
    if storage.get_carousel_image(id) is None:
        return json_error('Carousel image not found', 404)
    if not storage.reorder_carousel_image(id, direction):
        return json_error('Cannot move carousel image further', 400)
    return jsonify({'success': True, 'message': 'Carousel image reordered',
                    'carouselImages': [image.to_dict() for image in storage.get_carousel_images()]})


@bp.route('/feature-cards/<int:id>/reorder/<direction>', methods=['POST', 'PUT'])
@admin_required
def reorder_feature_card(id, direction):
    if storage.get_feature_card(id) is None:
        return json_error('Feature card not found', 404)
    if not storage.reorder_feature_card(id, direction):
        return json_error('Cannot move feature card further', 400)
    return jsonify({'success': True, 'message': 'Feature card reordered',
                    'featureCards': [card.to_dict() for card in storage.get_feature_cards()]})
