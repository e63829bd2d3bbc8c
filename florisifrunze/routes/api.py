from flask import Blueprint, jsonify, request
import logging

from florisifrunze import json_error
from florisifrunze.decorators import json_body
from florisifrunze.schemas import AppointmentIn, InquiryIn
from florisifrunze.storage import storage

bp = Blueprint('api', __name__)

logger = logging.getLogger(__name__)


def records(items):
    return [item.to_dict() for item in items]


@bp.route('/healthz')
def healthz():
    try:
        storage.check_connection()
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return jsonify({'status': 'error', 'database': False}), 503
    return jsonify({'status': 'ok', 'database': True})


# Services

@bp.route('/services')
def services():
    if request.args.get('featured', '').lower() == 'true':
        items = storage.get_featured_services()
    else:
        items = storage.get_services()
    return jsonify({'services': records(items)})


@bp.route('/services/<int:id>')
def service(id):
    item = storage.get_service(id)
    if item is None:
        return json_error('Service not found', 404)
    return jsonify(item.to_dict())


# Subscriptions

@bp.route('/subscriptions')
def subscriptions():
    return jsonify({'subscriptions': records(storage.get_subscriptions())})


@bp.route('/subscriptions/<int:id>')
def subscription(id):
    item = storage.get_subscription(id)
    if item is None:
        return json_error('Subscription not found', 404)
    return jsonify(item.to_dict())


# Blog

@bp.route('/blog')
def blog_posts():
    return jsonify({'blogPosts': records(storage.get_blog_posts())})


@bp.route('/blog/<int:id>')
def blog_post(id):
    item = storage.get_blog_post(id)
    if item is None:
        return json_error('Blog post not found', 404)
    return jsonify(item.to_dict())


# Portfolio, published items only

@bp.route('/portfolio')
def portfolio():
    return jsonify({'portfolioItems': records(storage.get_published_portfolio_items())})


@bp.route('/portfolio/item/<int:id>')
def portfolio_item(id):
    item = storage.get_portfolio_item(id)
    if item is None or item.status != 'Published':
        return json_error('Portfolio item not found', 404)
    item = storage.increment_portfolio_view_count(id)
    return jsonify(item.to_dict())


@bp.route('/portfolio/service/<int:service_id>')
def portfolio_by_service(service_id):
    return jsonify({'portfolioItems': records(storage.get_portfolio_items_by_service(service_id))})


# Home page blocks

@bp.route('/testimonials')
def testimonials():
    return jsonify({'testimonials': records(storage.get_testimonials())})


@bp.route('/carousel-images')
def carousel_images():
    return jsonify({'carouselImages': records(storage.get_carousel_images())})


@bp.route('/feature-cards')
def feature_cards():
    return jsonify({'featureCards': records(storage.get_feature_cards())})


# Customer submissions

@bp.route('/contact', methods=['POST'])
def contact():
    data = json_body()
    if data is None:
        return json_error('Invalid JSON body', 400)
    # Customers cannot set the workflow status
    data.pop('status', None)
    inquiry = InquiryIn.model_validate(data)
    if inquiry.service_id is not None and storage.get_service(inquiry.service_id) is None:
        return json_error('Service not found', 400)
    created = storage.create_inquiry(inquiry.to_record())
    logger.info(f"New inquiry {created.id} from {created.email}")
    return jsonify({'success': True, 'message': 'Inquiry received', 'inquiry': created.to_dict()}), 201


@bp.route('/appointments', methods=['POST'])
def book_appointment():
    data = json_body()
    if data is None:
        return json_error('Invalid JSON body', 400)
    data.pop('status', None)
    appointment = AppointmentIn.model_validate(data)
    if storage.get_service(appointment.service_id) is None:
        return json_error('Service not found', 400)
    created = storage.create_appointment(appointment.to_record())
    logger.info(f"New appointment {created.id} for service {created.service_id}")
    return jsonify({'success': True, 'message': 'Appointment booked',
                    'appointment': created.to_dict()}), 201
