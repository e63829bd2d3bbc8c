from flask import (Blueprint, abort, current_app, flash, make_response, redirect, render_template, request,
                   send_from_directory, url_for)
from pydantic import ValidationError
import logging
import os

from florisifrunze.forms import (BOOKING_FIELDS, CONTACT_FIELDS, FormError, parse_form, service_choices,
                                 validation_messages)
from florisifrunze.schemas import AppointmentIn, InquiryIn
from florisifrunze.storage import storage

bp = Blueprint('home', __name__)

logger = logging.getLogger(__name__)

# Responses the browser worker keeps fresh in the background
CACHED_API_PATHS = ['/api/services', '/api/carousel-images', '/api/feature-cards', '/api/testimonials']
PRECACHE_PATHS = ['/', '/static/css/site.css']


@bp.route('/')
def index():
    return render_template('index.html',
                           services=storage.get_featured_services(),
                           testimonials=storage.get_testimonials(),
                           carousel_images=storage.get_carousel_images(),
                           feature_cards=storage.get_feature_cards())


@bp.route('/about')
def about():
    return render_template('about.html', testimonials=storage.get_testimonials())


@bp.route('/services')
def services():
    return render_template('services.html', services=storage.get_services())


@bp.route('/services/<int:id>')
def service_detail(id):
    service = storage.get_service(id)
    if service is None:
        abort(404)
    return render_template('service_detail.html', service=service,
                           portfolio_items=storage.get_portfolio_items_by_service(id))


@bp.route('/subscriptions')
def subscriptions():
    return render_template('subscriptions.html', subscriptions=storage.get_subscriptions())


@bp.route('/blog')
def blog():
    return render_template('blog.html', posts=storage.get_blog_posts())


@bp.route('/blog/<int:id>')
def blog_detail(id):
    post = storage.get_blog_post(id)
    if post is None:
        abort(404)
    return render_template('blog_detail.html', post=post)


@bp.route('/portfolio')
def portfolio():
    return render_template('portfolio.html', items=storage.get_published_portfolio_items(),
                           services={service.id: service for service in storage.get_services()})


@bp.route('/portfolio/<int:id>')
def portfolio_detail(id):
    item = storage.get_portfolio_item(id)
    if item is None or item.status != 'Published':
        abort(404)
    item = storage.increment_portfolio_view_count(id)
    return render_template('portfolio_detail.html', item=item.to_dict(), service=item.service)


def contact_page(form):
    return render_template('contact.html', contact_fields=CONTACT_FIELDS, form=form, services=service_choices())


def appointment_page(form):
    return render_template('appointment.html', booking_fields=BOOKING_FIELDS, form=form,
                           services=service_choices())


@bp.route('/contact', methods=['GET', 'POST'])
def contact():
    if request.method == 'POST':
        try:
            inquiry = InquiryIn.model_validate(parse_form(CONTACT_FIELDS, request.form))
        except FormError as e:
            flash(str(e), "danger")
            return contact_page(request.form)
        except ValidationError as e:
            for message in validation_messages(e):
                flash(message, "danger")
            return contact_page(request.form)

        if inquiry.service_id is not None and storage.get_service(inquiry.service_id) is None:
            flash("Serviciul selectat nu exista.", "danger")
            return contact_page(request.form)

        storage.create_inquiry(inquiry.to_record())
        flash("Multumim! Mesajul tau a fost trimis, te contactam in curand.", "success")
        return redirect(url_for('home.contact'))

    return contact_page({})


@bp.route('/appointment', methods=['GET', 'POST'])
def appointment():
    if request.method == 'POST':
        try:
            booking = AppointmentIn.model_validate(parse_form(BOOKING_FIELDS, request.form))
        except FormError as e:
            flash(str(e), "danger")
            return appointment_page(request.form)
        except ValidationError as e:
            for message in validation_messages(e):
                flash(message, "danger")
            return appointment_page(request.form)

        if storage.get_service(booking.service_id) is None:
            flash("Serviciul selectat nu exista.", "danger")
            return appointment_page(request.form)

        created = storage.create_appointment(booking.to_record())
        logger.info(f"Appointment {created.id} booked from the website")
        flash("Programarea a fost inregistrata. Te vom contacta pentru confirmare.", "success")
        return redirect(url_for('home.appointment'))

    return appointment_page({'serviceId': request.args.get('service', '')})


@bp.route('/sw.js')
def service_worker():
    script = render_template('sw.js',
                             cache_version=current_app.config['CACHE_VERSION'],
                             precache_paths=PRECACHE_PATHS,
                             cached_api_paths=CACHED_API_PATHS)
    response = make_response(script)
    response.headers['Content-Type'] = 'application/javascript; charset=utf-8'
    response.headers['Cache-Control'] = 'no-cache'
    response.headers['Service-Worker-Allowed'] = '/'
    return response


@bp.route('/gardencut.mp4')
def background_video():
    directory = os.path.join(current_app.static_folder, current_app.config['MEDIA_FOLDER'])
    if not os.path.isfile(os.path.join(directory, 'gardencut.mp4')):
        abort(404)
    # conditional=True answers Range requests with 206 partial content
    response = send_from_directory(directory, 'gardencut.mp4', mimetype='video/mp4', conditional=True,
                                   max_age=60 * 60 * 24 * 7)
    response.headers['Accept-Ranges'] = 'bytes'
    return response
