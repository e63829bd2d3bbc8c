from flask import Blueprint, abort, render_template, redirect, url_for, request, flash, jsonify
from flask_login import current_user
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
import logging

from florisifrunze import db
from florisifrunze.dashboard import dashboard_stats
from florisifrunze.decorators import admin_required
from florisifrunze.forms import (APPOINTMENT_FIELDS, BLOG_POST_FIELDS, CAROUSEL_IMAGE_FIELDS, FEATURE_CARD_FIELDS,
                                 INQUIRY_FIELDS, PORTFOLIO_FIELDS, SERVICE_FIELDS, SUBSCRIPTION_FIELDS,
                                 TESTIMONIAL_FIELDS, FormError, form_values, parse_form, service_choices,
                                 validation_messages)
from florisifrunze.schemas import (AppointmentIn, BlogPostIn, CarouselImageIn, FeatureCardIn, InquiryIn,
                                   PortfolioItemIn, ServiceIn, SubscriptionIn, TestimonialIn, validate_update)
from florisifrunze.storage import storage

bp = Blueprint('admin', __name__)

logger = logging.getLogger(__name__)


class Section:
    def __init__(self, title, entity, plural, schema, fields, columns, creatable=True, orderable=False):
        self.title = title
        self.entity = entity
        self.plural = plural
        self.schema = schema
        self.fields = fields
        self.columns = columns    # (key, header) pairs from to_dict()
        self.creatable = creatable
        self.orderable = orderable

    def storage_call(self, action, *args):
        name = self.plural if action == 'get_all' else self.entity
        action = 'get' if action == 'get_all' else action
        return getattr(storage, f'{action}_{name}')(*args)


SECTIONS = {
    'services': Section('Servicii', 'service', 'services', ServiceIn, SERVICE_FIELDS,
                        [('name', 'Nume'), ('price', 'Pret'), ('featured', 'Recomandat')]),
    'subscriptions': Section('Abonamente', 'subscription', 'subscriptions', SubscriptionIn, SUBSCRIPTION_FIELDS,
                             [('name', 'Nume'), ('price', 'Pret'), ('isPopular', 'Popular'),
                              ('displayOrder', 'Ordine')]),
    'blog': Section('Blog', 'blog_post', 'blog_posts', BlogPostIn, BLOG_POST_FIELDS,
                    [('title', 'Titlu'), ('publishedAt', 'Publicat')]),
    'portfolio': Section('Portofoliu', 'portfolio_item', 'portfolio_items', PortfolioItemIn, PORTFOLIO_FIELDS,
                         [('title', 'Titlu'), ('status', 'Status'), ('viewCount', 'Vizualizari')]),
    'testimonials': Section('Testimoniale', 'testimonial', 'testimonials', TestimonialIn, TESTIMONIAL_FIELDS,
                            [('name', 'Nume'), ('rating', 'Nota'), ('displayOrder', 'Ordine')]),
    'carousel-images': Section('Carusel', 'carousel_image', 'carousel_images', CarouselImageIn,
                               CAROUSEL_IMAGE_FIELDS, [('imageUrl', 'Imagine'), ('altText', 'Text alternativ')],
                               orderable=True),
    'feature-cards': Section('Carduri prezentare', 'feature_card', 'feature_cards', FeatureCardIn,
                             FEATURE_CARD_FIELDS, [('title', 'Titlu'), ('imageUrl', 'Imagine')], orderable=True),
    'appointments': Section('Programari', 'appointment', 'appointments', AppointmentIn, APPOINTMENT_FIELDS,
                            [('name', 'Client'), ('phone', 'Telefon'), ('date', 'Data'), ('city', 'Oras'),
                             ('priority', 'Prioritate'), ('status', 'Status')], creatable=False),
    'inquiries': Section('Mesaje', 'inquiry', 'inquiries', InquiryIn, INQUIRY_FIELDS,
                         [('name', 'Nume'), ('email', 'Email'), ('message', 'Mesaj'), ('status', 'Status'),
                          ('createdAt', 'Primit')], creatable=False),
}


@bp.context_processor
def inject_sections():
    return {'admin_sections': SECTIONS}


def get_section(slug):
    section = SECTIONS.get(slug)
    if section is None:
        abort(404)
    return section


def render_form(slug, section, values, item=None):
    return render_template('admin/form.html', slug=slug, section=section, values=values, item=item,
                           services=service_choices())


@bp.route('/')
@bp.route('/dashboard')
@admin_required
def admin_dashboard():
    stats = dashboard_stats()
    if request.headers.get('X-Requested-With') == 'XMLHttpRequest':
        return jsonify(stats)
    return render_template('admin/dashboard.html', stats=stats, sections=SECTIONS, user=current_user,
                           adminregister=storage.get_admin_register_status())


@bp.route('/settings/register', methods=['POST'])
@admin_required
def toggle_register():
    enabled = not storage.get_admin_register_status()
    storage.set_admin_register_status(enabled)
    flash("Inregistrarea administratorilor a fost " + ("activata." if enabled else "dezactivata."), "success")
    return redirect(url_for('admin.admin_dashboard'))


@bp.route('/<slug>/')
@admin_required
def list_items(slug):
    section = get_section(slug)
    items = [item.to_dict() for item in section.storage_call('get_all')]
    return render_template('admin/list.html', slug=slug, section=section, items=items)


@bp.route('/<slug>/new', methods=['GET', 'POST'])
@admin_required
def create_item(slug):
    section = get_section(slug)
    if not section.creatable:
        abort(404)

    if request.method == 'POST':
        try:
            record = section.schema.model_validate(parse_form(section.fields, request.form)).to_record()
        except FormError as e:
            flash(str(e), "danger")
            return render_form(slug, section, request.form)
        except ValidationError as e:
            for message in validation_messages(e):
                flash(message, "danger")
            return render_form(slug, section, request.form)
        if record.get('service_id') is not None and storage.get_service(record['service_id']) is None:
            flash("Serviciul selectat nu exista.", "danger")
            return render_form(slug, section, request.form)

        item = section.storage_call('create', record)
        logger.info(f"{section.entity} {item.id} created by {current_user.username}")
        flash("Inregistrare adaugata cu succes.", "success")
        return redirect(url_for('admin.list_items', slug=slug))

    return render_form(slug, section, form_values(section.fields, {}))


@bp.route('/<slug>/<int:id>/edit', methods=['GET', 'POST'])
@admin_required
def edit_item(slug, id):
    section = get_section(slug)
    item = section.storage_call('get', id)
    if item is None:
        abort(404)

    if request.method == 'POST':
        current = item.to_dict()
        try:
            changes = parse_form(section.fields, request.form, keep_empty=True)
            # Rebuild the blog body from the sections when the content box was left empty
            if section.schema is BlogPostIn and not changes.get('content'):
                current.pop('content', None)
                changes.pop('content', None)
            record = validate_update(section.schema, current, changes).to_record()
        except FormError as e:
            flash(str(e), "danger")
            return render_form(slug, section, request.form, item)
        except ValidationError as e:
            for message in validation_messages(e):
                flash(message, "danger")
            return render_form(slug, section, request.form, item)

        section.storage_call('update', id, record)
        logger.info(f"{section.entity} {id} updated by {current_user.username}")
        flash("Modificarile au fost salvate.", "success")
        return redirect(url_for('admin.list_items', slug=slug))

    return render_form(slug, section, form_values(section.fields, item.to_dict()), item)


@bp.route('/<slug>/<int:id>/delete', methods=['GET', 'POST'])
@admin_required
def delete_item(slug, id):
    section = get_section(slug)
    item = section.storage_call('get', id)
    if item is None:
        abort(404)

    if request.method == 'POST':
        try:
            section.storage_call('delete', id)
            flash("Inregistrare stearsa.", "success")
            logger.info(f"{section.entity} {id} deleted by {current_user.username}")
        except IntegrityError:
            db.session.rollback()
            flash("Inregistrarea nu poate fi stearsa: este folosita in alte inregistrari.", "danger")
        return redirect(url_for('admin.list_items', slug=slug))

    return render_template('admin/delete.html', slug=slug, section=section, item=item.to_dict())


@bp.route('/<slug>/<int:id>/move/<direction>', methods=['POST'])
@admin_required
def move_item(slug, id, direction):
    section = get_section(slug)
    if not section.orderable:
        abort(404)
    if not getattr(storage, f'reorder_{section.entity}')(id, direction):
        flash("Elementul nu poate fi mutat mai departe.", "warning")
    return redirect(url_for('admin.list_items', slug=slug))
