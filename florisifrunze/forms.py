"""
Field definitions for the admin back office forms.

Each entity is a list of ``FormField``; ``parse_form`` turns submitted form
data into the camelCase payload the schemas validate, ``form_values`` does
the reverse for pre-filling an edit form.
"""

import json
from collections import namedtuple

from florisifrunze.models.appointments import APPOINTMENT_PRIORITIES, APPOINTMENT_STATUSES
from florisifrunze.models.inquiries import INQUIRY_STATUSES
from florisifrunze.models.portfolio import DIFFICULTY_LEVELS, PORTFOLIO_STATUSES

FormField = namedtuple('FormField', 'name label kind required choices keys', defaults=(False, None, None))


class FormError(ValueError):
    pass


SERVICE_FIELDS = [
    FormField('name', 'Nume', 'text', True),
    FormField('shortDesc', 'Descriere scurta', 'text', True),
    FormField('description', 'Descriere', 'textarea', True),
    FormField('price', 'Pret', 'text', True),
    FormField('imageUrl', 'URL imagine', 'text'),
    FormField('featured', 'Recomandat', 'checkbox'),
    FormField('duration', 'Durata', 'text'),
    FormField('coverage', 'Suprafata acoperita', 'text'),
    FormField('recommendedFrequency', 'Frecventa recomandata', 'text'),
    FormField('benefits', 'Beneficii (unul pe linie)', 'lines'),
    FormField('includes', 'Include (unul pe linie)', 'lines'),
    FormField('faqs', 'Intrebari frecvente (intrebare | raspuns)', 'pairs', keys=('question', 'answer')),
    FormField('seasonalAvailability', 'Sezoane (unul pe linie)', 'lines'),
    FormField('galleryImages', 'Galerie (un URL pe linie)', 'lines'),
]

SUBSCRIPTION_FIELDS = [
    FormField('name', 'Nume', 'text', True),
    FormField('description', 'Descriere', 'textarea'),
    FormField('price', 'Pret', 'text', True),
    FormField('color', 'Culoare (#RRGGBB)', 'text'),
    FormField('features', 'Caracteristici (nume | valoare)', 'pairs', keys=('name', 'value')),
    FormField('isPopular', 'Popular', 'checkbox'),
    FormField('displayOrder', 'Ordine afisare', 'number'),
    FormField('imageUrl', 'URL imagine', 'text'),
]

BLOG_POST_FIELDS = [
    FormField('title', 'Titlu', 'text', True),
    FormField('excerpt', 'Rezumat', 'textarea', True),
    FormField('content', 'Continut (optional daca exista sectiuni text)', 'textarea'),
    FormField('imageUrl', 'URL imagine', 'text'),
    FormField('sections', 'Sectiuni (JSON)', 'json'),
    FormField('tags', 'Etichete (una pe linie)', 'lines'),
    FormField('publishedAt', 'Data publicarii', 'datetime'),
]

PORTFOLIO_FIELDS = [
    FormField('title', 'Titlu', 'text', True),
    FormField('description', 'Descriere', 'textarea', True),
    FormField('serviceId', 'Serviciu', 'service'),
    FormField('imageUrl', 'URL imagine principala', 'text'),
    FormField('images', 'Imagini inainte/dupa (JSON)', 'json'),
    FormField('location', 'Locatie', 'text'),
    FormField('completionDate', 'Data finalizarii', 'date'),
    FormField('projectDuration', 'Durata proiectului', 'text'),
    FormField('difficultyLevel', 'Dificultate', 'select', choices=('',) + DIFFICULTY_LEVELS),
    FormField('clientTestimonial', 'Testimonial client (JSON)', 'json'),
    FormField('featured', 'Recomandat', 'checkbox'),
    FormField('seo', 'SEO (JSON)', 'json'),
    FormField('status', 'Status', 'select', choices=PORTFOLIO_STATUSES),
]

TESTIMONIAL_FIELDS = [
    FormField('name', 'Nume', 'text', True),
    FormField('role', 'Rol', 'text'),
    FormField('content', 'Testimonial', 'textarea', True),
    FormField('rating', 'Nota (1-5)', 'number'),
    FormField('imageUrl', 'URL imagine', 'text'),
    FormField('displayOrder', 'Ordine afisare', 'number'),
]

CAROUSEL_IMAGE_FIELDS = [
    FormField('imageUrl', 'URL imagine', 'text', True),
    FormField('altText', 'Text alternativ', 'text'),
    FormField('displayOrder', 'Ordine afisare', 'number'),
]

FEATURE_CARD_FIELDS = [
    FormField('imageUrl', 'URL imagine', 'text', True),
    FormField('title', 'Titlu', 'text', True),
    FormField('description', 'Descriere', 'textarea'),
    FormField('displayOrder', 'Ordine afisare', 'number'),
]

# Customer records are only triaged from the back office
APPOINTMENT_FIELDS = [
    FormField('status', 'Status', 'select', choices=APPOINTMENT_STATUSES),
    FormField('priority', 'Prioritate', 'select', choices=APPOINTMENT_PRIORITIES),
    FormField('date', 'Data programarii', 'datetime', True),
    FormField('notes', 'Note', 'textarea'),
]

INQUIRY_FIELDS = [
    FormField('status', 'Status', 'select', choices=INQUIRY_STATUSES),
]

# Public forms
CONTACT_FIELDS = [
    FormField('name', 'Nume', 'text', True),
    FormField('email', 'Email', 'text', True),
    FormField('phone', 'Telefon', 'text'),
    FormField('serviceId', 'Serviciu', 'service'),
    FormField('message', 'Mesaj', 'textarea', True),
]

BOOKING_FIELDS = [
    FormField('name', 'Nume', 'text', True),
    FormField('email', 'Email', 'text', True),
    FormField('phone', 'Telefon', 'text', True),
    FormField('serviceId', 'Serviciu', 'service', True),
    FormField('date', 'Data dorita', 'datetime', True),
    FormField('buildingName', 'Cladire / bloc', 'text'),
    FormField('streetName', 'Strada', 'text', True),
    FormField('houseNumber', 'Numar', 'text', True),
    FormField('city', 'Oras', 'text', True),
    FormField('county', 'Judet', 'text', True),
    FormField('postalCode', 'Cod postal', 'text', True),
    FormField('priority', 'Prioritate', 'select', choices=APPOINTMENT_PRIORITIES),
    FormField('notes', 'Detalii suplimentare', 'textarea'),
]


def _lines(text):
    return [line.strip() for line in (text or '').splitlines() if line.strip()]


def parse_form(fields, form, keep_empty=False):
    """
    Convert submitted form data into a camelCase payload.

    Empty optional numbers and JSON blocks come back as None. They are left
    out unless ``keep_empty`` is set, which edits use to clear stored values.
    """
    data = {}
    for field in fields:
        raw = form.get(field.name, '')
        if field.kind == 'checkbox':
            data[field.name] = field.name in form
        elif field.kind == 'lines':
            data[field.name] = _lines(raw)
        elif field.kind == 'pairs':
            items = []
            for line in _lines(raw):
                first, _, second = line.partition('|')
                if not second.strip():
                    raise FormError(f"{field.label}: fiecare linie trebuie sa aiba forma 'a | b'")
                items.append({field.keys[0]: first.strip(), field.keys[1]: second.strip()})
            data[field.name] = items
        elif field.kind == 'json':
            try:
                data[field.name] = json.loads(raw) if raw.strip() else None
            except ValueError:
                raise FormError(f"{field.label}: JSON invalid")
        elif field.kind in ('number', 'service'):
            try:
                data[field.name] = int(raw) if raw.strip() else None
            except ValueError:
                raise FormError(f"{field.label}: trebuie sa fie un numar")
        else:
            data[field.name] = raw.strip()

        if field.required and data[field.name] in (None, '', []):
            raise FormError(f"{field.label} este obligatoriu")

    if keep_empty:
        return data
    return {name: value for name, value in data.items() if value is not None}


def form_values(fields, record):
    """String values for an edit form, from a record's ``to_dict()``."""
    values = {}
    for field in fields:
        value = record.get(field.name)
        if field.kind == 'checkbox':
            values[field.name] = bool(value)
        elif field.kind == 'lines':
            values[field.name] = '\n'.join(value or [])
        elif field.kind == 'pairs':
            values[field.name] = '\n'.join(f"{item.get(field.keys[0], '')} | {item.get(field.keys[1], '')}"
                                           for item in value or [] if isinstance(item, dict))
        elif field.kind == 'json':
            values[field.name] = json.dumps(value, indent=2, ensure_ascii=False) if value else ''
        elif field.kind == 'date':
            values[field.name] = (value or '')[:10]
        elif field.kind == 'datetime':
            values[field.name] = (value or '')[:16]
        else:
            values[field.name] = '' if value is None else str(value)
    return values


def validation_messages(error):
    """Flashable lines from a pydantic ValidationError."""
    messages = []
    for item in error.errors():
        location = '.'.join(str(part) for part in item['loc'])
        messages.append(f"{location}: {item['msg']}" if location else item['msg'])
    return messages


def service_choices():
    from florisifrunze.storage import storage
    return [(service.id, service.name) for service in storage.get_services()]
