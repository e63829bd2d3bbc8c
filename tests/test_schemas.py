from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from florisifrunze.schemas import (AppointmentIn, BlogPostIn, InquiryIn, LoginIn, PortfolioItemIn, RegisterIn,
                                   ServiceIn, SubscriptionIn, combined_content, password_problem, valid_email,
                                   validate_update)


BOOKING = {
    'name': 'Ioana Marin',
    'email': 'ioana@example.com',
    'phone': '0722000111',
    'streetName': 'Strada Florilor',
    'houseNumber': '12',
    'city': 'Cluj-Napoca',
    'county': 'Cluj',
    'postalCode': '400000',
    'serviceId': 1,
    'date': '2026-11-02T10:00:00',
}


def test_service_accepts_camel_case_and_maps_featured():
    record = ServiceIn.model_validate({
        'name': 'Plantari', 'description': 'Plantam arbusti', 'shortDesc': 'Plantari', 'price': '800 RON',
        'featured': True, 'imageUrl': '  ', 'faqs': [{'question': 'Cand?', 'answer': 'Primavara'}],
    }).to_record()
    assert record['is_featured'] is True
    assert record['short_desc'] == 'Plantari'
    assert record['image_url'] is None
    assert record['faqs'] == [{'question': 'Cand?', 'answer': 'Primavara'}]


def test_service_requires_name():
    with pytest.raises(ValidationError):
        ServiceIn.model_validate({'description': 'x', 'shortDesc': 'x', 'price': '1'})


def test_subscription_color_is_validated_and_uppercased():
    sub = SubscriptionIn.model_validate({'name': 'Basic', 'price': '199 RON', 'color': '#4caf50'})
    assert sub.color == '#4CAF50'
    assert sub.description == ''
    with pytest.raises(ValidationError):
        SubscriptionIn.model_validate({'name': 'Basic', 'price': '199 RON', 'color': 'green'})


def test_subscription_display_order_cannot_be_negative():
    with pytest.raises(ValidationError):
        SubscriptionIn.model_validate({'name': 'Basic', 'price': '199 RON', 'displayOrder': -1})


def test_appointment_defaults():
    appointment = AppointmentIn.model_validate(BOOKING)
    assert appointment.status == 'Scheduled'
    assert appointment.priority == 'Normal'
    assert appointment.building_name is None
    assert appointment.date == datetime(2026, 11, 2, 10, 0)


def test_appointment_rejects_unknown_priority_and_bad_email():
    with pytest.raises(ValidationError):
        AppointmentIn.model_validate({**BOOKING, 'priority': 'Whenever'})
    with pytest.raises(ValidationError):
        AppointmentIn.model_validate({**BOOKING, 'email': 'not-an-email'})


def test_appointment_date_with_timezone_is_stored_naive():
    appointment = AppointmentIn.model_validate({**BOOKING, 'date': '2026-11-02T10:00:00Z'})
    expected = datetime(2026, 11, 2, 10, 0, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
    assert appointment.date.tzinfo is None
    assert appointment.date == expected


def test_inquiry_blank_service_becomes_none():
    inquiry = InquiryIn.model_validate({'name': 'Dan', 'email': 'dan@example.com', 'message': 'Salut',
                                        'serviceId': ''})
    assert inquiry.service_id is None
    assert inquiry.status == 'new'


def test_blog_content_is_derived_from_text_and_heading_sections():
    post = BlogPostIn.model_validate({
        'title': 'Compost', 'excerpt': 'Despre compost',
        'sections': [
            {'type': 'heading', 'content': 'Inceput'},
            {'type': 'text', 'content': 'Resturile din bucatarie devin ingrasamant.'},
            {'type': 'quote', 'content': 'Hraneste solul.'},
            {'type': 'list', 'items': ['Frunze', 'Coji']},
        ],
    })
    assert post.content == 'Inceput\n\nResturile din bucatarie devin ingrasamant.'
    assert post.sections[0].level == 2
    assert isinstance(post.published_at, datetime)


def test_blog_needs_content_or_text_sections():
    with pytest.raises(ValidationError):
        BlogPostIn.model_validate({'title': 'Gol', 'excerpt': 'Nimic',
                                   'sections': [{'type': 'list', 'items': ['a']}]})


def test_blog_section_rules_by_type():
    with pytest.raises(ValidationError):
        BlogPostIn.model_validate({'title': 'T', 'excerpt': 'E', 'content': 'C',
                                   'sections': [{'type': 'image'}]})
    with pytest.raises(ValidationError):
        BlogPostIn.model_validate({'title': 'T', 'excerpt': 'E', 'content': 'C',
                                   'sections': [{'type': 'video', 'content': 'x'}]})


def test_blog_tags_are_trimmed():
    post = BlogPostIn.model_validate({'title': 'T', 'excerpt': 'E', 'content': 'C', 'tags': [' flori ', '', '  ']})
    assert post.tags == ['flori']


def test_combined_content_accepts_models_and_dicts():
    sections = [{'type': 'text', 'content': 'Unu'}, {'type': 'image', 'imageUrl': '/a.jpg'},
                {'type': 'heading', 'content': 'Doi'}]
    assert combined_content(sections) == 'Unu\n\nDoi'
    assert combined_content([]) == ''


def test_portfolio_defaults_and_nested_parts():
    record = PortfolioItemIn.model_validate({
        'title': 'Curte', 'description': 'Amenajare', 'completionDate': '2024-05-15',
        'images': [{'before': '/b.jpg', 'after': '/a.jpg', 'richDescription': 'Detalii'}],
        'clientTestimonial': {'clientName': 'Ana', 'comment': 'Super', 'displayPermission': True},
    }).to_record()
    assert record['status'] == 'Draft'
    assert record['view_count'] == 0
    assert record['seo'] == {'metaTitle': '', 'metaDescription': '', 'tags': []}
    assert record['images'][0]['richDescription'] == 'Detalii'
    assert record['client_testimonial']['clientName'] == 'Ana'
    assert record['completion_date'] == datetime(2024, 5, 15)


def test_portfolio_rejects_unknown_status():
    with pytest.raises(ValidationError):
        PortfolioItemIn.model_validate({'title': 'T', 'description': 'D', 'status': 'Archived'})


@pytest.mark.parametrize('password, problem', [
    ('Scurt1', 'Password must be at least 8 characters long'),
    ('FARALITEREMICI1', 'Password must contain at least one lowercase letter'),
    ('faramajuscule1', 'Password must contain at least one uppercase letter'),
    ('FaraCifreAici', 'Password must contain at least one number'),
    ('Gradina123', None),
])
def test_password_rules(password, problem):
    assert password_problem(password) == problem


def test_register_rejects_weak_password():
    with pytest.raises(ValidationError):
        RegisterIn.model_validate({'name': 'A', 'email': 'a@example.com', 'username': 'ana', 'password': 'weak'})


def test_login_needs_an_identifier():
    with pytest.raises(ValidationError):
        LoginIn.model_validate({'password': 'x'})
    assert LoginIn.model_validate({'username': 'admin', 'password': 'x'}).identifier == 'admin'


def test_valid_email():
    assert valid_email('ana@example.com')
    assert not valid_email('ana@example')
    assert not valid_email(None)


def test_validate_update_merges_changes_over_current_values():
    current = {'name': 'Basic', 'price': '199 RON', 'color': '#4CAF50', 'displayOrder': 1}
    updated = validate_update(SubscriptionIn, current, {'price': '249 RON'})
    assert updated.price == '249 RON'
    assert updated.color == '#4CAF50'
    assert updated.display_order == 1


def test_validate_update_still_rejects_invalid_results():
    with pytest.raises(ValidationError):
        validate_update(SubscriptionIn, {'name': 'Basic', 'price': '199 RON'}, {'name': ''})


def test_published_at_defaults_to_now():
    post = BlogPostIn.model_validate({'title': 'T', 'excerpt': 'E', 'content': 'C', 'publishedAt': None})
    assert datetime.now() - post.published_at < timedelta(minutes=1)


def test_validate_update_none_clears_optional_fields_and_restores_defaults():
    current = {'title': 'Curte', 'description': 'D', 'serviceId': 3, 'images': [{'before': '/b', 'after': '/a'}],
               'clientTestimonial': {'clientName': 'Ion'}}
    updated = validate_update(PortfolioItemIn, current, {'serviceId': None, 'images': None,
                                                         'clientTestimonial': None})
    assert updated.service_id is None
    assert updated.images == []
    assert updated.client_testimonial is None


def test_validate_update_none_on_required_field_fails():
    with pytest.raises(ValidationError):
        validate_update(SubscriptionIn, {'name': 'Basic', 'price': '199 RON'}, {'price': None})


def test_passwords_keep_surrounding_spaces():
    login = LoginIn.model_validate({'email': ' ana@example.com ', 'password': ' Parola123 '})
    assert login.email == 'ana@example.com'
    assert login.password == ' Parola123 '
    registration = RegisterIn.model_validate({'name': ' Ana ', 'email': 'ana@example.com', 'username': ' ana ',
                                              'password': ' Parola123 '})
    assert registration.username == 'ana'
    assert registration.password == ' Parola123 '
