from datetime import datetime

import pytest

from florisifrunze.schemas import CarouselImageIn, FeatureCardIn, PortfolioItemIn, ServiceIn
from florisifrunze.storage import storage

from conftest import SERVICE


def service(**overrides):
    return storage.create_service(ServiceIn.model_validate({**SERVICE, **overrides}).to_record())


def portfolio_item(**overrides):
    data = {'title': 'Curte', 'description': 'Amenajare completa', **overrides}
    return storage.create_portfolio_item(PortfolioItemIn.model_validate(data).to_record())


def carousel(count):
    return [storage.create_carousel_image(CarouselImageIn.model_validate(
        {'imageUrl': f'/img/{n}.jpg', 'displayOrder': n}).to_record()) for n in range(1, count + 1)]


def test_create_get_update_delete(ctx):
    created = service()
    assert created.id is not None
    assert storage.get_service(created.id).name == 'Tuns gazon'

    updated = storage.update_service(created.id, {'price': '175 RON'})
    assert updated.price == '175 RON'

    assert storage.delete_service(created.id) is True
    assert storage.get_service(created.id) is None


def test_missing_records(ctx):
    assert storage.get_service(999) is None
    assert storage.update_service(999, {'name': 'x'}) is None
    assert storage.delete_service(999) is False


def test_featured_services(ctx):
    service(name='Recomandat')
    service(name='Obisnuit', featured=False)
    assert [s.name for s in storage.get_featured_services()] == ['Recomandat']


def test_published_portfolio_puts_featured_first(ctx):
    portfolio_item(title='Ciorna')
    portfolio_item(title='Simplu', status='Published')
    portfolio_item(title='Vedeta', status='Published', featured=True)
    assert [item.title for item in storage.get_published_portfolio_items()] == ['Vedeta', 'Simplu']
    assert len(storage.get_portfolio_items()) == 3


def test_portfolio_by_service_only_published(ctx):
    garden = service()
    portfolio_item(title='Publicat', serviceId=garden.id, status='Published')
    portfolio_item(title='Ciorna', serviceId=garden.id)
    portfolio_item(title='Altul', status='Published')
    assert [item.title for item in storage.get_portfolio_items_by_service(garden.id)] == ['Publicat']


def test_increment_view_count(ctx):
    item = portfolio_item(status='Published')
    storage.increment_portfolio_view_count(item.id)
    assert storage.increment_portfolio_view_count(item.id).view_count == 2
    assert storage.increment_portfolio_view_count(999) is None


def test_user_lookup_by_email_ignores_case(ctx):
    storage.create_user({'name': 'Ana', 'email': 'Ana@Example.com', 'username': 'ana',
                         'password_hash': 'x', 'role': 'admin'})
    assert storage.get_user_by_email('ana@example.com').username == 'ana'
    assert storage.get_user_by_username('ana').email == 'Ana@Example.com'
    assert storage.get_user_by_email('') is None


def test_admin_register_flag(ctx):
    assert storage.get_admin_register_status() is False
    storage.set_admin_register_status(True)
    assert storage.get_admin_register_status() is True
    storage.set_admin_register_status(False)
    assert storage.get_admin_register_status() is False


def test_lists_are_ordered(ctx):
    storage.create_feature_card(FeatureCardIn.model_validate(
        {'imageUrl': '/b.jpg', 'title': 'Al doilea', 'displayOrder': 2}).to_record())
    storage.create_feature_card(FeatureCardIn.model_validate(
        {'imageUrl': '/a.jpg', 'title': 'Primul', 'displayOrder': 1}).to_record())
    assert [card.title for card in storage.get_feature_cards()] == ['Primul', 'Al doilea']


def test_reorder_moves_and_renumbers(ctx):
    first, second, third = carousel(3)
    assert storage.reorder_carousel_image(third.id, 'up') is True
    assert [image.id for image in storage.get_carousel_images()] == [first.id, third.id, second.id]
    assert [image.display_order for image in storage.get_carousel_images()] == [1, 2, 3]


@pytest.mark.parametrize('position, direction', [(0, 'up'), (2, 'down'), (1, 'sideways')])
def test_reorder_refuses_impossible_moves(ctx, position, direction):
    images = carousel(3)
    assert storage.reorder_carousel_image(images[position].id, direction) is False


def test_reorder_unknown_id(ctx):
    carousel(2)
    assert storage.reorder_carousel_image(999, 'up') is False


def test_blog_posts_newest_first(ctx):
    storage.create_blog_post({'title': 'Vechi', 'excerpt': 'e', 'content': 'c', 'sections': [], 'tags': [],
                              'image_url': None, 'published_at': datetime(2024, 1, 1)})
    storage.create_blog_post({'title': 'Nou', 'excerpt': 'e', 'content': 'c', 'sections': [], 'tags': [],
                              'image_url': None, 'published_at': datetime(2025, 1, 1)})
    assert [post.title for post in storage.get_blog_posts()] == ['Nou', 'Vechi']


def test_check_connection(ctx):
    assert storage.check_connection() is True
