import os

# config.Settings requires a secret key at import time
os.environ.setdefault('SECRET_KEY', 'test-secret-key')

import pytest
from werkzeug.security import generate_password_hash

from florisifrunze import create_app, db
from florisifrunze.schemas import ServiceIn
from florisifrunze.storage import storage
from florisifrunze.tokens import build_token

ADMIN_PASSWORD = 'Gradina123'


@pytest.fixture
def app():
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SECRET_KEY': 'test-secret-key',
        'CACHE_VERSION': 'ff-test',
        'SITE_URL': 'http://testserver',
        'DEFAULT_ADMIN': {
            'name': 'Admin User',
            'email': 'admin@example.com',
            'username': 'admin',
            'password': ADMIN_PASSWORD,
        },
        'CLOUDINARY': {'cloud_name': '', 'api_key': '', 'api_secret': ''},
    })
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def ctx(app):
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


def add_user(app, username, role, email=None):
    with app.app_context():
        user = storage.create_user({
            'name': username.title(),
            'email': email or f'{username}@example.com',
            'username': username,
            'password_hash': generate_password_hash(ADMIN_PASSWORD),
            'role': role,
        })
        return user.id


@pytest.fixture
def admin_id(app):
    return add_user(app, 'gradinar', 'admin')


@pytest.fixture
def admin_headers(app, admin_id):
    with app.app_context():
        token = build_token(storage.get_user(admin_id))
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def staff_headers(app):
    user_id = add_user(app, 'ajutor', 'staff')
    with app.app_context():
        token = build_token(storage.get_user(user_id))
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def admin_client(client, admin_id):
    response = client.post('/auth/login', data={'identifier': 'gradinar', 'password': ADMIN_PASSWORD})
    assert response.status_code == 302
    return client


SERVICE = {
    'name': 'Tuns gazon',
    'description': 'Tundem gazonul si strangem resturile vegetale.',
    'shortDesc': 'Gazon ingrijit',
    'price': '150 RON',
    'featured': True,
}


def add_service(app, **overrides):
    with app.app_context():
        return storage.create_service(ServiceIn.model_validate({**SERVICE, **overrides}).to_record()).id


@pytest.fixture
def service_id(app):
    return add_service(app)
