from florisifrunze.storage import storage

from conftest import ADMIN_PASSWORD, add_user


def test_login_page(client):
    assert client.get('/auth/login').status_code == 200


def test_login_with_username_redirects_to_dashboard(client, admin_id):
    response = client.post('/auth/login', data={'identifier': 'gradinar', 'password': ADMIN_PASSWORD})
    assert response.status_code == 302
    assert response.headers['Location'].endswith('/admin/dashboard')


def test_login_follows_local_next_only(client, admin_id):
    response = client.post('/auth/login?next=/admin/blog/',
                           data={'identifier': 'gradinar@example.com', 'password': ADMIN_PASSWORD})
    assert response.headers['Location'].endswith('/admin/blog/')

    client.get('/auth/logout')
    response = client.post('/auth/login?next=//evil.example.com/',
                           data={'identifier': 'gradinar', 'password': ADMIN_PASSWORD})
    assert response.headers['Location'].endswith('/admin/dashboard')


def test_bad_credentials(client, admin_id):
    response = client.post('/auth/login', data={'identifier': 'gradinar', 'password': 'Gresit123'})
    assert response.status_code == 200
    assert 'Date de autentificare incorecte.' in response.get_data(as_text=True)


def test_logout(admin_client):
    response = admin_client.get('/auth/logout')
    assert response.status_code == 302
    assert admin_client.get('/admin/dashboard').status_code == 302


def test_register_closed_by_default(client):
    response = client.get('/auth/register')
    assert response.status_code == 302
    assert '/auth/login' in response.headers['Location']


def test_register_creates_admin(app, client):
    with app.app_context():
        storage.set_admin_register_status(True)
    response = client.post('/auth/register', data={
        'name': 'Maria', 'email': 'maria@example.com', 'username': 'maria',
        'password': 'Parola123', 'confirm_password': 'Parola123',
    })
    assert response.status_code == 302
    with app.app_context():
        assert storage.get_user_by_username('maria').role == 'admin'


def test_register_password_mismatch(app, client):
    with app.app_context():
        storage.set_admin_register_status(True)
    response = client.post('/auth/register', data={
        'name': 'Maria', 'email': 'maria@example.com', 'username': 'maria',
        'password': 'Parola123', 'confirm_password': 'Parola124',
    })
    assert 'Parolele nu coincid.' in response.get_data(as_text=True)


def test_register_duplicate_email(app, client):
    add_user(app, 'maria', 'admin')
    with app.app_context():
        storage.set_admin_register_status(True)
    response = client.post('/auth/register', data={
        'name': 'Maria', 'email': 'maria@example.com', 'username': 'alta',
        'password': 'Parola123', 'confirm_password': 'Parola123',
    })
    assert 'Acest email este deja inregistrat.' in response.get_data(as_text=True)
