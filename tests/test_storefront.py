import os

from florisifrunze.schemas import PortfolioItemIn
from florisifrunze.storage import storage

from conftest import add_service


def add_portfolio_item(app, **overrides):
    with app.app_context():
        data = {'title': 'Curte noua', 'description': 'Amenajare completa', **overrides}
        return storage.create_portfolio_item(PortfolioItemIn.model_validate(data).to_record()).id


def test_home_page_lists_featured_services(app, client):
    add_service(app, name='Tuns gazon')
    add_service(app, name='Ascuns', featured=False)
    page = client.get('/').get_data(as_text=True)
    assert 'Tuns gazon' in page
    assert 'Ascuns' not in page


def test_static_pages(client):
    for path in ('/about', '/services', '/subscriptions', '/blog', '/portfolio', '/contact', '/appointment'):
        assert client.get(path).status_code == 200, path


def test_service_detail_and_missing_service(app, client, service_id):
    add_portfolio_item(app, title='Proiect legat', serviceId=service_id, status='Published')
    page = client.get(f'/services/{service_id}').get_data(as_text=True)
    assert 'Proiect legat' in page
    response = client.get('/services/404')
    assert response.status_code == 404
    assert 'Pagina nu a fost gasita' in response.get_data(as_text=True)


def test_portfolio_detail_counts_views(app, client):
    item_id = add_portfolio_item(app, status='Published', location='Sibiu')
    page = client.get(f'/portfolio/{item_id}').get_data(as_text=True)
    assert 'Sibiu' in page
    assert '1 vizualizari' in page


def test_draft_portfolio_detail_is_hidden(app, client):
    item_id = add_portfolio_item(app)
    assert client.get(f'/portfolio/{item_id}').status_code == 404


def test_contact_form_creates_inquiry(app, client):
    response = client.post('/contact', data={'name': 'Dan', 'email': 'dan@example.com', 'message': 'Salut'},
                           follow_redirects=True)
    assert 'Mesajul tau a fost trimis' in response.get_data(as_text=True)
    with app.app_context():
        inquiries = storage.get_inquiries()
        assert [(i.name, i.status) for i in inquiries] == [('Dan', 'new')]


def test_contact_form_missing_message(app, client):
    response = client.post('/contact', data={'name': 'Dan', 'email': 'dan@example.com'})
    assert response.status_code == 200
    assert 'Mesaj este obligatoriu' in response.get_data(as_text=True)
    with app.app_context():
        assert storage.get_inquiries() == []


def test_appointment_form_books_visit(app, client, service_id):
    response = client.post('/appointment', data={
        'name': 'Ioana', 'email': 'ioana@example.com', 'phone': '0722000111', 'serviceId': str(service_id),
        'date': '2026-11-02T10:00', 'streetName': 'Florilor', 'houseNumber': '1', 'city': 'Cluj',
        'county': 'Cluj', 'postalCode': '400000', 'priority': 'Urgent',
    })
    assert response.status_code == 302
    with app.app_context():
        appointment = storage.get_appointments()[0]
        assert appointment.priority == 'Urgent'
        assert appointment.status == 'Scheduled'


def test_appointment_form_preselects_service(client, service_id):
    page = client.get(f'/appointment?service={service_id}').get_data(as_text=True)
    assert f'<option value="{service_id}" selected>' in page


def test_www_host_redirects_to_bare_domain(client):
    response = client.get('/about?x=1', headers={'Host': 'www.florisifrunze.ro'})
    assert response.status_code == 301
    assert response.headers['Location'] == 'http://florisifrunze.ro/about?x=1'


def test_security_headers(client):
    response = client.get('/')
    assert response.headers['X-Frame-Options'] == 'SAMEORIGIN'
    assert response.headers['X-Content-Type-Options'] == 'nosniff'
    assert "frame-ancestors 'self'" in response.headers['Content-Security-Policy']


def test_background_video_missing(client):
    assert client.get('/gardencut.mp4').status_code == 404


def test_background_video_supports_ranges(app, client):
    directory = os.path.join(app.static_folder, app.config['MEDIA_FOLDER'])
    path = os.path.join(directory, 'gardencut.mp4')
    with open(path, 'wb') as f:
        f.write(b'0123456789')
    try:
        response = client.get('/gardencut.mp4', headers={'Range': 'bytes=2-5'})
        assert response.status_code == 206
        assert response.data == b'2345'
        assert response.headers['Accept-Ranges'] == 'bytes'
        assert response.mimetype == 'video/mp4'
    finally:
        os.remove(path)
