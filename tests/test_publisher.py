import pytest

from florisifrunze.publisher import BlogPublisher, PublisherError, template_post
from florisifrunze.schemas import BlogPostIn


class FakeResponse:
    def __init__(self, status_code, body):
        self.status_code = status_code
        self.body = body
        self.text = str(body)

    def json(self):
        return self.body


class FakeSession:
    def __init__(self, *responses):
        self.headers = {}
        self.responses = list(responses)
        self.calls = []

    def _respond(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs.get('json')))
        return self.responses.pop(0)

    def post(self, url, **kwargs):
        return self._respond('POST', url, **kwargs)

    def put(self, url, **kwargs):
        return self._respond('PUT', url, **kwargs)

    def delete(self, url, **kwargs):
        return self._respond('DELETE', url, **kwargs)


LOGIN_OK = FakeResponse(200, {'success': True, 'token': 'abc'})


def publisher(*responses):
    session = FakeSession(*responses)
    return BlogPublisher('http://site.test/', 'admin@example.com', 'Parola123', session=session), session


def test_authenticate_sets_bearer_header():
    blog, session = publisher(LOGIN_OK)
    assert blog.authenticate() is True
    assert session.headers['Authorization'] == 'Bearer abc'
    assert session.calls[0] == ('POST', 'http://site.test/api/admin/login',
                                {'email': 'admin@example.com', 'password': 'Parola123'})


def test_authenticate_failure():
    blog, session = publisher(FakeResponse(401, {'success': False, 'message': 'Invalid credentials'}))
    assert blog.authenticate() is False
    assert 'Authorization' not in session.headers


def test_create_derives_content_from_sections():
    blog, session = publisher(LOGIN_OK, FakeResponse(201, {'success': True, 'blogPost': {'id': 7, 'title': 'T'}}))
    created = blog.create_blog_post({
        'title': 'T', 'excerpt': 'E',
        'sections': [BlogPublisher.heading_section('Titlu'), BlogPublisher.text_section('Paragraf')],
    })
    assert created == {'id': 7, 'title': 'T'}
    method, url, payload = session.calls[1]
    assert (method, url) == ('POST', 'http://site.test/api/admin/blog')
    assert payload['content'] == 'Titlu\n\nParagraf'
    assert payload['tags'] == []
    assert payload['publishedAt']


def test_create_without_credentials_fails():
    blog, _ = publisher(FakeResponse(401, {'message': 'Invalid credentials'}))
    with pytest.raises(PublisherError):
        blog.create_blog_post({'title': 'T', 'excerpt': 'E', 'content': 'C'})


def test_create_reports_server_errors():
    blog, _ = publisher(LOGIN_OK, FakeResponse(400, {'success': False, 'message': 'Validation error'}))
    with pytest.raises(PublisherError, match='Validation error'):
        blog.create_blog_post({'title': 'T', 'excerpt': 'E', 'content': 'C'})


def test_update_and_delete():
    blog, session = publisher(LOGIN_OK, FakeResponse(200, {'blogPost': {'id': 3, 'title': 'Nou'}}),
                              FakeResponse(200, {'success': True}))
    blog.update_blog_post(3, {'sections': [BlogPublisher.text_section('Doar text')]})
    assert session.calls[1][0:2] == ('PUT', 'http://site.test/api/admin/blog/3')
    assert session.calls[1][2]['content'] == 'Doar text'
    assert blog.delete_blog_post(3) is True
    assert session.calls[2][0:2] == ('DELETE', 'http://site.test/api/admin/blog/3')


def test_files(tmp_path):
    path = tmp_path / 'posts' / 'post.json'
    BlogPublisher.save_blog_to_file(template_post(), str(path))
    assert BlogPublisher.load_blog_from_file(str(path))['title'] == template_post()['title']
    with pytest.raises(PublisherError):
        BlogPublisher.load_blog_from_file(str(tmp_path / 'missing.json'))


def test_template_post_is_a_valid_blog_post():
    post = BlogPostIn.model_validate(template_post())
    assert post.content.startswith('Introducere')
    assert [section.type for section in post.sections] == ['heading', 'text', 'image', 'heading', 'list', 'quote']
