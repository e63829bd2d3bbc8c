import json
import re


def test_service_worker_script(client):
    response = client.get('/sw.js')
    assert response.status_code == 200
    assert response.headers['Content-Type'].startswith('application/javascript')
    assert response.headers['Cache-Control'] == 'no-cache'


def test_cache_names_follow_the_configured_version(client):
    script = client.get('/sw.js').get_data(as_text=True)
    assert 'const CACHE_VERSION = "ff-test";' in script


def test_only_allow_listed_api_paths_are_cached(client):
    script = client.get('/sw.js').get_data(as_text=True)
    match = re.search(r'const CACHEABLE_APIS = (\[.*?\]);', script)
    assert json.loads(match.group(1)) == ['/api/services', '/api/carousel-images', '/api/feature-cards',
                                          '/api/testimonials']


def test_old_caches_are_dropped_on_activate(client):
    script = client.get('/sw.js').get_data(as_text=True)
    assert "addEventListener('activate'" in script
    assert 'caches.delete' in script
