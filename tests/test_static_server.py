"""
Tests for the SPA static file server.
"""
import json
import os

import pytest

import static_server
from static_server import (
    CORS_HEADERS,
    ForbiddenPath,
    StaticSite,
    content_type_for,
    create_static_app,
)

INDEX_HTML = b'<!doctype html><div id="root"></div>'


@pytest.fixture
def site_dir(tmp_path):
    root = tmp_path / 'frontend'
    (root / 'assets').mkdir(parents=True)
    (root / 'index.html').write_bytes(INDEX_HTML)
    (root / 'assets' / 'app.js').write_text('console.log(1)')
    (root / 'assets' / 'logo.png').write_bytes(b'\x89PNG')
    (root / 'src.tsx').write_text('export {}')
    (root / 'data.bin').write_bytes(b'\x00\x01')
    (tmp_path / 'secret.txt').write_text('top secret')
    (tmp_path / 'config.json').write_text(json.dumps({
        'current_environment': 'development',
        'development': {
            'backend': {'protocol': 'http', 'host': 'localhost', 'port': 4000},
            'frontend': {'protocol': 'http', 'host': 'localhost', 'port': 5173},
        },
    }))
    return root


@pytest.fixture
def static_client(site_dir):
    return create_static_app(site_dir).test_client()


@pytest.mark.unit
@pytest.mark.parametrize('name, expected', [
    ('index.html', 'text/html'),
    ('app.JS', 'text/javascript'),
    ('style.css', 'text/css'),
    ('config.json', 'application/json'),
    ('a.png', 'image/png'),
    ('a.jpg', 'image/jpeg'),
    ('a.gif', 'image/gif'),
    ('a.svg', 'image/svg+xml'),
    ('favicon.ico', 'image/x-icon'),
    ('App.tsx', 'text/javascript'),
    ('api.ts', 'text/javascript'),
    ('font.woff2', 'application/octet-stream'),
    ('LICENSE', 'application/octet-stream'),
])
def test_content_type_table(name, expected):
    assert content_type_for(name) == expected


@pytest.mark.integration
def test_root_serves_index(static_client):
    response = static_client.get('/')
    assert response.status_code == 200
    assert response.data == INDEX_HTML
    assert response.headers['Content-Type'] == 'text/html'


@pytest.mark.integration
def test_serves_file_with_mime_type(static_client):
    response = static_client.get('/assets/app.js?v=3')
    assert response.status_code == 200
    assert response.data == b'console.log(1)'
    assert response.headers['Content-Type'] == 'text/javascript'

    assert static_client.get('/src.tsx').headers['Content-Type'] == 'text/javascript'
    assert static_client.get('/data.bin').headers['Content-Type'] == 'application/octet-stream'


@pytest.mark.integration
def test_cors_headers_on_every_response(static_client):
    for path in ('/', '/assets/logo.png', '/no/existe', '/config.json'):
        response = static_client.get(path)
        for header, value in CORS_HEADERS.items():
            assert response.headers[header] == value


@pytest.mark.integration
def test_options_returns_empty_200(static_client):
    response = static_client.open('/cualquier/ruta', method='OPTIONS')
    assert response.status_code == 200
    assert response.data == b''
    assert response.headers['Access-Control-Allow-Origin'] == '*'


@pytest.mark.integration
def test_missing_file_falls_back_to_index(static_client):
    response = static_client.get('/dashboard/semana')
    assert response.status_code == 200
    assert response.data == INDEX_HTML
    assert response.headers['Content-Type'] == 'text/html'


@pytest.mark.integration
def test_config_json_served_from_parent(static_client):
    response = static_client.get('/config.json')
    assert response.status_code == 200
    assert response.headers['Content-Type'] == 'application/json'
    assert response.get_json()['development']['backend']['port'] == 4000


@pytest.mark.integration
def test_symlink_outside_root_is_forbidden(site_dir, static_client):
    os.symlink(site_dir.parent / 'secret.txt', site_dir / 'fuga.txt')
    response = static_client.get('/fuga.txt')
    assert response.status_code == 403
    assert response.data == b'Forbidden'
    assert response.headers['Access-Control-Allow-Origin'] == '*'


@pytest.mark.integration
def test_dot_dot_path_is_forbidden(static_client):
    response = static_client.get('/../secret.txt')
    assert b'top secret' not in response.data
    assert response.status_code == 403 or response.data == INDEX_HTML


@pytest.mark.unit
@pytest.mark.parametrize('path', ['../secret.txt', '/assets/../../secret.txt', '..'])
def test_resolve_rejects_traversal(site_dir, path):
    with pytest.raises(ForbiddenPath):
        StaticSite(site_dir).resolve(path)


@pytest.mark.unit
def test_resolve_allows_dot_dot_inside_root(site_dir):
    resolved = StaticSite(site_dir).resolve('assets/../index.html')
    assert resolved == os.path.realpath(site_dir / 'index.html')


@pytest.mark.unit
def test_resolve_config_json_escape(site_dir):
    expected = os.path.join(os.path.realpath(site_dir.parent), 'config.json')
    assert StaticSite(site_dir).resolve('/config.json') == expected


@pytest.mark.integration
def test_directory_is_server_error(static_client):
    response = static_client.get('/assets')
    assert response.status_code == 500
    assert response.data == b'Server Error: EISDIR'


@pytest.mark.integration
def test_missing_index_is_server_error(site_dir):
    (site_dir / 'index.html').unlink()
    response = create_static_app(site_dir).test_client().get('/')
    assert response.status_code == 500
    assert response.data == b'Server Error: ENOENT'


@pytest.mark.unit
def test_backend_port_from_config(site_dir):
    assert create_static_app(site_dir).config['BACKEND_PORT'] == 4000


@pytest.mark.unit
def test_backend_port_defaults_without_config(site_dir):
    (site_dir.parent / 'config.json').unlink()
    assert create_static_app(site_dir).config['BACKEND_PORT'] == 3002


@pytest.mark.unit
def test_post_serves_like_get(static_client):
    response = static_client.post('/assets/app.js')
    assert response.status_code == 200
    assert response.data == b'console.log(1)'


@pytest.mark.unit
def test_explicit_arguments_skip_environment(site_dir, monkeypatch):
    def no_env():
        raise AssertionError('environment should not be read')

    monkeypatch.setattr(static_server.StaticServerSettings, 'from_env', no_env)
    app = create_static_app(site_dir, site_dir.parent / 'config.json')
    assert app.config['STATIC_SITE'].root == os.path.realpath(site_dir)
    assert app.config['BACKEND_PORT'] == 4000


@pytest.mark.unit
def test_missing_config_path_taken_from_environment(site_dir, tmp_path, monkeypatch):
    other = tmp_path / 'otro.json'
    other.write_text(json.dumps({
        'development': {
            'backend': {'protocol': 'http', 'host': 'localhost', 'port': 4100},
            'frontend': {'protocol': 'http', 'host': 'localhost', 'port': 5173},
        },
    }))
    monkeypatch.setenv('CONFIG_JSON', str(other))
    app = create_static_app(site_dir)
    assert app.config['BACKEND_PORT'] == 4100
