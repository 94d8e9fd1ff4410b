"""
Test configuration and fixtures.

Every test gets a fresh app on an in-memory SQLite database with temporary
upload and log folders. The panel's ApiClient is wired to the Flask test
client through FlaskSession, so panel tests hit the real endpoints.
"""
import io
import os
from urllib.parse import urlsplit

import pytest

from app import create_app
from data.seed_data import seed_database
from models import db, Page, Permission, Role, User
from panel.http import ApiClient, Upload
from panel.session import AuthSession

API = '/api/v1'
BASE_URL = f'http://localhost{API}'

ADMIN_EMAIL = 'admin@example.com'
ADMIN_PASSWORD = 'admin-password'
EDITOR_EMAIL = 'editor@example.com'
EDITOR_PASSWORD = 'editor-password'

PNG_BYTES = b'\x89PNG\r\n\x1a\n' + b'\x00' * 32
PDF_BYTES = b'%PDF-1.4\n%test\n'


class FlaskResponse:
    """The slice of requests.Response that ApiClient reads."""

    def __init__(self, response):
        self._response = response
        self.status_code = response.status_code

    def json(self):
        data = self._response.get_json(silent=True)
        if data is None:
            raise ValueError('Response body is not JSON')
        return data


class FlaskSession:
    """Stands in for requests.Session, sending every call through the test client."""

    def __init__(self, client):
        self.client = client
        self.calls = []

    def request(self, method, url, json=None, data=None, files=None, headers=None, timeout=None):
        parts = urlsplit(url)
        path = parts.path + (f'?{parts.query}' if parts.query else '')
        self.calls.append((method, parts.path))

        kwargs = {'method': method, 'headers': headers or {}}
        if json is not None:
            kwargs['json'] = json
        if data is not None or files:
            # requests leaves out None values and sends the rest as strings
            form = {key: str(value) for key, value in (data or {}).items() if value is not None}
            for field, (filename, content, content_type) in files or []:
                form.setdefault(field, []).append((io.BytesIO(content), filename, content_type))
            kwargs['data'] = form
            kwargs['content_type'] = 'multipart/form-data'
        return FlaskResponse(self.client.open(path, **kwargs))


class CannedResponse:
    status_code = 200

    def __init__(self, body):
        self.body = body

    def json(self):
        return self.body


class CannedSession:
    """Answers every request with the same 200 body."""

    def __init__(self, body):
        self.body = body

    def request(self, *args, **kwargs):
        return CannedResponse(self.body)


class RecordingNotifier:
    """Collects notifications as (level, message) pairs."""

    def __init__(self):
        self.messages = []

    def success(self, message):
        self.messages.append(('success', message))

    def info(self, message):
        self.messages.append(('info', message))

    def warning(self, message):
        self.messages.append(('warning', message))

    def error(self, message):
        self.messages.append(('error', message))

    def of(self, level):
        return [message for lvl, message in self.messages if lvl == level]


@pytest.fixture
def app(tmp_path):
    app = create_app({
        'TESTING': True,
        'SECRET_KEY': 'test-secret-key',
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
        'UPLOAD_FOLDER': str(tmp_path / 'uploads'),
        'LOG_DIR': str(tmp_path / 'logs'),
        'ENV_NAME': 'test',
    })

    with app.app_context():
        seed_database(ADMIN_EMAIL, ADMIN_PASSWORD, admin_name='Admin User')

        # An editor on the Registered role: may view and add gallery items only
        registered = Role.query.filter_by(name='Registered').first()
        editor = User(name='Editor', email=EDITOR_EMAIL, role_id=registered.id, created_by='System')
        editor.set_password(EDITOR_PASSWORD)
        db.session.add(editor)
        gallery_page = Page.query.filter_by(url='/gallery').first()
        db.session.add(Permission(role_id=registered.id, page_id=gallery_page.id,
                                  can_create=True, can_read=True, created_by='System'))
        db.session.commit()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def login_token(client, email, password):
    response = client.post(f'{API}/login', json={'email': email, 'password': password})
    assert response.status_code == 200, response.get_json()
    return response.get_json()['token']


@pytest.fixture
def admin_headers(client):
    return {'Authorization': f'Bearer {login_token(client, ADMIN_EMAIL, ADMIN_PASSWORD)}'}


@pytest.fixture
def editor_headers(client):
    return {'Authorization': f'Bearer {login_token(client, EDITOR_EMAIL, EDITOR_PASSWORD)}'}


def image(name='photo.png'):
    """A file tuple for test client multipart uploads."""
    return (io.BytesIO(PNG_BYTES), name, 'image/png')


def document(name='cv.pdf'):
    return (io.BytesIO(PDF_BYTES), name, 'application/pdf')


def stored_path(app, url):
    """Filesystem path of an upload given the URL the API returned."""
    public_id = url.split('/uploads/', 1)[1]
    return f"{app.config['UPLOAD_FOLDER']}/{public_id}"


def stored_files(app):
    """Every file currently under the upload folder."""
    return [os.path.join(root, name)
            for root, _, names in os.walk(app.config['UPLOAD_FOLDER']) for name in names]


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def http_session(client):
    return FlaskSession(client)


@pytest.fixture
def api_client(http_session):
    return ApiClient(base_url=BASE_URL, session=http_session)


@pytest.fixture
def admin_session(api_client, notifier):
    session = AuthSession(api_client, notifier)
    assert session.login(ADMIN_EMAIL, ADMIN_PASSWORD)
    return session


@pytest.fixture
def editor_session(api_client, notifier):
    session = AuthSession(api_client, notifier)
    assert session.login(EDITOR_EMAIL, EDITOR_PASSWORD)
    return session


@pytest.fixture
def png_upload():
    return Upload('photo.png', PNG_BYTES, 'image/png')


@pytest.fixture
def pdf_upload():
    return Upload('cv.pdf', PDF_BYTES, 'application/pdf')
