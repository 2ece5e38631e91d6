"""
Shared fixtures: an app with per-test storage directories and test clients.
"""
import pytest

from cms import create_app
from cms.routes.shared import SESSION_USER_KEY


@pytest.fixture
def app(tmp_path):
    app = create_app('testing', {
        'DATA_PATH': tmp_path / 'data',
        'USERS_FILE': tmp_path / 'users.json',
        'IMAGE_FOLDER': tmp_path / 'images',
    })
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def data_path(app):
    return app.config['DATA_PATH']


@pytest.fixture
def history_path(app):
    return app.config['HISTORY_PATH']


@pytest.fixture
def create_document(data_path):
    """Write a document straight to the data directory."""
    def _create(name, content=''):
        path = data_path / name
        path.write_text(content, encoding='utf-8')
        return path
    return _create


@pytest.fixture
def signed_in(client):
    """Client whose session carries a signed-in user."""
    with client.session_transaction() as sess:
        sess[SESSION_USER_KEY] = 'admin'
    return client


@pytest.fixture
def flashed(client):
    """Read the pending flash messages from the client's session."""
    def _flashed():
        with client.session_transaction() as sess:
            return [message for _, message in sess.get('_flashes', [])]
    return _flashed
