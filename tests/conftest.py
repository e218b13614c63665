# tests/conftest.py
import io
from datetime import datetime, timezone

import pytest

from filevault import create_app, db
from filevault.config import TestingConfig


class InMemoryStorage:
    """Object store double with the same interface as S3Storage"""

    def __init__(self):
        self.objects = {}
        self.visibility = {}
        self.fail_on = set()

    def _maybe_fail(self, operation):
        if operation in self.fail_on:
            raise RuntimeError(f"storage {operation} failed")

    def put(self, key, stream, content_type=None):
        self._maybe_fail('put')
        self.objects[key] = {
            'body': stream.read(),
            'content_type': content_type,
            'last_modified': datetime.now(timezone.utc),
        }
        self.visibility[key] = 'private'
        return key

    def set_visibility(self, key, visibility):
        self._maybe_fail('set_visibility')
        self.visibility[key] = visibility

    def url(self, key):
        return f"https://files.example.test/{key}"

    def delete(self, key):
        self._maybe_fail('delete')
        self.objects.pop(key, None)
        self.visibility.pop(key, None)

    def list_objects(self, prefix=''):
        for key, obj in sorted(self.objects.items()):
            if key.startswith(prefix):
                yield key, obj['last_modified']


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def app(storage):
    app = create_app(TestingConfig, storage=storage)

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture
def auth_headers(client):
    client.post('/auth/register', json={'username': 'uploader', 'password': 'secret123'})
    response = client.post('/auth/login', json={'username': 'uploader', 'password': 'secret123'})
    token = response.get_json()['access_token']
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def upload_file(client, auth_headers):
    def _upload(filename='report.pdf', content=b'%PDF-1.4 test document', content_type=None):
        data = {'file': (io.BytesIO(content), filename, content_type) if content_type
                else (io.BytesIO(content), filename)}
        return client.post('/api/upload', data=data, headers=auth_headers,
                           content_type='multipart/form-data')
    return _upload
