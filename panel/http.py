"""Pre-configured HTTP client for the admin API."""

import logging
from collections import namedtuple

import requests

from panel import config

logger = logging.getLogger(__name__)

# A file picked in a form: name, raw bytes and MIME type
Upload = namedtuple('Upload', ['filename', 'content', 'content_type'])


class ApiError(Exception):
    """Request failed. status is None when no response came back."""

    def __init__(self, message, status=None, payload=None):
        self.message = message
        self.status = status
        self.payload = payload or {}
        super().__init__(message)


class ApiClient:
    """Thin wrapper around a requests session with a base URL and bearer token.

    Any object with a requests-compatible ``request`` method can stand in
    for the session.
    """

    def __init__(self, base_url=None, session=None, timeout=None):
        self.base_url = (base_url or config.API_BASE_URL).rstrip('/')
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else config.API_TIMEOUT
        self.token = None

    def set_token(self, token):
        self.token = token

    def url_for(self, path):
        return f'{self.base_url}/{path.lstrip("/")}'

    def _headers(self):
        if self.token:
            return {'Authorization': f'Bearer {self.token}'}
        return {}

    def request(self, method, path, json=None, data=None, files=None):
        url = self.url_for(path)
        multipart = None
        if files:
            multipart = [
                (field, (upload.filename, upload.content, upload.content_type))
                for field, upload in files
            ]
        try:
            response = self.session.request(
                method, url, json=json, data=data, files=multipart,
                headers=self._headers(), timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error('%s %s failed: %s', method, url, e)
            raise ApiError(f'Network error: {e}') from e

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.status_code >= 400:
            message = body.get('message') if isinstance(body, dict) else None
            raise ApiError(message or f'Request failed with status {response.status_code}',
                           status=response.status_code, payload=body)
        return body

    def get(self, path):
        return self.request('GET', path)

    def post(self, path, json=None, data=None, files=None):
        return self.request('POST', path, json=json, data=data, files=files)

    def put(self, path, json=None, data=None, files=None):
        return self.request('PUT', path, json=json, data=data, files=files)

    def delete(self, path):
        return self.request('DELETE', path)
