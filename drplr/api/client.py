"""
HTTP transport for the Droplr API.

Every request goes through DroplrClient.request(), which is the one place
where a failed call becomes a ServiceError:

  non-2xx response   → ServiceError(status, status_text, decoded body)
  transport failure  → ServiceError(no_response=True)

Nothing here classifies or prints; callers decide what the failure means.
"""

import requests

from drplr import __version__, config
from drplr.errors import MissingAuthenticationError, ServiceError, UploadError
from drplr.models import Anonymous, Basic, Token

from .boards import Boards
from .drops import Drops

DEFAULT_TIMEOUT = 60  # seconds, JSON calls only; file bodies stream untimed


class DroplrClient:
    def __init__(self, credentials, base_url=None, session=None, timeout=DEFAULT_TIMEOUT):
        self.base_url = (base_url or config.api_url()).rstrip('/')
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self.session.headers['User-Agent'] = f'drplr/{__version__}'
        self.session.headers['Accept'] = 'application/json'
        _authenticate(self.session, credentials)

        self.drops = Drops(self)
        self.boards = Boards(self)

    def request(self, method, path, **kwargs):
        """Perform a request and return the decoded JSON body (or {})."""
        kwargs.setdefault('timeout', self.timeout)
        url = f'{self.base_url}/{path.lstrip("/")}'
        try:
            res = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            raise ServiceError(f'no response from server ({e})', no_response=True) from e

        if not res.ok:
            raise _service_error(res)

        if not res.content:
            return {}
        try:
            return res.json()
        except ValueError:
            return {}


def _authenticate(session, credentials):
    if isinstance(credentials, Basic):
        session.auth = (credentials.username, credentials.password)
    elif isinstance(credentials, Token):
        session.headers['Authorization'] = f'Bearer {credentials.jwt}'
    elif isinstance(credentials, Anonymous):
        raise MissingAuthenticationError(
            'No authentication configured. Use "drplr auth" to set up credentials.')
    else:
        raise UploadError('Invalid authentication credentials')


def _service_error(res):
    try:
        data = res.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        message = data.get('message') or data.get('error') or ''
    else:
        message = res.text[:200]
    return ServiceError(
        message or f'HTTP {res.status_code}',
        status=res.status_code,
        status_text=res.reason,
        data=data if isinstance(data, dict) else None,
    )


def create_client(credentials, **kwargs):
    return DroplrClient(credentials, **kwargs)
