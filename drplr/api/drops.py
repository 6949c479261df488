"""
Drop endpoints: create, update, delete, get, list.

Link and note drops are created with a JSON body. File drops stream the
file object as the request body, with the MIME type as Content-Type and
the remaining fields as query parameters.
"""

from drplr.models import DropResult, DropType

_CREATE_FIELDS = ('type', 'variant', 'title', 'privacy', 'password', 'board')


def _plain(value):
    return getattr(value, 'value', value)


class Drops:
    def __init__(self, client):
        self._client = client

    def create(self, payload):
        payload = {k: _plain(v) for k, v in payload.items() if v is not None}
        if payload.get('type') == DropType.FILE.value:
            params = {k: payload[k] for k in _CREATE_FIELDS
                      if k in payload and k != 'variant'}
            data = self._client.request(
                'POST', '/drops',
                params=params,
                data=payload['content'],
                headers={'Content-Type': payload.get('variant') or 'application/octet-stream'},
                timeout=None,
            )
        else:
            data = self._client.request('POST', '/drops', json=payload)
        return DropResult.from_json(data)

    def update(self, code, fields):
        body = {k: _plain(v) for k, v in fields.items() if v is not None}
        return DropResult.from_json(self._client.request('PUT', f'/drops/{code}', json=body))

    def delete(self, code):
        self._client.request('DELETE', f'/drops/{code}')

    def get(self, code):
        return DropResult.from_json(self._client.request('GET', f'/drops/{code}'))

    def list(self, **params):
        data = self._client.request('GET', '/drops', params=params or None)
        if isinstance(data, dict):
            data = data.get('drops') or data.get('results') or []
        return [DropResult.from_json(d) for d in data]
