"""
Board endpoints. A board is a named collection of drops.
"""

from drplr.models import Board, DropResult


def _items(data, key):
    if isinstance(data, dict):
        return data.get(key) or data.get('results') or []
    return data or []


class Boards:
    def __init__(self, client):
        self._client = client

    def list(self):
        return [Board.from_json(b) for b in _items(self._client.request('GET', '/boards'), 'boards')]

    def get(self, board_id):
        return Board.from_json(self._client.request('GET', f'/boards/{board_id}'))

    def drops(self, board_id):
        data = self._client.request('GET', f'/boards/{board_id}/drops')
        return [DropResult.from_json(d) for d in _items(data, 'drops')]

    def create(self, title):
        return Board.from_json(self._client.request('POST', '/boards', json={'title': title}))

    def update(self, board_id, fields):
        return Board.from_json(self._client.request('PUT', f'/boards/{board_id}', json=fields))

    def delete(self, board_id):
        self._client.request('DELETE', f'/boards/{board_id}')

    def watch(self, board_id):
        self._client.request('POST', f'/boards/{board_id}/watch')
