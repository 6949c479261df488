"""
drplr/tests/conftest.py

Shared pytest fixtures for the drplr test suite.
"""

import io
from unittest.mock import MagicMock

import pytest

from drplr import config
from drplr.models import DropResult, Privacy, Token
from drplr.output import Output


@pytest.fixture(autouse=False)
def isolated_config_file(tmp_path):
    """
    Redirect CONFIG_FILE to a temp location.
    Use when a test calls config.save / config.load without a path arg.
    """
    orig = config.CONFIG_FILE
    config.CONFIG_FILE = tmp_path / 'config.json'
    yield config.CONFIG_FILE
    config.CONFIG_FILE = orig


@pytest.fixture
def creds():
    return Token('eyJ.test.jwt')


@pytest.fixture
def out():
    """An Output writing into StringIO buffers: out.stdout.getvalue()."""
    return Output(porcelain=False, debug=True, stdout=io.StringIO(), stderr=io.StringIO())


def make_drop(code='abc123', privacy=Privacy.PUBLIC, title=None, **raw):
    data = dict(raw, code=code, shortlink=f'https://d.pr/i/{code}',
                privacy=privacy.value, title=title)
    return DropResult.from_json(data)


@pytest.fixture
def client():
    """A DroplrClient stand-in: create returns a fresh public drop."""
    c = MagicMock()
    c.drops.create.side_effect = lambda payload: make_drop(title=payload.get('title'))
    # Like the real service, the update response does not echo privacy.
    c.drops.update.side_effect = lambda code, fields: make_drop(code, title=fields.get('title'))
    return c
