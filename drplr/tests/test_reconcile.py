"""
drplr/tests/test_reconcile.py

Tests for drplr/reconcile.py — the create-then-update privacy protocol.

The client is a MagicMock; every test counts update/delete calls.
"""

import io
import logging

import pytest

from drplr.errors import ReconciliationError, ServiceError, UploadError
from drplr.models import DropIntent, DropType, Privacy
from drplr.output import Output
from drplr.reconcile import needs_update, reconcile, safe_delete, update_payload
from drplr.tests.conftest import make_drop


def _intent(**kw):
    kw.setdefault('type', DropType.FILE)
    return DropIntent(**kw)


def _validation_error():
    return ServiceError('Unprocessable', status=422, status_text='Unprocessable Entity', data={
        'errors': [{'field': 'password', 'messages': ['"password" must be at least 4 characters']}],
    })


# ── needs_update / update_payload ─────────────────────────────────────────────

class TestNeedsUpdate:
    def test_plain_public_drop(self):
        assert not needs_update(make_drop(), _intent())

    def test_private(self):
        assert needs_update(make_drop(), _intent(privacy=Privacy.PRIVATE))

    def test_password_only(self):
        assert needs_update(make_drop(), _intent(password='pw'))

    def test_title_already_applied(self):
        assert not needs_update(make_drop(title='Report'), _intent(title='Report'))

    def test_title_not_applied(self):
        assert needs_update(make_drop(title=None), _intent(title='Report'))


class TestUpdatePayload:
    def test_only_needed_fields(self):
        payload = update_payload(make_drop(title='Same'),
                                 _intent(privacy=Privacy.PRIVATE, title='Same'))
        assert payload == {'privacy': 'PRIVATE'}

    def test_all_fields(self):
        payload = update_payload(make_drop(),
                                 _intent(privacy=Privacy.PRIVATE, password='pw', title='T'))
        assert payload == {'privacy': 'PRIVATE', 'password': 'pw', 'title': 'T'}

    def test_password_without_privacy(self):
        assert update_payload(make_drop(), _intent(password='pw')) == {'password': 'pw'}


# ── reconcile ─────────────────────────────────────────────────────────────────

class TestNoUpdate:
    def test_public_drop_makes_no_calls(self, client):
        drop = make_drop()
        result = reconcile(client, drop, _intent())
        assert result is drop
        client.drops.update.assert_not_called()
        client.drops.delete.assert_not_called()

    def test_public_with_applied_title_makes_no_calls(self, client):
        drop = make_drop(title='Holiday')
        reconcile(client, drop, _intent(title='Holiday'))
        client.drops.update.assert_not_called()


class TestUpdateSucceeds:
    def test_private_forced_even_if_response_says_public(self, client):
        client.drops.update.side_effect = None
        client.drops.update.return_value = make_drop(privacy=Privacy.PUBLIC)
        drop = make_drop()

        result = reconcile(client, drop, _intent(privacy=Privacy.PRIVATE))

        assert result is drop
        assert result.privacy is Privacy.PRIVATE
        client.drops.update.assert_called_once_with('abc123', {'privacy': 'PRIVATE'})
        client.drops.delete.assert_not_called()

    def test_private_with_password_single_update(self, client):
        reconcile(client, make_drop(), _intent(privacy=Privacy.PRIVATE, password='pw'))
        client.drops.update.assert_called_once_with('abc123', {'privacy': 'PRIVATE', 'password': 'pw'})

    def test_password_only_keeps_public(self, client):
        result = reconcile(client, make_drop(), _intent(password='pw'))
        assert result.privacy is Privacy.PUBLIC
        client.drops.update.assert_called_once_with('abc123', {'password': 'pw'})

    def test_title_taken_from_response(self, client):
        client.drops.update.side_effect = None
        client.drops.update.return_value = make_drop(title='Title (server)')
        result = reconcile(client, make_drop(), _intent(type=DropType.LINK, title='Title'))
        assert result.title == 'Title (server)'

    def test_title_falls_back_to_requested(self, client):
        client.drops.update.side_effect = None
        client.drops.update.return_value = make_drop(title=None)
        result = reconcile(client, make_drop(), _intent(type=DropType.LINK, title='Title'))
        assert result.title == 'Title'


class TestUpdateFails:
    def test_private_failure_deletes_once_and_raises_update_error(self, client):
        client.drops.update.side_effect = _validation_error()

        with pytest.raises(ReconciliationError) as exc:
            reconcile(client, make_drop(), _intent(privacy=Privacy.PRIVATE))

        client.drops.delete.assert_called_once_with('abc123')
        assert exc.value.message.startswith('Privacy update failed:')
        assert 'password: must be at least 4 characters' in exc.value.message
        assert exc.value.status_code == 422

    def test_delete_failure_does_not_mask_update_error(self, client, caplog):
        client.drops.update.side_effect = ServiceError('x', status=403, status_text='Forbidden',
                                                       data={'message': 'Pro plan required'})
        client.drops.delete.side_effect = ServiceError('gone', status=500, status_text='Server Error')

        with caplog.at_level(logging.WARNING, logger='drplr.reconcile'):
            with pytest.raises(ReconciliationError) as exc:
                reconcile(client, make_drop(code='leak01'), _intent(privacy=Privacy.PRIVATE))

        assert exc.value.message == 'Privacy update failed: Pro plan required'
        assert 'Server Error' not in exc.value.message
        client.drops.delete.assert_called_once_with('leak01')
        assert 'leak01' in caplog.text

    def test_password_only_failure_does_not_delete(self, client):
        client.drops.update.side_effect = _validation_error()

        with pytest.raises(UploadError) as exc:
            reconcile(client, make_drop(), _intent(password='pw'))

        assert not isinstance(exc.value, ReconciliationError)
        assert 'password: must be at least 4 characters' in exc.value.message
        client.drops.delete.assert_not_called()

    def test_title_only_failure_does_not_delete(self, client):
        client.drops.update.side_effect = ServiceError('', status=500, status_text='Server Error')
        with pytest.raises(UploadError):
            reconcile(client, make_drop(), _intent(type=DropType.LINK, title='T'))
        client.drops.delete.assert_not_called()

    def test_already_classified_error_passes_through(self, client):
        original = UploadError('Privacy update failed: nope')
        client.drops.update.side_effect = original
        with pytest.raises(UploadError) as exc:
            reconcile(client, make_drop(), _intent(password='pw'))
        assert exc.value is original


# ── safe_delete / tracing ─────────────────────────────────────────────────────

class TestSafeDelete:
    def test_returns_true_on_success(self, client):
        assert safe_delete(client, 'abc') is True

    def test_swallows_and_logs(self, client, caplog):
        client.drops.delete.side_effect = RuntimeError('network down')
        with caplog.at_level(logging.WARNING, logger='drplr.reconcile'):
            assert safe_delete(client, 'abc') is False
        assert 'abc' in caplog.text
        assert 'network down' in caplog.text


class TestDebugTracing:
    def test_debug_lines_go_to_injected_output(self, client, out):
        reconcile(client, make_drop(), _intent(privacy=Privacy.PRIVATE, password='hunter2'))
        err = out.stderr.getvalue()
        assert 'Debug - Reconciling drop abc123' in err
        assert 'hunter2' not in err

    def test_no_debug_output_when_disabled(self, client):
        quiet_out = Output(debug=False, stdout=io.StringIO(), stderr=io.StringIO())
        reconcile(client, make_drop(), _intent(privacy=Privacy.PRIVATE))
        reconcile(client, make_drop(), _intent(privacy=Privacy.PRIVATE), quiet_out)
        assert quiet_out.stderr.getvalue() == ''
