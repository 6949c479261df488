"""
drplr/reconcile.py

Brings a freshly created drop in line with what the user asked for.

Droplr creates every drop public. Privacy, a password, and (for links) a
title can only be applied afterwards with an update call:

  create ─► PublicCreated ─┬─ nothing to change ────────────► done, no call
                           ├─ update ok ──────────────────► reconciled
                           ├─ update fails, private wanted ─► delete, raise
                           └─ update fails, otherwise ─────► left public, raise

At most one update and one delete per drop. Never retries.

If a private drop cannot be confirmed private it is deleted rather than
left reachable. A failed delete is logged on this module's logger (with
the drop code) so an operator can find the leaked drop, but the user
sees the update error, not the cleanup outcome.
"""

import json
import logging

from drplr.errors import ReconciliationError, classify
from drplr.models import Privacy
from drplr.output import quiet

logger = logging.getLogger(__name__)


def needs_update(created, intent) -> bool:
    if intent.wants_private or intent.password:
        return True
    return bool(intent.title) and created.title != intent.title


def update_payload(created, intent) -> dict:
    """Only the fields that still differ from the intent."""
    payload = {}
    if intent.wants_private:
        payload['privacy'] = Privacy.PRIVATE.value
    if intent.password:
        payload['password'] = intent.password
    if intent.title and created.title != intent.title:
        payload['title'] = intent.title
    return payload


def safe_delete(client, code, out=None):
    """Delete a drop, never raising. Returns True if the delete went through."""
    out = out or quiet()
    try:
        client.drops.delete(code)
    except Exception as e:
        out.debug('Drop cleanup API error:', _describe(e))
        logger.warning('Failed to clean up drop %s after a failed privacy update: %s', code, e)
        return False
    out.debug(f'Drop {code} deleted after failed privacy update')
    return True


def reconcile(client, created, intent, out=None):
    """
    Apply privacy/password/title to `created` with at most one update call.

    Returns `created`, mutated to reflect the final state. Raises
    ReconciliationError when privacy was requested and could not be
    applied (the drop has been deleted by then), or the classified update
    error when only a password or title failed (the drop stays public).
    """
    out = out or quiet()

    if not needs_update(created, intent):
        return created

    payload = update_payload(created, intent)
    out.debug('Reconciling drop', created.code, 'with',
              json.dumps({k: (v if k != 'password' else '***') for k, v in payload.items()}))

    try:
        updated = client.drops.update(created.code, payload)
    except Exception as e:
        out.debug('Privacy update API error:', _describe(e))
        error = classify(e, 'Privacy update')
        if intent.wants_private:
            out.debug('Privacy update failed, cleaning up public drop')
            safe_delete(client, created.code, out)
            raise ReconciliationError(error.message, error.status_code) from e
        if error is e:
            raise
        raise error from e

    out.debug('Privacy update API response:', json.dumps(getattr(updated, 'raw', {}), default=str))

    # The update response does not reliably echo privacy; trust our own
    # request for it but take the title from the service when present.
    if 'privacy' in payload:
        created.privacy = Privacy.PRIVATE
    if 'title' in payload:
        created.title = getattr(updated, 'title', None) or intent.title
    return created


def _describe(error):
    data = getattr(error, 'data', None)
    if data:
        return json.dumps(data, indent=2, default=str)
    return str(getattr(error, 'message', None) or error)
