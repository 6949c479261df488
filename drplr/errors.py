"""
drplr/errors.py

Two kinds of error cross the code base:

  ServiceError  raw failure from the Droplr API boundary (status, status
                text, decoded body). Never shown to the user as-is.
  UploadError   classified, user-facing. Everything the CLI prints on
                failure is an UploadError message.

classify() turns the first into the second exactly once, at the point
where a service call fails. Anything already classified passes through.
"""

import re


class ServiceError(Exception):
    """Raw error from the remote drop service."""

    def __init__(self, message='', status=None, status_text=None, data=None,
                 no_response=False):
        super().__init__(message)
        self.message = message
        self.status = status
        self.status_text = status_text
        self.data = data
        self.no_response = no_response


class UploadError(Exception):
    """A classified, user-facing error."""

    kind = 'Upload'

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class PreconditionError(UploadError):
    """Detected locally before any network call."""


class MissingFileError(PreconditionError):
    kind = 'FileNotFound'


class InvalidURLError(PreconditionError):
    kind = 'InvalidURL'


class EmptyContentError(PreconditionError):
    kind = 'EmptyContent'


class BoardNotFoundError(PreconditionError):
    kind = 'BoardNotFound'


class MissingAuthenticationError(PreconditionError):
    kind = 'MissingAuthentication'


class ReconciliationError(UploadError):
    """A drop that should be private could not be made private (and was deleted)."""

    kind = 'Reconciliation'


# ── Classification ────────────────────────────────────────────────────────────

# "\"foo\" must be a string" → "must be a string"
_QUOTED_PREFIX = re.compile(r'^".*?"\s*')


def _strip_quoted(msg):
    return _QUOTED_PREFIX.sub('', str(msg), count=1)


def _validation_list(errors):
    lines = []
    for entry in errors:
        if not isinstance(entry, dict):
            lines.append(f'\n    * {_strip_quoted(entry)}')
            continue
        field = entry.get('field')
        for msg in entry.get('messages') or ['Invalid value']:
            lines.append(f'\n    * {field}: {_strip_quoted(msg)}')
    return ''.join(lines)


def _validation_map(errors):
    lines = []
    for field, messages in errors.items():
        if isinstance(messages, (list, tuple)):
            messages = ', '.join(str(m) for m in messages)
        lines.append(f'{field}: {messages}')
    return '\n'.join(lines)


def classify(error, operation='Operation'):
    """Map any error raised by a service call to an UploadError."""
    if isinstance(error, UploadError):
        return error

    status = getattr(error, 'status', None)
    data = getattr(error, 'data', None)
    if not isinstance(data, dict):
        data = {}

    errors = data.get('errors')
    if errors:
        if isinstance(errors, (list, tuple)):
            return UploadError(f'{operation} failed:{_validation_list(errors)}', status)
        if isinstance(errors, dict):
            return UploadError(f'{operation} failed:\n{_validation_map(errors)}', status)

    if data.get('message'):
        return UploadError(f'{operation} failed: {data["message"]}', status)

    # DroplrClient already pulled `error` or the body text into .message;
    # 'HTTP <n>' is its placeholder when the body had nothing to say.
    message = (getattr(error, 'message', None) or '').strip()
    if status and message and message != f'HTTP {status}':
        return UploadError(f'{operation} failed: {message}', status)

    if status:
        status_text = getattr(error, 'status_text', None) or ''
        return UploadError(f'{operation} failed: {status} {status_text}'.rstrip(), status)

    detail = getattr(error, 'message', None) or str(error) or type(error).__name__
    return UploadError(f'{operation} failed: {detail}', status)


def is_auth_failure(error):
    """401s get an extra hint about refreshing credentials."""
    status = getattr(error, 'status_code', None) or getattr(error, 'status', None)
    if status == 401:
        return True
    text = str(getattr(error, 'message', '') or error)
    return '401' in text or 'Unauthorized' in text
