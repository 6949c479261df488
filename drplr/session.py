"""
drplr/session.py

The outermost layer of every drop command:

  require_authentication()  load credentials once, refuse anonymous use
  execute_command()         run a command, turn any error into a message
                            on stderr and exit status 1

This is the only module (besides the argument parser) that ends the
process. Everything below it raises.
"""

import sys

from drplr.credentials import CredentialStore
from drplr.errors import MissingAuthenticationError, UploadError, is_auth_failure
from drplr.models import Anonymous

_AUTH_HELP = [
    'Error: No authentication configured',
    '',
    'Choose one of these methods:',
    '1. Extract JWT from browser: drplr auth token <jwt_token>',
    '2. Use username/password: drplr auth login <username> <password>',
    '',
    'See "drplr help" for detailed instructions',
]

_REFRESH_HELP = [
    '',
    'Try refreshing your authentication:',
    '- For JWT: Get a fresh token from your browser cookies at d.pr',
    '- For login: Check your username and password',
]


def require_authentication(store=None):
    """Return stored credentials or raise MissingAuthenticationError."""
    credentials = (store or CredentialStore()).get()
    if isinstance(credentials, Anonymous):
        raise MissingAuthenticationError('\n'.join(_AUTH_HELP))
    return credentials


def report_error(error, operation, out):
    if isinstance(error, UploadError):
        msg = error.message
        if not isinstance(error, MissingAuthenticationError) and not msg.startswith('✗'):
            msg = f'✗ {msg}'
        out.error(msg)
    else:
        out.error(f'✗ {operation} failed: {error}')

    if is_auth_failure(error):
        for line in _REFRESH_HELP:
            out.error(line)


def execute_command(fn, operation, out):
    """Run fn(); on failure print the error and exit 1. Returns fn's result."""
    try:
        return fn()
    except KeyboardInterrupt:
        out.error('')
        sys.exit(130)
    except Exception as e:
        report_error(e, operation, out)
        sys.exit(1)
