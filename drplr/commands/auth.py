"""
drplr auth — store credentials (encrypted, this machine only).

  drplr auth token <jwt_token>             JWT copied from the d.pr cookie
  drplr auth login <username> <password>
  drplr auth logout
  drplr auth status
"""

import sys

from drplr import config
from drplr.credentials import CredentialStore
from drplr.models import Anonymous, Basic, Token


def cmd_auth(args, out, store=None):
    store = store or CredentialStore()
    action = args.action
    values = args.values or []

    if action == 'token':
        if len(values) != 1:
            out.error('Usage: drplr auth token <jwt_token>')
            sys.exit(1)
        if store.set('jwt', values[0]):
            out.ok('JWT token saved successfully')
        else:
            out.fail('Failed to save JWT token')
            sys.exit(1)
        return

    if action == 'login':
        if len(values) != 2:
            out.error('Usage: drplr auth login <username> <password>')
            sys.exit(1)
        if store.set('basic', *values):
            out.ok('Login credentials saved successfully')
        else:
            out.fail('Failed to save login credentials')
            sys.exit(1)
        return

    if action == 'logout':
        if store.set('anonymous'):
            out.ok('Stored credentials removed')
        else:
            out.fail('Failed to remove stored credentials')
            sys.exit(1)
        return

    if action == 'status':
        _print_status(store.get(), out)
        return

    out.error('Usage: drplr auth [token|login|logout|status] ...')
    out.error('Run "drplr help" for more information')
    sys.exit(1)


def _print_status(credentials, out):
    if isinstance(credentials, Basic):
        account = f'{credentials.username} (username/password)'
    elif isinstance(credentials, Token):
        account = 'JWT token'
    else:
        account = 'anonymous'
    out.log('drplr status')
    out.log('────────────')
    out.log(f'  API:     {config.api_url()}')
    out.log(f'  Account: {account}')
    out.log(f'  Config:  {config.CONFIG_FILE}')
    if isinstance(credentials, Anonymous):
        out.log('')
        out.log('  Run "drplr auth token <jwt>" or "drplr auth login <user> <pass>".')
