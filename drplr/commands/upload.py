"""
drplr upload — upload a file and print its short link.

  drplr image.png
  drplr upload document.pdf --private
  drplr secret.txt --private --password mypass123
  drplr report.pdf --board "Project Assets" --title "Q3 report"
"""

import os

from drplr.api import create_client
from drplr.commands.board import resolve_board
from drplr.commands.helpers import common_options, privacy_option, report_drop
from drplr.errors import MissingFileError, classify
from drplr.models import DropIntent, DropType
from drplr.output import quiet
from drplr.progress import ProgressReader
from drplr.reconcile import reconcile

DEFAULT_MIME_TYPE = 'application/octet-stream'

MIME_TYPES = {
    '.jpg':  'image/jpeg',
    '.jpeg': 'image/jpeg',
    '.png':  'image/png',
    '.gif':  'image/gif',
    '.webp': 'image/webp',
    '.pdf':  'application/pdf',
    '.txt':  'text/plain',
    '.md':   'text/markdown',
    '.json': 'application/json',
    '.mp4':  'video/mp4',
    '.mov':  'video/quicktime',
    '.avi':  'video/avi',
    '.mp3':  'audio/mpeg',
    '.wav':  'audio/wav',
}


def get_mime_type(filename: str) -> str:
    """'report.final.pdf' → 'application/pdf'. Only the last suffix counts."""
    ext = os.path.splitext(filename)[1].lower()
    return MIME_TYPES.get(ext, DEFAULT_MIME_TYPE)


def build_intent(path, options=None, board_id=None) -> DropIntent:
    options = options or {}
    filename = os.path.basename(path)
    return DropIntent(
        type=DropType.FILE,
        content=path,
        variant=get_mime_type(filename),
        title=options.get('title') or filename,
        privacy=privacy_option(options),
        password=options.get('password') or None,
        board_id=board_id,
    )


def upload_file(path, credentials, options=None, out=None, client=None):
    """
    Upload a local file as a FILE drop.

    Raises MissingFileError before touching the network if the file is
    missing, BoardNotFoundError for an unknown --board, and the classified
    service error if creation or reconciliation fails.
    """
    out = out or quiet()
    options = options or {}

    if not os.path.isfile(path):
        raise MissingFileError(f'File not found: {path}')

    client = client or create_client(credentials)

    board_id = None
    if options.get('board'):
        board_id = resolve_board(client, options['board']).id

    intent = build_intent(path, options, board_id=board_id)
    payload = {
        'type':     intent.type,
        'variant':  intent.variant,
        'title':    intent.title,
        'privacy':  intent.privacy if intent.wants_private else None,
        'password': intent.password,
        'board':    intent.board_id,
    }

    try:
        with open(path, 'rb') as f:
            body = ProgressReader(f, os.path.getsize(path), out)
            try:
                result = client.drops.create(dict(payload, content=body))
            except Exception:
                body.abort()
                raise
            body.done()
    except Exception as e:
        out.debug('Upload API error:', getattr(e, 'data', None) or e)
        raise classify(e, 'Upload') from e

    out.debug('Upload API response:', result.raw)
    return reconcile(client, result, intent, out)


# ── Command ───────────────────────────────────────────────────────────────────

def cmd_upload(args, out):
    from drplr.session import execute_command, require_authentication

    path = args.file
    options = dict(common_options(args), board=getattr(args, 'board', None))

    def run():
        credentials = require_authentication()
        out.log(f'Uploading {os.path.basename(path)}...')
        result = upload_file(path, credentials, options, out)
        report_drop(result, options, out, 'Upload successful!', noun='upload')

    execute_command(run, 'Upload', out)
