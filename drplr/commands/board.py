"""
drplr board — list and manage boards.

  drplr board                          list boards
  drplr board <id>                     show a board and its drops
  drplr board create "Project Assets"
  drplr board update <id> --title "New Title"
  drplr board delete <id>
  drplr board watch <id>               get notified of new drops
"""

import sys

from drplr.api import create_client
from drplr.errors import BoardNotFoundError, ServiceError, classify
from drplr.format import bold, dim, human_time


def resolve_board(client, ref):
    """
    Turn a --board value into a Board.

    An all-digit value is fetched directly first; a 404 there, or any other
    value, is matched against the board list by id, then exact title, then
    title ignoring case.
    """
    ref = str(ref).strip()
    if ref.isdigit():
        try:
            return client.boards.get(ref)
        except ServiceError as e:
            if e.status != 404:
                raise classify(e, 'Board lookup') from e

    try:
        boards = client.boards.list()
    except Exception as e:
        raise classify(e, 'Board lookup') from e

    for match in (
        lambda b: b.id == ref,
        lambda b: b.title == ref,
        lambda b: b.title.lower() == ref.lower(),
    ):
        for board in boards:
            if match(board):
                return board
    raise BoardNotFoundError(f'Board not found: {ref}')


# ── Subcommands ───────────────────────────────────────────────────────────────

def board_list(client, out):
    try:
        boards = client.boards.list()
    except Exception as e:
        raise classify(e, 'Board list') from e

    if not boards:
        out.log('No boards found.')
        return boards

    out.log('Available boards:')
    for b in boards:
        out.log(f'  {b.id}: {bold(b.title, stream=out.stdout)} {dim(f"({b.drops_count} drops)", stream=out.stdout)}')
    return boards


def board_show(client, board_id, out):
    try:
        board = client.boards.get(board_id)
        drops = client.boards.drops(board_id)
    except Exception as e:
        raise classify(e, 'Board lookup') from e

    out.log(f'Board: {board.title}')
    out.log(f'Created: {human_time(board.created_at)}')
    out.log(f'Drops: {board.drops_count}')
    out.log('')

    if not drops:
        out.log('No drops in this board.')
        return board, drops

    out.log('Contents:')
    for d in drops:
        out.log(f'  {d.code}: {d.title or d.raw.get("name") or "Untitled"} ({d.type})')
        out.log(f'    {d.url}')
    return board, drops


def board_create(client, title, out):
    try:
        board = client.boards.create(title)
    except Exception as e:
        raise classify(e, 'Board creation') from e
    out.ok(f'Board created: {board.title}')
    out.log(f'ID: {board.id}')
    return board


def board_update(client, board_id, updates, out):
    try:
        board = client.boards.update(board_id, updates)
    except Exception as e:
        raise classify(e, 'Board update') from e
    out.ok(f'Board updated: {board.title}')
    return board


def board_delete(client, board_id, out):
    try:
        client.boards.delete(board_id)
    except Exception as e:
        raise classify(e, 'Board deletion') from e
    out.ok(f'Board deleted: {board_id}')


def board_watch(client, board_id, out):
    try:
        client.boards.watch(board_id)
    except Exception as e:
        raise classify(e, 'Board watch') from e
    out.ok(f'Now watching board: {board_id}')
    out.log('You will receive notifications for new drops in this board.')


# ── Command ───────────────────────────────────────────────────────────────────

_NEEDS_ID = ('update', 'delete', 'watch')


def cmd_board(args, out):
    from drplr.session import execute_command, require_authentication

    action = args.action
    target = args.target

    if action == 'create' and not target:
        out.error('Error: Please specify a board name')
        sys.exit(1)
    if action in _NEEDS_ID and not target:
        out.error('Error: Please specify a board ID')
        sys.exit(1)
    if action == 'update' and not args.title:
        out.error('Error: Please specify what to update (--title "New Title")')
        sys.exit(1)

    def run():
        client = create_client(require_authentication())
        if action is None:
            return board_list(client, out)
        if action == 'create':
            return board_create(client, target, out)
        if action == 'update':
            return board_update(client, target, {'title': args.title}, out)
        if action == 'delete':
            return board_delete(client, target, out)
        if action == 'watch':
            return board_watch(client, target, out)
        return board_show(client, action, out)

    execute_command(run, 'Board', out)
