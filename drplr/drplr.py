#!/usr/bin/env python3
# PYTHON_ARGCOMPLETE_OK
"""
drplr — Droplr from the command line.

  drplr image.png                      upload a file       →  https://d.pr/i/xyz
  drplr link https://example.com       shorten a link
  drplr note "some text"               share a note
  drplr board                          list boards
  drplr auth token <jwt>               store credentials
"""

import argparse
import logging
import sys

import argcomplete
from argcomplete.completers import FilesCompleter

from drplr.output import Output

COMMANDS = ('upload', 'link', 'note', 'board', 'auth', 'config', 'help')
GLOBAL_FLAGS = ('--porcelain', '--debug')
TOP_LEVEL_FLAGS = ('-h', '--help', '-V', '--version')

EPILOG = """
options for upload, link and note:
  --private, -p          make the drop private (default: public)
  --password <password>  set password protection
  --title <title>        set a custom title

global flags (anywhere on the line):
  --porcelain            minimal output, only the URL (errors to stderr)
  --debug                show API requests and responses on stderr

examples:
  drplr image.png
  drplr document.pdf --private
  drplr secret.txt --private --password mypass123
  drplr report.pdf --board "Project Assets"
  drplr link https://example.com --title "Custom Title"
  drplr note --file notes.txt --private
  drplr note --code "print('hi')" --lang python
  drplr image.png --porcelain | pbcopy

authentication:
  Method 1: JWT from the browser (easiest)
    1. Log into https://d.pr in your browser
    2. DevTools > Application > Cookies > d.pr, copy the JWT value
    drplr auth token eyJhbGciOiJIUzI1NiIs...

  Method 2: username/password
    drplr auth login your_username your_password

  Credentials are encrypted with a key bound to this machine.
"""


def split_global_args(argv):
    """Pull --porcelain/--debug out of argv wherever they appear."""
    flags = {'porcelain': False, 'debug': False}
    rest = []
    for arg in argv:
        if arg in GLOBAL_FLAGS:
            flags[arg[2:]] = True
        else:
            rest.append(arg)
    return flags, rest


def _add_drop_options(p):
    p.add_argument('--private', '-p', action='store_true',
                   help='Make the drop private (default: public)')
    p.add_argument('--password', default=None, help='Set password protection')
    p.add_argument('--title', default=None, help='Set a custom title')


def build_parser():
    from drplr import __version__

    parser = argparse.ArgumentParser(
        prog='drplr',
        description='Droplr CLI: upload files, shorten links, share notes.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )
    parser.add_argument('--version', '-V', action='version', version=f'%(prog)s {__version__}')
    # Only here so they show up in --help; split_global_args() handles them.
    parser.add_argument('--porcelain', action='store_true', help='Only print the URL')
    parser.add_argument('--debug', action='store_true', help='Show API traces on stderr')

    sub = parser.add_subparsers(dest='command')

    p_up = sub.add_parser('upload', help='Upload a file (default command)')
    p_up.add_argument('file', help='File to upload').completer = FilesCompleter()
    p_up.add_argument('--board', default=None, metavar='BOARD',
                      help='Add to a board (name or ID)')
    _add_drop_options(p_up)

    p_link = sub.add_parser('link', help='Create a short link')
    p_link.add_argument('url', help='http(s) URL to shorten')
    _add_drop_options(p_link)

    p_note = sub.add_parser('note', help='Share text or code as a note')
    p_note.add_argument('text', nargs='?', default=None, help='Note text')
    p_note.add_argument('--file', default=None,
                        help='Read the note from a file').completer = FilesCompleter()
    p_note.add_argument('--code', nargs='?', const='', default=None, metavar='CODE',
                        help='Mark as code; optionally give the code inline')
    p_note.add_argument('--lang', default=None,
                        help='Language for syntax highlighting (implies --code)')
    _add_drop_options(p_note)

    p_board = sub.add_parser('board', help='List and manage boards')
    p_board.add_argument('action', nargs='?', default=None,
                         help='create | update | delete | watch | <board id>')
    p_board.add_argument('target', nargs='?', default=None, help='Board title or ID')
    p_board.add_argument('--title', default=None, help='New title (update)')

    for name in ('auth', 'config'):
        p_auth = sub.add_parser(name, help='Store credentials' if name == 'auth'
                                else 'Alias for auth')
        p_auth.add_argument('action', nargs='?', default=None,
                            choices=['token', 'login', 'logout', 'status'])
        p_auth.add_argument('values', nargs='*', help='Token, or username and password')

    sub.add_parser('help', help='Show this help')

    return parser


def _configure_logging(debug):
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
        stream=sys.stderr,
    )


def is_upload_shorthand(argv):
    """`drplr file.png` and `drplr -p file.png` both mean `drplr upload ...`."""
    if not argv or argv[0] in COMMANDS or argv[0] in TOP_LEVEL_FLAGS:
        return False
    return any(not a.startswith('-') for a in argv)


def main(argv=None):
    argv = sys.argv[1:] if argv is None else list(argv)
    flags, argv = split_global_args(argv)
    out = Output(porcelain=flags['porcelain'], debug=flags['debug'])
    _configure_logging(flags['debug'])

    parser = build_parser()
    argcomplete.autocomplete(parser)

    if is_upload_shorthand(argv):
        argv = ['upload'] + argv

    if not argv or argv[0] == 'help':
        out.info(parser.format_help())
        return

    args = parser.parse_args(argv)

    from drplr.commands.auth import cmd_auth
    from drplr.commands.board import cmd_board
    from drplr.commands.link import cmd_link
    from drplr.commands.note import cmd_note
    from drplr.commands.upload import cmd_upload

    commands = {
        'upload': cmd_upload,
        'link':   cmd_link,
        'note':   cmd_note,
        'board':  cmd_board,
        'auth':   cmd_auth,
        'config': cmd_auth,
    }

    if args.command in commands:
        commands[args.command](args, out)
    else:
        out.info(parser.format_help())


if __name__ == '__main__':
    main()
