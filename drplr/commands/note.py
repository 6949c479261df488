"""
drplr note — share text or code as a note.

  drplr note "text content"
  drplr note --file notes.txt
  drplr note --code "print('hello')" --lang python
  drplr note --code --file script.js

A note is `text/code` when --code or a language is given, `text/plain`
otherwise. Reading from a file defaults the title to the file name and
the language to the one implied by its extension.
"""

import os
import sys

from drplr.api import create_client
from drplr.commands.helpers import common_options, privacy_option, report_drop
from drplr.errors import EmptyContentError, MissingFileError, UploadError, classify
from drplr.models import DropIntent, DropType
from drplr.output import quiet
from drplr.reconcile import reconcile

PLAIN = 'text/plain'
CODE = 'text/code'

LANGUAGES = {
    '.js':         'javascript',
    '.mjs':        'javascript',
    '.jsx':        'javascript',
    '.ts':         'typescript',
    '.tsx':        'typescript',
    '.py':         'python',
    '.rb':         'ruby',
    '.php':        'php',
    '.java':       'java',
    '.c':          'c',
    '.h':          'c',
    '.cpp':        'cpp',
    '.cc':         'cpp',
    '.cxx':        'cpp',
    '.hpp':        'cpp',
    '.cs':         'csharp',
    '.go':         'go',
    '.rs':         'rust',
    '.swift':      'swift',
    '.kt':         'kotlin',
    '.scala':      'scala',
    '.sh':         'bash',
    '.bash':       'bash',
    '.zsh':        'zsh',
    '.fish':       'fish',
    '.ps1':        'powershell',
    '.sql':        'sql',
    '.html':       'html',
    '.htm':        'html',
    '.css':        'css',
    '.scss':       'scss',
    '.sass':       'sass',
    '.less':       'less',
    '.xml':        'xml',
    '.json':       'json',
    '.yaml':       'yaml',
    '.yml':        'yaml',
    '.toml':       'toml',
    '.ini':        'ini',
    '.conf':       'ini',
    '.md':         'markdown',
    '.markdown':   'markdown',
    '.tex':        'latex',
    '.r':          'r',
    '.m':          'matlab',
    '.pl':         'perl',
    '.lua':        'lua',
    '.vim':        'vim',
    '.dockerfile': 'dockerfile',
    '.makefile':   'makefile',
}

# Extension-less files recognised by name.
_FILENAMES = {
    'dockerfile': 'dockerfile',
    'makefile':   'makefile',
}


def detect_language(path):
    """'script.js' → 'javascript'; None when the extension is unknown."""
    name = os.path.basename(path)
    ext = os.path.splitext(name)[1].lower()
    if ext:
        return LANGUAGES.get(ext)
    return _FILENAMES.get(name.lower())


def get_variant(options) -> str:
    if options.get('is_code') or options.get('lang'):
        return CODE
    return PLAIN


def create_note(text, credentials, options=None, out=None, client=None):
    """Create a NOTE drop from `text` (sent trimmed)."""
    out = out or quiet()
    options = options or {}

    if not text or not text.strip():
        raise EmptyContentError('Note content cannot be empty')

    client = client or create_client(credentials)

    intent = DropIntent(
        type=DropType.NOTE,
        content=text.strip(),
        variant=get_variant(options),
        title=options.get('title') or None,
        privacy=privacy_option(options),
        password=options.get('password') or None,
    )
    payload = {
        'type':    intent.type,
        'content': intent.content,
        'variant': intent.variant,
        'title':   intent.title,
    }
    if options.get('lang'):
        payload['lang'] = options['lang']

    try:
        result = client.drops.create(payload)
    except Exception as e:
        out.debug('Initial note creation API error:', getattr(e, 'data', None) or e)
        raise classify(e, 'Note creation') from e

    out.debug('Initial note creation API response:', result.raw)
    return reconcile(client, result, intent, out)


def resolve_file_options(path, options=None) -> dict:
    """Fill in title and language from the file name unless given."""
    resolved = dict(options or {})
    if not resolved.get('title'):
        resolved['title'] = os.path.basename(path)
    if not resolved.get('lang'):
        resolved['lang'] = detect_language(path)
    return resolved


def create_note_from_file(path, credentials, options=None, out=None, client=None):
    if not os.path.isfile(path):
        raise MissingFileError(f'File not found: {path}')

    try:
        with open(path, encoding='utf-8') as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise UploadError(f'Failed to read file: {e}') from e

    return create_note(text, credentials, resolve_file_options(path, options), out, client)


def cmd_note(args, out):
    from drplr.session import execute_command, require_authentication

    options = dict(common_options(args), lang=args.lang, is_code=args.code is not None)
    path = args.file
    text = args.code if args.code else args.text

    if not path and not text:
        out.error('Error: Please specify text content or use --file option')
        out.error('Usage: drplr note "text content" [options]')
        out.error('       drplr note --file notes.txt [options]')
        sys.exit(1)

    def run():
        credentials = require_authentication()
        if path:
            out.log(f'Creating note from file {path}...')
            resolved = resolve_file_options(path, options)
            result = create_note_from_file(path, credentials, options, out)
        else:
            out.log('Creating note...')
            resolved = options
            result = create_note(text, credentials, options, out)

        extra = [f'Language: {resolved["lang"]}'] if resolved.get('lang') else []
        report_drop(result, options, out, 'Note created successfully!', noun='note', extra=extra)

    execute_command(run, 'Note creation', out)
