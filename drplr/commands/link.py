"""
drplr link — shorten a URL.

  drplr link https://example.com/very/long/url
  drplr link https://example.com --title "Custom Title"
  drplr link https://example.com --private --password secret

Only http and https URLs are accepted. ftp://, javascript: and friends
may be valid URIs but are not something this tool shortens.
"""

from urllib.parse import urlparse

from drplr.api import create_client
from drplr.commands.helpers import common_options, privacy_option, report_drop
from drplr.errors import InvalidURLError, classify
from drplr.models import DropIntent, DropType
from drplr.output import quiet
from drplr.reconcile import reconcile

ALLOWED_SCHEMES = ('http', 'https')


def validate_url(url) -> str:
    try:
        parsed = urlparse(url)
    except ValueError:
        parsed = None
    if parsed is None or parsed.scheme.lower() not in ALLOWED_SCHEMES or not parsed.netloc:
        raise InvalidURLError(f'Invalid URL format: {url}')
    return url


def create_link(url, credentials, options=None, out=None, client=None):
    """Create a LINK drop for `url` and reconcile privacy/password/title."""
    out = out or quiet()
    options = options or {}

    validate_url(url)
    client = client or create_client(credentials)

    intent = DropIntent(
        type=DropType.LINK,
        content=url,
        title=options.get('title') or None,
        privacy=privacy_option(options),
        password=options.get('password') or None,
    )

    try:
        result = client.drops.create({
            'type':    intent.type,
            'content': url,
            'title':   intent.title,
        })
    except Exception as e:
        out.debug('Initial link creation API error:', getattr(e, 'data', None) or e)
        raise classify(e, 'Link creation') from e

    out.debug('Initial link creation API response:', result.raw)
    if intent.title and result.title != intent.title:
        out.debug('Title was not applied at create time; setting it with an update')

    return reconcile(client, result, intent, out)


def cmd_link(args, out):
    from drplr.session import execute_command, require_authentication

    url = args.url
    options = common_options(args)

    def run():
        credentials = require_authentication()
        out.log(f'Creating short link for {url}...')
        result = create_link(url, credentials, options, out)
        report_drop(result, options, out, 'Link created successfully!', noun='link',
                    extra=[f'Original URL: {url}'])

    execute_command(run, 'Link creation', out)
