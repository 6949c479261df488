"""
Small utilities shared across drop commands.
"""

from drplr.errors import PreconditionError
from drplr.models import Privacy


def common_options(args):
    """The --private / --password / --title flags every drop command takes."""
    return {
        'privacy':  Privacy.PRIVATE if getattr(args, 'private', False) else Privacy.PUBLIC,
        'password': getattr(args, 'password', None),
        'title':    getattr(args, 'title', None),
    }


def privacy_option(options):
    """Read options['privacy'] as a Privacy, ignoring case."""
    value = options.get('privacy') or Privacy.PUBLIC
    try:
        return Privacy(str(getattr(value, 'value', value)).upper())
    except ValueError:
        raise PreconditionError(f'Invalid privacy: {value} (expected PUBLIC or PRIVATE)') from None


def report_drop(result, options, out, headline, noun='drop', extra=()):
    """Print the outcome of a create: the bare URL in porcelain mode."""
    if out.porcelain:
        out.output(result.url)
        return

    out.ok(headline)
    if result.title:
        out.log(f'Title: {result.title}')
    for line in extra:
        out.log(line)
    if result.privacy is Privacy.PRIVATE:
        out.log('Privacy: Private')
    elif options.get('privacy') == Privacy.PRIVATE:
        out.warn(f'Privacy: Public (private {noun} not supported or failed)')
    if options.get('password'):
        out.log('Password protected: Yes')
    out.output(f'URL: {result.url}')
