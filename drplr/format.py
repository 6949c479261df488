"""
Formatting helpers: human-readable times and minimal ANSI color.

Color is applied only when the target stream's underlying fd is a TTY,
so nothing leaks into pipes, porcelain output or logs.

  NO_COLOR     → always off
  FORCE_COLOR  → always on (some tmux, screen, VS Code, SSH setups
                 don't report isatty() correctly)
"""

import os
import sys
from datetime import datetime, timezone as tz


def human_time(value):
    """ISO string or epoch milliseconds → relative ('3h ago') or a date."""
    if not value:
        return '-'
    try:
        if isinstance(value, (int, float)):
            dt = datetime.fromtimestamp(value / 1000, tz.utc)
        else:
            dt = datetime.fromisoformat(str(value).replace('Z', '+00:00'))
            if dt.tzinfo is None:
                dt = dt.replace(tzinfo=tz.utc)
        secs = (datetime.now(tz.utc) - dt).total_seconds()
        if secs < 60:
            return 'just now'
        if secs < 3600:
            return f'{int(secs / 60)}m ago'
        if secs < 86400:
            return f'{int(secs / 3600)}h ago'
        if secs < 86400 * 7:
            return f'{int(secs / 86400)}d ago'
        return dt.strftime('%Y-%m-%d')
    except (ValueError, OverflowError, OSError):
        return str(value)[:10]


# ── ANSI color ────────────────────────────────────────────────────────────────

def _ansi_on(stream=None) -> bool:
    if os.environ.get('NO_COLOR'):
        return False
    if os.environ.get('FORCE_COLOR'):
        return True
    target = stream if stream is not None else sys.stdout
    try:
        return os.isatty(target.fileno())
    except Exception:
        return getattr(target, 'isatty', lambda: False)()


def _c(code: str, text: str, stream=None) -> str:
    if _ansi_on(stream):
        return f'\033[{code}m{text}\033[0m'
    return text


# ── Color palette ─────────────────────────────────────────────────────────────

def green(text, stream=None):  return _c('1;32', text, stream)   # bold green
def red(text, stream=None):    return _c('1;31', text, stream)   # bold red
def dim(text, stream=None):    return _c('2',    text, stream)   # faint
def bold(text, stream=None):   return _c('1',    text, stream)
def cyan(text, stream=None):   return _c('1;36', text, stream)
def yellow(text, stream=None): return _c('1;33', text, stream)
