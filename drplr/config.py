"""
Config management for the drplr CLI.

Stores the API endpoint and the encrypted credential blob in
~/.drplr/config.json. DRPLR_CONFIG_DIR moves the whole directory.
"""

import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(os.environ.get('DRPLR_CONFIG_DIR') or Path.home() / '.drplr')
CONFIG_FILE = CONFIG_DIR / 'config.json'

DEFAULT_API_URL = 'https://api.droplr.com'


def load(path=None):
    """Load config from disk. Returns empty dict if missing or unreadable."""
    p = Path(path) if path else CONFIG_FILE
    if not p.exists():
        return {}
    try:
        return json.loads(p.read_text())
    except (OSError, ValueError) as e:
        logger.warning('Error loading config %s: %s', p, e)
        return {}


def save(cfg, path=None):
    """Save config to disk, creating parent dirs if needed. Returns success."""
    p = Path(path) if path else CONFIG_FILE
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        # owner-only from the first byte; the mode only applies on create
        fd = os.open(p, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, 'w') as f:
            if hasattr(os, 'fchmod'):
                os.fchmod(fd, 0o600)
            f.write(json.dumps(cfg, indent=2) + '\n')
    except OSError as e:
        logger.warning('Error saving config %s: %s', p, e)
        return False
    return True


def api_url(cfg=None):
    """Droplr API base URL: $DRPLR_API_URL, then config, then the default."""
    env = os.environ.get('DRPLR_API_URL')
    if env:
        return env.rstrip('/')
    cfg = load() if cfg is None else cfg
    return (cfg.get('api_url') or DEFAULT_API_URL).rstrip('/')
