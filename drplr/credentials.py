"""
drplr/credentials.py

Encrypted credential storage.

The credential record is serialized to JSON, sealed with AES-256-GCM and
stored base64-encoded under the 'credentials' key of config.json. The key
is derived with HKDF-SHA256 from this machine's identity, so a config file
copied to another machine decrypts to nothing and reads as anonymous.

  get()                         → Anonymous | Basic | Token
  set('basic', user, password)  → bool
  set('jwt', token)             → bool
  set('anonymous')              → bool (clears stored credentials)
"""

import base64
import json
import logging
import os
import platform
import uuid

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from drplr import config
from drplr.models import Anonymous, Basic, Token

logger = logging.getLogger(__name__)

NONCE_LEN = 12
_SALT = b'drplr/credentials/v1'
_INFO = b'drplr credential store'
_MACHINE_ID_FILES = ('/etc/machine-id', '/var/lib/dbus/machine-id')


def _machine_identity() -> bytes:
    for path in _MACHINE_ID_FILES:
        try:
            with open(path, 'rb') as f:
                ident = f.read().strip()
            if ident:
                return ident
        except OSError:
            continue
    return f'{platform.node()}:{uuid.getnode():012x}'.encode()


def derive_key(identity=None) -> bytes:
    identity = _machine_identity() if identity is None else identity
    hkdf = HKDF(algorithm=hashes.SHA256(), length=32, salt=_SALT, info=_INFO)
    return hkdf.derive(identity)


def encrypt(record: dict, key: bytes) -> str:
    nonce = os.urandom(NONCE_LEN)
    sealed = AESGCM(key).encrypt(nonce, json.dumps(record).encode(), None)
    return base64.b64encode(nonce + sealed).decode('ascii')


def decrypt(blob: str, key: bytes) -> dict:
    raw = base64.b64decode(blob)
    nonce, sealed = raw[:NONCE_LEN], raw[NONCE_LEN:]
    return json.loads(AESGCM(key).decrypt(nonce, sealed, None))


def _from_record(record):
    kind = record.get('type')
    if kind == 'basic' and record.get('username') and record.get('password'):
        return Basic(record['username'], record['password'])
    if kind == 'jwt' and record.get('token'):
        return Token(record['token'])
    return Anonymous()


class CredentialStore:
    """Reads and writes the credential record in a config file."""

    def __init__(self, path=None, key=None):
        self.path = path
        self._key = key

    @property
    def key(self):
        if self._key is None:
            self._key = derive_key()
        return self._key

    def get(self):
        blob = config.load(self.path).get('credentials')
        if not blob:
            return Anonymous()
        try:
            return _from_record(decrypt(blob, self.key))
        except (InvalidTag, ValueError, TypeError) as e:
            logger.warning('Stored credentials could not be decrypted on this machine (%s)',
                           type(e).__name__)
            return Anonymous()

    def set(self, kind, *args):
        cfg = config.load(self.path)
        if kind == 'basic':
            username, password = args
            record = {'type': 'basic', 'username': username, 'password': password}
        elif kind == 'jwt':
            (token,) = args
            record = {'type': 'jwt', 'token': token}
        elif kind == 'anonymous':
            cfg.pop('credentials', None)
            return config.save(cfg, self.path)
        else:
            raise ValueError(f'Unknown credential type: {kind}')
        cfg['credentials'] = encrypt(record, self.key)
        return config.save(cfg, self.path)
