"""
Value types shared by the credential store, the API client and the commands.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union


class Privacy(str, Enum):
    PUBLIC = 'PUBLIC'
    PRIVATE = 'PRIVATE'


class DropType(str, Enum):
    FILE = 'FILE'
    LINK = 'LINK'
    NOTE = 'NOTE'


# ── Credentials ───────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Anonymous:
    """No stored credentials."""


@dataclass(frozen=True)
class Basic:
    username: str
    password: str


@dataclass(frozen=True)
class Token:
    jwt: str


Credentials = Union[Anonymous, Basic, Token]


# ── Drops ─────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class DropIntent:
    """What the user asked for. Built once from parsed arguments."""

    type: DropType
    content: Any = None
    variant: Optional[str] = None
    title: Optional[str] = None
    privacy: Privacy = Privacy.PUBLIC
    password: Optional[str] = None
    board_id: Optional[str] = None

    @property
    def wants_private(self) -> bool:
        return self.privacy is Privacy.PRIVATE


@dataclass
class DropResult:
    """
    The service's view of a drop.

    Mutable on purpose: the reconciliation engine writes the final
    privacy/title back onto the object the caller already holds.
    """

    code: str
    shortlink: Optional[str] = None
    privacy: Privacy = Privacy.PUBLIC
    title: Optional[str] = None
    type: Optional[str] = None
    variant: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> 'DropResult':
        privacy = data.get('privacy') or Privacy.PUBLIC.value
        try:
            privacy = Privacy(str(privacy).upper())
        except ValueError:
            privacy = Privacy.PUBLIC
        return cls(
            code=str(data.get('code', '')),
            shortlink=data.get('shortlink'),
            privacy=privacy,
            title=data.get('title'),
            type=data.get('type'),
            variant=data.get('variant'),
            raw=dict(data),
        )

    @property
    def url(self) -> Optional[str]:
        return self.shortlink or self.raw.get('link') or self.raw.get('url')


@dataclass
class Board:
    id: str
    title: str = ''
    drops_count: int = 0
    created_at: Any = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> 'Board':
        return cls(
            id=str(data.get('id', '')),
            title=data.get('title') or data.get('name') or '',
            drops_count=data.get('drops_count') or data.get('dropsCount') or 0,
            created_at=data.get('created_at') or data.get('createdAt'),
            raw=dict(data),
        )
