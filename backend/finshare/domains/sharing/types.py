"""Sharing domain types and pure helpers.

Scope tokens, the derived ``PermissionMeta`` and the ``Visibility`` verdict.
No IO: everything here is deterministic.
"""

import json
import math
from dataclasses import dataclass
from typing import Any, Optional, Union

from finshare.domains.sharing.exceptions import ScopeParseError

# Permission labels (trimmed, lower-cased) that allow mutation. Any other
# label, including "read", is view-only.
WRITABLE_PERMISSION_LEVELS: frozenset[str] = frozenset(
    {"write", "edit", "read_write", "read-write", "rw", "readwrite", "full", "owner"}
)

DEFAULT_PERMISSION_LEVEL = "read"

Number = Union[int, float]


# ---------------------------------------------------------------------------
# Scope tokens
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NumericToken:
    """Scope token that parses as a number.

    ``text`` keeps the trimmed textual form so ids that were serialized as
    strings still compare equal.
    """

    value: Number
    text: str


@dataclass(frozen=True)
class TextToken:
    """Scope token that is not a number; treated as a source name."""

    value: str


ScopeToken = Union[NumericToken, TextToken]


def parse_number(text: str) -> Optional[Number]:
    """Parse ``text`` as a finite number, preferring ``int``.

    Integral floats collapse to ``int`` so ``"7"``, ``7`` and ``7.0`` are the
    same identifier.
    """
    text = text.strip()
    if not text or "_" in text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return int(value) if value.is_integer() else value


def parse_scope_token(raw: Any) -> Optional[ScopeToken]:
    """Normalize one raw scope element. Returns None for elements to ignore."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return NumericToken(value=raw, text=str(raw))
    if isinstance(raw, float):
        if not math.isfinite(raw):
            return None
        value = int(raw) if raw.is_integer() else raw
        return NumericToken(value=value, text=str(value))
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        number = parse_number(text)
        if number is not None:
            return NumericToken(value=number, text=text)
        return TextToken(value=text)
    return None


def parse_scope(raw_scope: Any) -> Optional[tuple[ScopeToken, ...]]:
    """Parse a stored grant scope into tokens.

    Returns None when the grant has no restriction: the column is empty, the
    array is empty, or none of its elements is usable. Raises
    ``ScopeParseError`` when the stored value is not a JSON array at all.
    """
    if raw_scope is None:
        return None
    if isinstance(raw_scope, (bytes, bytearray)):
        raw_scope = raw_scope.decode("utf-8", errors="replace")
    if isinstance(raw_scope, str):
        if not raw_scope.strip():
            return None
        try:
            raw_scope = json.loads(raw_scope)
        except json.JSONDecodeError as exc:
            raise ScopeParseError(f"scope is not valid JSON: {exc.msg}") from exc
    if not isinstance(raw_scope, (list, tuple)):
        raise ScopeParseError(f"scope must be an array, got {type(raw_scope).__name__}")

    tokens = tuple(t for t in (parse_scope_token(x) for x in raw_scope) if t is not None)
    return tokens or None


def normalize_permission_level(level: Optional[str]) -> str:
    """Trim and lower-case a permission label."""
    return str(level or "").strip().lower()


def is_writable_level(level: Optional[str]) -> bool:
    """Whether a permission label allows mutation."""
    return normalize_permission_level(level) in WRITABLE_PERMISSION_LEVELS


def normalize_name(name: Optional[str]) -> Optional[str]:
    """Trimmed, lower-cased name, or None when blank."""
    if name is None:
        return None
    normalized = str(name).strip().lower()
    return normalized or None


# ---------------------------------------------------------------------------
# Permission meta and visibility verdicts
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PermissionMeta:
    """Normalized view of one owner -> requester grant.

    Built fresh for every access check and never persisted. The three scope
    fields are None together when the grant is unrestricted.
    """

    exists: bool
    writable: bool = False
    scope_ids_numeric: Optional[frozenset[Number]] = None
    scope_ids_text: Optional[frozenset[str]] = None
    scope_names: Optional[frozenset[str]] = None

    @property
    def scoped(self) -> bool:
        """Whether a scope restricts which of the owner's records are in play."""
        return self.scope_ids_numeric is not None

    @classmethod
    def for_owner(cls) -> "PermissionMeta":
        """Meta for a requester looking at their own data."""
        return cls(exists=True, writable=True)

    @classmethod
    def missing(cls) -> "PermissionMeta":
        """Meta when no grant exists."""
        return cls(exists=False)

    @classmethod
    def unrestricted(cls, writable: bool) -> "PermissionMeta":
        """Meta for a grant without scope."""
        return cls(exists=True, writable=writable)

    @classmethod
    def matching_nothing(cls, writable: bool) -> "PermissionMeta":
        """Meta for a grant whose scope is active but matches no record."""
        return cls(
            exists=True,
            writable=writable,
            scope_ids_numeric=frozenset(),
            scope_ids_text=frozenset(),
            scope_names=frozenset(),
        )


@dataclass(frozen=True)
class Visibility:
    """Verdict for one record and one requester."""

    visible: bool
    editable: bool

    @classmethod
    def full(cls) -> "Visibility":
        return cls(visible=True, editable=True)

    @classmethod
    def hidden(cls) -> "Visibility":
        return cls(visible=False, editable=False)
