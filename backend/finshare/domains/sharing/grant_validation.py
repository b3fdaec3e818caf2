"""Owner-side validation of grant payloads before they are persisted.

Only the owner creates or edits their grants (authorization of that lives
with the grant CRUD). This module checks the *content*: the scope may only
reference the owner's own sources, and an owner cannot share with themself.
"""

import json
from typing import Any, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from finshare.domains.sharing.exceptions import InvalidGrantScopeError, SelfShareError
from finshare.domains.sharing.protocols import SourceRepositoryProtocol
from finshare.domains.sharing.types import (
    DEFAULT_PERMISSION_LEVEL,
    NumericToken,
    parse_scope_token,
)
from finshare.schemas.sharing_grant import SharingGrantCreate, SharingGrantUpdate


def _coerce_source_id(raw: Any) -> Optional[int]:
    token = parse_scope_token(raw)
    if isinstance(token, NumericToken) and isinstance(token.value, int):
        return token.value
    return None


class GrantScopeValidator:
    """Validates and normalizes owner-supplied grant payloads."""

    def __init__(self, source_repo: SourceRepositoryProtocol, max_scope_tokens: int = 500) -> None:
        """Initialize with the source store and the scope size cap."""
        self._source_repo = source_repo
        self._max_scope_tokens = max_scope_tokens

    async def normalize_scope(
        self, db: AsyncSession, *, owner_id: int, scope_source_ids: Optional[Sequence[Any]]
    ) -> Optional[str]:
        """Return the JSON array to store in ``sharing_grant.scope``.

        None means "no restriction". Elements that are not integer ids are
        dropped; what remains must be non-empty and owned by ``owner_id``.
        """
        if scope_source_ids is None:
            return None
        if isinstance(scope_source_ids, (str, bytes)) or not isinstance(
            scope_source_ids, (list, tuple)
        ):
            raise InvalidGrantScopeError("Scope must be an array of numeric source ids")

        ids = [i for i in (_coerce_source_id(x) for x in scope_source_ids) if i is not None]
        ids = list(dict.fromkeys(ids))
        if not ids:
            raise InvalidGrantScopeError("Scope cannot be empty")
        if len(ids) > self._max_scope_tokens:
            raise InvalidGrantScopeError(
                f"Scope cannot reference more than {self._max_scope_tokens} sources"
            )

        owned = await self._source_repo.get_owned_ids(db, owner_id=owner_id, source_ids=ids)
        invalid = [i for i in ids if i not in owned]
        if invalid:
            raise InvalidGrantScopeError(
                "One or more source ids are invalid for this owner", invalid_ids=invalid
            )
        return json.dumps(ids)

    async def validate_create(
        self, db: AsyncSession, *, owner_id: int, payload: SharingGrantCreate
    ) -> dict[str, Any]:
        """Return the column values for a new grant."""
        if payload.recipient_user_id == owner_id:
            raise SelfShareError()
        return {
            "owner_user_id": owner_id,
            "recipient_user_id": payload.recipient_user_id,
            "permission_level": _permission_level_or_default(payload.permission_level),
            "scope": await self.normalize_scope(
                db, owner_id=owner_id, scope_source_ids=payload.scope_source_ids
            ),
        }

    async def validate_update(
        self, db: AsyncSession, *, owner_id: int, payload: SharingGrantUpdate
    ) -> dict[str, Any]:
        """Return the column values to change; only explicitly set fields."""
        values: dict[str, Any] = {}
        if "permission_level" in payload.model_fields_set:
            values["permission_level"] = _permission_level_or_default(payload.permission_level)
        if "scope_source_ids" in payload.model_fields_set:
            values["scope"] = await self.normalize_scope(
                db, owner_id=owner_id, scope_source_ids=payload.scope_source_ids
            )
        return values


def _permission_level_or_default(level: Optional[str]) -> str:
    level = (level or "").strip()
    return level or DEFAULT_PERMISSION_LEVEL
