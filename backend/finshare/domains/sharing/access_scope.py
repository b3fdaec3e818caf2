"""Access scope resolution: whose data may a requester see at all."""

from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from finshare.domains.sharing.protocols import (
    AccessScopeResolverProtocol,
    GrantRepositoryProtocol,
)
from finshare.domains.sharing.types import parse_number


def _coerce_user_id(value: Any) -> Optional[int]:
    """Coerce a caller-supplied user id (often a query-string value) to int."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    number = parse_number(str(value))
    if isinstance(number, int):
        return number
    return None


class AccessScopeResolver(AccessScopeResolverProtocol):
    """Resolves the set of owners whose records a requester may query.

    Any grant, whatever its permission level or scope, makes the owner part
    of the requester's access scope. Per-record scoping is applied later by
    the visibility pipeline.
    """

    def __init__(self, grant_repo: GrantRepositoryProtocol) -> None:
        """Initialize with the grant store."""
        self._grant_repo = grant_repo

    async def accessible_owner_ids(self, db: AsyncSession, *, requester_id: int) -> list[int]:
        """Return the requester followed by every owner sharing with them.

        Deduplicated, order preserved, never empty.
        """
        owner_ids = await self._grant_repo.list_owner_ids_for_recipient(
            db, recipient_id=requester_id
        )
        return list(dict.fromkeys([requester_id, *owner_ids]))

    async def resolve_view_owner(
        self, db: AsyncSession, *, requester_id: int, as_owner_id: Any
    ) -> Optional[int]:
        """Validate a "view as owner X" request.

        Returns X when it is in the requester's access scope, otherwise None,
        meaning the caller should fall back to the aggregate view.
        """
        if as_owner_id is None or as_owner_id == "":
            return None
        owner_id = _coerce_user_id(as_owner_id)
        if owner_id is None:
            return None
        if owner_id == requester_id:
            return owner_id
        accessible = await self.accessible_owner_ids(db, requester_id=requester_id)
        return owner_id if owner_id in accessible else None

    async def recipients_of(self, db: AsyncSession, *, owner_id: int) -> list[int]:
        """Return every user the owner shares with (for change fan-out)."""
        recipient_ids = await self._grant_repo.list_recipient_ids_for_owner(
            db, owner_id=owner_id
        )
        return [rid for rid in dict.fromkeys(recipient_ids) if rid != owner_id]
