"""Fake sharing repositories for testing."""

from itertools import count
from typing import Any, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from finshare.models.sharing_grant import SharingGrant
from finshare.models.source import Source


class FakeGrantRepository:
    """In-memory fake for GrantRepositoryProtocol."""

    def __init__(self) -> None:
        """Initialize empty store and call log."""
        self._store: dict[tuple[int, int], SharingGrant] = {}
        self._calls: list[tuple] = []
        self._error: Optional[Exception] = None
        self._ids = count(1)

    def seed(
        self,
        owner_id: int,
        recipient_id: int,
        permission_level: str = "read",
        scope: Any = None,
    ) -> SharingGrant:
        """Store a grant; replaces any existing grant for the pair."""
        grant = SharingGrant(
            id=next(self._ids),
            owner_user_id=owner_id,
            recipient_user_id=recipient_id,
            permission_level=permission_level,
            scope=scope,
        )
        self._store[(owner_id, recipient_id)] = grant
        return grant

    def revoke(self, owner_id: int, recipient_id: int) -> None:
        """Delete the grant for the pair, if any."""
        self._store.pop((owner_id, recipient_id), None)

    def fail_with(self, error: Exception) -> None:
        """Make every subsequent read raise ``error``."""
        self._error = error

    def call_count(self, method: str) -> int:
        """Return the number of times a method was called."""
        return sum(1 for name, *_ in self._calls if name == method)

    def _check(self) -> None:
        if self._error is not None:
            raise self._error

    async def get_by_owner_and_recipient(
        self, db: AsyncSession, *, owner_id: int, recipient_id: int
    ) -> Optional[SharingGrant]:
        """Get the grant for the pair."""
        self._calls.append(("get_by_owner_and_recipient", db, owner_id, recipient_id))
        self._check()
        return self._store.get((owner_id, recipient_id))

    async def list_owner_ids_for_recipient(
        self, db: AsyncSession, *, recipient_id: int
    ) -> list[int]:
        """Get owners sharing with the recipient."""
        self._calls.append(("list_owner_ids_for_recipient", db, recipient_id))
        self._check()
        return [owner for (owner, recipient) in self._store if recipient == recipient_id]

    async def list_recipient_ids_for_owner(self, db: AsyncSession, *, owner_id: int) -> list[int]:
        """Get recipients the owner shares with."""
        self._calls.append(("list_recipient_ids_for_owner", db, owner_id))
        self._check()
        return [recipient for (owner, recipient) in self._store if owner == owner_id]


class FakeSourceRepository:
    """In-memory fake for SourceRepositoryProtocol."""

    def __init__(self) -> None:
        """Initialize empty store and call log."""
        self._store: dict[int, Source] = {}
        self._calls: list[tuple] = []
        self._error: Optional[Exception] = None

    def seed(self, owner_id: int, source_id: int, name: str) -> Source:
        """Store a source owned by ``owner_id``."""
        source = Source(id=source_id, user_id=owner_id, name=name)
        self._store[source_id] = source
        return source

    def fail_with(self, error: Exception) -> None:
        """Make every subsequent read raise ``error``."""
        self._error = error

    def call_count(self, method: str) -> int:
        """Return the number of times a method was called."""
        return sum(1 for name, *_ in self._calls if name == method)

    def _check(self) -> None:
        if self._error is not None:
            raise self._error

    async def get_names_by_ids(
        self, db: AsyncSession, *, owner_id: int, source_ids: Sequence[int]
    ) -> list[str]:
        """Get names of the owner's sources among ``source_ids``."""
        self._calls.append(("get_names_by_ids", db, owner_id, list(source_ids)))
        self._check()
        return [
            s.name
            for sid, s in self._store.items()
            if sid in set(source_ids) and s.user_id == owner_id
        ]

    async def get_owned_ids(
        self, db: AsyncSession, *, owner_id: int, source_ids: Sequence[int]
    ) -> set[int]:
        """Get the subset of ``source_ids`` owned by ``owner_id``."""
        self._calls.append(("get_owned_ids", db, owner_id, list(source_ids)))
        self._check()
        return {
            sid for sid, s in self._store.items() if sid in set(source_ids) and s.user_id == owner_id
        }
