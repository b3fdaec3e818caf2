"""Sharing domain repositories (SQLAlchemy)."""

from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from finshare.domains.sharing.protocols import (
    GrantRepositoryProtocol,
    SourceRepositoryProtocol,
)
from finshare.models.sharing_grant import SharingGrant
from finshare.models.source import Source


class GrantRepository(GrantRepositoryProtocol):
    """Reads sharing grants via direct queries."""

    async def get_by_owner_and_recipient(
        self, db: AsyncSession, *, owner_id: int, recipient_id: int
    ) -> Optional[SharingGrant]:
        """Get the grant for an owner -> recipient pair."""
        stmt = (
            select(SharingGrant)
            .where(
                SharingGrant.owner_user_id == owner_id,
                SharingGrant.recipient_user_id == recipient_id,
            )
            .limit(1)
        )
        result = await db.execute(stmt)
        return result.scalars().first()

    async def list_owner_ids_for_recipient(
        self, db: AsyncSession, *, recipient_id: int
    ) -> list[int]:
        """Get ids of owners sharing with the recipient."""
        stmt = select(SharingGrant.owner_user_id).where(
            SharingGrant.recipient_user_id == recipient_id
        )
        result = await db.execute(stmt)
        return [int(owner_id) for owner_id in result.scalars().all()]

    async def list_recipient_ids_for_owner(self, db: AsyncSession, *, owner_id: int) -> list[int]:
        """Get ids of recipients the owner shares with."""
        stmt = select(SharingGrant.recipient_user_id).where(
            SharingGrant.owner_user_id == owner_id
        )
        result = await db.execute(stmt)
        return [int(recipient_id) for recipient_id in result.scalars().all()]


class SourceRepository(SourceRepositoryProtocol):
    """Looks up an owner's sources by id."""

    async def get_names_by_ids(
        self, db: AsyncSession, *, owner_id: int, source_ids: Sequence[int]
    ) -> list[str]:
        """Get names of the owner's sources among ``source_ids``."""
        if not source_ids:
            return []
        stmt = select(Source.name).where(
            Source.user_id == owner_id,
            Source.id.in_(list(source_ids)),
        )
        result = await db.execute(stmt)
        return list(result.scalars().all())

    async def get_owned_ids(
        self, db: AsyncSession, *, owner_id: int, source_ids: Sequence[int]
    ) -> set[int]:
        """Get the subset of ``source_ids`` owned by ``owner_id``."""
        if not source_ids:
            return set()
        stmt = select(Source.id).where(
            Source.user_id == owner_id,
            Source.id.in_(list(source_ids)),
        )
        result = await db.execute(stmt)
        return {int(source_id) for source_id in result.scalars().all()}
