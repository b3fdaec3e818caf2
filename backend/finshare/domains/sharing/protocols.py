"""Sharing domain protocols.

Storage protocols (grants, sources) are the only IO seams; everything above
them is read-only and keeps no state between calls.
"""

from typing import Any, Iterable, Optional, Protocol, Sequence, runtime_checkable

from sqlalchemy.ext.asyncio import AsyncSession

from finshare.domains.sharing.types import PermissionMeta
from finshare.models.sharing_grant import SharingGrant
from finshare.schemas.financial_record import (
    FinancialRecord,
    FinancialRecordLinkageUpdate,
    FinancialRecordView,
    RecurringRule,
)


class GrantRepositoryProtocol(Protocol):
    """Read access to sharing grants. Reads must reflect the latest commit."""

    async def get_by_owner_and_recipient(
        self, db: AsyncSession, *, owner_id: int, recipient_id: int
    ) -> Optional[SharingGrant]:
        """Return the single grant for the pair, or None."""
        ...

    async def list_owner_ids_for_recipient(
        self, db: AsyncSession, *, recipient_id: int
    ) -> list[int]:
        """Return ids of every owner who shares with ``recipient_id``."""
        ...

    async def list_recipient_ids_for_owner(self, db: AsyncSession, *, owner_id: int) -> list[int]:
        """Return ids of every recipient ``owner_id`` shares with."""
        ...


class SourceRepositoryProtocol(Protocol):
    """Read access to an owner's sources."""

    async def get_names_by_ids(
        self, db: AsyncSession, *, owner_id: int, source_ids: Sequence[int]
    ) -> list[str]:
        """Return the names of ``owner_id``'s sources among ``source_ids``."""
        ...

    async def get_owned_ids(
        self, db: AsyncSession, *, owner_id: int, source_ids: Sequence[int]
    ) -> set[int]:
        """Return the subset of ``source_ids`` that belong to ``owner_id``."""
        ...


@runtime_checkable
class AccessScopeResolverProtocol(Protocol):
    """Which owners' data a requester may see at all."""

    async def accessible_owner_ids(self, db: AsyncSession, *, requester_id: int) -> list[int]:
        """Requester plus every owner sharing with them. Never empty."""
        ...

    async def resolve_view_owner(
        self, db: AsyncSession, *, requester_id: int, as_owner_id: Any
    ) -> Optional[int]:
        """Validated single-owner view, or None for the aggregate view."""
        ...

    async def recipients_of(self, db: AsyncSession, *, owner_id: int) -> list[int]:
        """Users who can see ``owner_id``'s data, excluding the owner."""
        ...


@runtime_checkable
class PermissionMetaLoaderProtocol(Protocol):
    """Builds a fresh ``PermissionMeta`` for one owner -> requester pair."""

    async def load(self, db: AsyncSession, *, owner_id: int, requester_id: int) -> PermissionMeta:
        """Load and normalize the grant."""
        ...


@runtime_checkable
class BatchVisibilityPipelineProtocol(Protocol):
    """Filters a multi-owner list of records down to what the requester may see."""

    async def filter_visible(
        self, db: AsyncSession, *, records: Iterable[Any], requester_id: int
    ) -> list[FinancialRecordView]:
        """Stable filter; at most one meta load per distinct non-self owner."""
        ...


@runtime_checkable
class WriteGateProtocol(Protocol):
    """Single-record read and mutation gating."""

    async def get_visible_record(
        self, db: AsyncSession, *, requester_id: int, record: Any
    ) -> FinancialRecordView:
        """Return the record view or raise ``RecordNotVisibleError``."""
        ...

    async def authorize_record_update(
        self,
        db: AsyncSession,
        *,
        requester_id: int,
        record: Any,
        changes: Optional[FinancialRecordLinkageUpdate] = None,
    ) -> FinancialRecord:
        """Return the record as it would look after ``changes`` or raise."""
        ...

    async def authorize_record_delete(
        self, db: AsyncSession, *, requester_id: int, record: Any
    ) -> FinancialRecordView:
        """Return the record view or raise."""
        ...

    async def authorize_recurring_rule_mutation(
        self, db: AsyncSession, *, requester_id: int, rule: Any
    ) -> RecurringRule:
        """Return the rule or raise."""
        ...
