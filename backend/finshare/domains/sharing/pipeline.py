"""Batch visibility pipeline.

Filters an ordered, multi-owner list of records down to what a requester may
see. Each distinct non-self owner costs one meta load per batch, however many
records that owner contributed.
"""

from typing import Any, Iterable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from finshare.core.logging import ContextualLogger
from finshare.core.logging import logger as default_logger
from finshare.domains.sharing.protocols import (
    BatchVisibilityPipelineProtocol,
    PermissionMetaLoaderProtocol,
)
from finshare.domains.sharing.types import PermissionMeta
from finshare.domains.sharing.visibility import coerce_record, evaluate_visibility
from finshare.schemas.financial_record import FinancialRecord, FinancialRecordView


def sort_records_newest_first(records: Iterable[Any]) -> list[FinancialRecord]:
    """Reference chronological order: date descending, then id descending."""
    return sorted(
        (coerce_record(r) for r in records),
        key=lambda r: (r.date, r.id),
        reverse=True,
    )


class BatchVisibilityPipeline(BatchVisibilityPipelineProtocol):
    """Stable visibility filter over a batch of records."""

    def __init__(
        self,
        meta_loader: PermissionMetaLoaderProtocol,
        logger: Optional[ContextualLogger] = None,
    ) -> None:
        """Initialize with the permission meta loader."""
        self._meta_loader = meta_loader
        self._logger = logger or default_logger

    async def load_metas(
        self, db: AsyncSession, *, owner_ids: Iterable[int], requester_id: int
    ) -> dict[int, PermissionMeta]:
        """Load the meta of every distinct non-self owner, once each."""
        metas: dict[int, PermissionMeta] = {}
        for owner_id in owner_ids:
            if owner_id == requester_id or owner_id in metas:
                continue
            metas[owner_id] = await self._meta_loader.load(
                db, owner_id=owner_id, requester_id=requester_id
            )
        return metas

    async def filter_visible(
        self, db: AsyncSession, *, records: Iterable[Any], requester_id: int
    ) -> list[FinancialRecordView]:
        """Keep only visible records, in input order, tagged with ``editable``.

        Storage failures while loading metas propagate and no partial result
        is returned.
        """
        batch = [coerce_record(r) for r in records]
        metas = await self.load_metas(
            db, owner_ids=(r.owner_id for r in batch), requester_id=requester_id
        )

        visible: list[FinancialRecordView] = []
        for record in batch:
            verdict = evaluate_visibility(record, requester_id, metas.get(record.owner_id))
            if verdict.visible:
                visible.append(
                    FinancialRecordView(**record.model_dump(), editable=verdict.editable)
                )

        self._logger.debug(
            f"Visibility filter kept {len(visible)}/{len(batch)} records "
            f"across {len(metas)} shared owner(s)",
            extra={"requester_id": requester_id},
        )
        return visible
