"""Single-record read and mutation gating for shared records.

Decisions are terminal:
    * invisible (absent or not shared) -> ``RecordNotVisibleError``, the same
      "not found" an absent record would produce;
    * visible but not editable, or an edit that would move the record out of
      the shared scope -> ``WriteForbiddenError``.
"""

from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from finshare.core.logging import ContextualLogger
from finshare.core.logging import logger as default_logger
from finshare.domains.sharing.exceptions import (
    RecordNotVisibleError,
    RecurringRuleNotVisibleError,
    WriteForbiddenError,
)
from finshare.domains.sharing.protocols import PermissionMetaLoaderProtocol, WriteGateProtocol
from finshare.domains.sharing.types import PermissionMeta, Visibility
from finshare.domains.sharing.visibility import (
    apply_changes,
    coerce_record,
    coerce_rule,
    evaluate_rule_visibility,
    evaluate_visibility,
)
from finshare.schemas.financial_record import (
    FinancialRecord,
    FinancialRecordLinkageUpdate,
    FinancialRecordView,
    RecurringRule,
)


class WriteGate(WriteGateProtocol):
    """Gates reads and writes of individual records and recurring rules."""

    def __init__(
        self,
        meta_loader: PermissionMetaLoaderProtocol,
        logger: Optional[ContextualLogger] = None,
    ) -> None:
        """Initialize with the permission meta loader."""
        self._meta_loader = meta_loader
        self._logger = logger or default_logger

    async def get_visible_record(
        self, db: AsyncSession, *, requester_id: int, record: Any
    ) -> FinancialRecordView:
        """Return the record view, or raise ``RecordNotVisibleError``.

        ``record`` may be None (lookup found nothing); that raises the same
        error as a record that exists but is not shared.
        """
        if record is None:
            raise RecordNotVisibleError()
        current = coerce_record(record)
        _, verdict = await self._evaluate(db, current, requester_id)
        if not verdict.visible:
            raise RecordNotVisibleError()
        return FinancialRecordView(**current.model_dump(), editable=verdict.editable)

    async def authorize_record_update(
        self,
        db: AsyncSession,
        *,
        requester_id: int,
        record: Any,
        changes: Optional[FinancialRecordLinkageUpdate] = None,
    ) -> FinancialRecord:
        """Authorize an edit and return the record as it would look afterwards.

        The proposed record is re-evaluated under the same grant, so a
        recipient with a scoped writable grant cannot move a record to a
        source or target outside the scope.
        """
        if record is None:
            raise RecordNotVisibleError()
        current = coerce_record(record)
        meta, verdict = await self._evaluate(db, current, requester_id)
        self._require_editable(current, requester_id, verdict)

        proposed = apply_changes(current, changes)
        if not evaluate_visibility(proposed, requester_id, meta).editable:
            self._deny(current, requester_id, WriteForbiddenError.OUT_OF_SCOPE)
        return proposed

    async def authorize_record_delete(
        self, db: AsyncSession, *, requester_id: int, record: Any
    ) -> FinancialRecordView:
        """Authorize deleting a record."""
        if record is None:
            raise RecordNotVisibleError()
        current = coerce_record(record)
        _, verdict = await self._evaluate(db, current, requester_id)
        self._require_editable(current, requester_id, verdict)
        return FinancialRecordView(**current.model_dump(), editable=True)

    async def authorize_recurring_rule_mutation(
        self, db: AsyncSession, *, requester_id: int, rule: Any
    ) -> RecurringRule:
        """Authorize editing or deleting a recurring rule.

        Rules are linked by source/target *name*, matched against the names
        of the scoped sources.
        """
        if rule is None:
            raise RecurringRuleNotVisibleError()
        current = coerce_rule(rule)
        meta = await self._meta_loader.load(
            db, owner_id=current.owner_id, requester_id=requester_id
        )
        verdict = evaluate_rule_visibility(current, requester_id, meta)
        if not verdict.visible:
            raise RecurringRuleNotVisibleError()
        if not verdict.editable:
            self._logger.info(
                f"Denied recurring rule {current.id} mutation: read-only grant",
                extra={"requester_id": requester_id, "owner_id": current.owner_id},
            )
            raise WriteForbiddenError(WriteForbiddenError.READ_ONLY)
        return current

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _evaluate(
        self, db: AsyncSession, record: FinancialRecord, requester_id: int
    ) -> tuple[PermissionMeta, Visibility]:
        meta = await self._meta_loader.load(
            db, owner_id=record.owner_id, requester_id=requester_id
        )
        return meta, evaluate_visibility(record, requester_id, meta)

    def _require_editable(
        self, record: FinancialRecord, requester_id: int, verdict: Visibility
    ) -> None:
        if not verdict.visible:
            raise RecordNotVisibleError()
        if not verdict.editable:
            self._deny(record, requester_id, WriteForbiddenError.READ_ONLY)

    def _deny(self, record: FinancialRecord, requester_id: int, reason: str) -> None:
        self._logger.info(
            f"Denied mutation of record {record.id}: {reason}",
            extra={"requester_id": requester_id, "owner_id": record.owner_id},
        )
        raise WriteForbiddenError(reason)
