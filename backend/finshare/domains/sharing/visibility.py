"""Visibility evaluation for shared financial records.

Pure functions: given a record, the requester and the owner's
``PermissionMeta``, decide whether the record is visible and editable.

Rules, in order:

1. The owner sees and edits their own records; the meta is ignored.
2. Without a grant nothing is visible.
3. An unscoped grant makes every record visible. A scoped grant makes a
   record visible when its ``source_id`` or ``target_id`` is one of the
   scoped ids, compared both numerically and as trimmed text.
4. Income fallback: a scoped income record that failed rule 3 is still
   visible when its trimmed, lower-cased ``target_name`` is the name of a
   scoped source. Income counterparts were historically identified by
   name through the target column.
5. ``editable = visible and meta.writable``.

A scoped grant never shows records with no source and no target (and, for
income, no matching target name). Only an unscoped grant exposes those.
"""

from typing import Any, Iterable, Optional

from pydantic import BaseModel

from finshare.domains.sharing.types import (
    NumericToken,
    PermissionMeta,
    Visibility,
    normalize_name,
    parse_scope_token,
)
from finshare.schemas.financial_record import FinancialRecord, RecordKind, RecurringRule


def coerce_record(raw: Any) -> FinancialRecord:
    """Accept a schema instance, an ORM row or a dict row."""
    if isinstance(raw, FinancialRecord):
        return raw
    return FinancialRecord.model_validate(raw)


def coerce_rule(raw: Any) -> RecurringRule:
    """Accept a schema instance, an ORM row or a dict row."""
    if isinstance(raw, RecurringRule):
        return raw
    return RecurringRule.model_validate(raw)


def linkage_in_scope(value: Any, meta: PermissionMeta) -> bool:
    """Whether a record's ``source_id``/``target_id`` is one of the scoped ids."""
    if value is None or not meta.scoped:
        return False
    token = parse_scope_token(value)
    if isinstance(token, NumericToken) and token.value in meta.scope_ids_numeric:
        return True
    return str(value).strip() in (meta.scope_ids_text or frozenset())


def matches_scope_ids(record: FinancialRecord, meta: PermissionMeta) -> bool:
    """Primary scope rule: id linkage on either side of the record."""
    return linkage_in_scope(record.source_id, meta) or linkage_in_scope(record.target_id, meta)


def income_name_fallback(record: FinancialRecord, meta: PermissionMeta) -> bool:
    """Secondary scope rule for income records.

    Matches the record's target name against the names of the scoped sources.
    Never applies to expenses.
    """
    if record.kind != RecordKind.INCOME or not meta.scope_names:
        return False
    name = normalize_name(record.target_name)
    return name is not None and name in meta.scope_names


def evaluate_visibility(
    record: FinancialRecord, requester_id: int, meta: Optional[PermissionMeta]
) -> Visibility:
    """Decide visibility and editability of ``record`` for ``requester_id``.

    ``meta`` must be the meta for ``record.owner_id`` -> ``requester_id``; it
    may be None when the requester owns the record.
    """
    if record.owner_id == requester_id:
        return Visibility.full()
    if meta is None or not meta.exists:
        return Visibility.hidden()

    if not meta.scoped:
        visible = True
    else:
        visible = matches_scope_ids(record, meta) or income_name_fallback(record, meta)

    return Visibility(visible=visible, editable=visible and meta.writable)


def evaluate_named_linkage(
    owner_id: int,
    requester_id: int,
    meta: Optional[PermissionMeta],
    names: Iterable[Optional[str]],
) -> Visibility:
    """Decide visibility for objects linked by *name* rather than id.

    Recurring rules persist source and target names, so they are matched
    against ``meta.scope_names`` only.
    """
    if owner_id == requester_id:
        return Visibility.full()
    if meta is None or not meta.exists:
        return Visibility.hidden()

    if not meta.scoped:
        visible = True
    else:
        scope_names = meta.scope_names or frozenset()
        visible = any(normalize_name(n) in scope_names for n in names if normalize_name(n))

    return Visibility(visible=visible, editable=visible and meta.writable)


def evaluate_rule_visibility(
    rule: RecurringRule, requester_id: int, meta: Optional[PermissionMeta]
) -> Visibility:
    """Visibility of a recurring rule via its source and target names."""
    return evaluate_named_linkage(
        rule.owner_id, requester_id, meta, (rule.source_name, rule.target_name)
    )


def apply_changes(record: FinancialRecord, changes: Optional[BaseModel]) -> FinancialRecord:
    """Return ``record`` as it would look after ``changes`` (explicitly set fields only).

    Retargeting a record without a new ``target_name`` drops the old name so a
    stale display value cannot satisfy the income fallback.
    """
    if changes is None:
        return record
    update = changes.model_dump(exclude_unset=True)
    if "target_id" in update and "target_name" not in update:
        if update["target_id"] != record.target_id:
            update["target_name"] = None
    return record.model_copy(update=update)
