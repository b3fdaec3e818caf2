"""Sharing domain test fixtures and helpers."""

from datetime import date
from decimal import Decimal
from typing import Any, Optional

import pytest

from finshare.domains.sharing.access_scope import AccessScopeResolver
from finshare.domains.sharing.fakes.repository import FakeGrantRepository, FakeSourceRepository
from finshare.domains.sharing.permission_meta import PermissionMetaLoader
from finshare.domains.sharing.pipeline import BatchVisibilityPipeline
from finshare.domains.sharing.write_gate import WriteGate
from finshare.schemas.financial_record import FinancialRecord, RecurringRule

OWNER_ID = 1
RECIPIENT_ID = 2
STRANGER_ID = 3


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_record(
    record_id: int = 100,
    owner_id: int = OWNER_ID,
    kind: str = "expense",
    source_id: Any = None,
    target_id: Any = None,
    target_name: Optional[str] = None,
    **overrides: Any,
) -> FinancialRecord:
    defaults = dict(
        id=record_id,
        owner_id=owner_id,
        kind=kind,
        source_id=source_id,
        target_id=target_id,
        target_name=target_name,
        amount=Decimal("12.50"),
        date=date(2024, 5, 1),
        description=None,
    )
    defaults.update(overrides)
    return FinancialRecord(**defaults)


def _make_rule(
    rule_id: int = 500,
    owner_id: int = OWNER_ID,
    source_name: Optional[str] = None,
    target_name: Optional[str] = None,
    **overrides: Any,
) -> RecurringRule:
    defaults = dict(
        id=rule_id,
        owner_id=owner_id,
        kind="expense",
        source_name=source_name,
        target_name=target_name,
        amount=Decimal("9.99"),
        recurrence_type="monthly",
        recurrence_interval=1,
        start_date=date(2024, 1, 1),
    )
    defaults.update(overrides)
    return RecurringRule(**defaults)


def _make_loader(
    grant_repo: Optional[FakeGrantRepository] = None,
    source_repo: Optional[FakeSourceRepository] = None,
    scope_fail_open: bool = True,
) -> tuple[PermissionMetaLoader, FakeGrantRepository, FakeSourceRepository]:
    """Build a PermissionMetaLoader wired to fakes. Returns (loader, *fakes)."""
    gr = grant_repo or FakeGrantRepository()
    sr = source_repo or FakeSourceRepository()
    return PermissionMetaLoader(grant_repo=gr, source_repo=sr, scope_fail_open=scope_fail_open), gr, sr


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def grant_repo(fake_grant_repo):
    return fake_grant_repo


@pytest.fixture
def source_repo(fake_source_repo):
    return fake_source_repo


@pytest.fixture
def loader(grant_repo, source_repo):
    return PermissionMetaLoader(grant_repo=grant_repo, source_repo=source_repo)


@pytest.fixture
def resolver(grant_repo):
    return AccessScopeResolver(grant_repo=grant_repo)


@pytest.fixture
def pipeline(loader):
    return BatchVisibilityPipeline(meta_loader=loader)


@pytest.fixture
def write_gate(loader):
    return WriteGate(meta_loader=loader)
