"""Root conftest for pytest configuration and shared fixtures.

This conftest is loaded before both testpaths (tests/ and finshare/domains/),
making its fixtures available to centralized tests AND colocated domain tests.
"""

import os
from unittest.mock import AsyncMock

import pytest


# ---------------------------------------------------------------------------
# Environment variables: must be set before any finshare module import
# Uses setdefault so real env vars (CI) are never overridden.
# ---------------------------------------------------------------------------
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("POSTGRES_HOST", "localhost")
os.environ.setdefault("POSTGRES_USER", "test_user")
os.environ.setdefault("POSTGRES_PASSWORD", "test_password")
os.environ.setdefault("POSTGRES_DB", "test_db")


# ---------------------------------------------------------------------------
# Shared fake fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def db():
    """Stand-in for an AsyncSession; fakes never touch it."""
    return AsyncMock()


@pytest.fixture
def fake_grant_repo():
    """In-memory grant store that records calls."""
    from finshare.domains.sharing.fakes import FakeGrantRepository

    return FakeGrantRepository()


@pytest.fixture
def fake_source_repo():
    """In-memory source store that records calls."""
    from finshare.domains.sharing.fakes import FakeSourceRepository

    return FakeSourceRepository()


@pytest.fixture
def test_container(fake_grant_repo, fake_source_repo):
    """Container wired with real services over in-memory fakes."""
    from finshare.core.config import Settings
    from finshare.core.container import create_container

    return create_container(
        Settings(), grant_repo=fake_grant_repo, source_repo=fake_source_repo
    )
