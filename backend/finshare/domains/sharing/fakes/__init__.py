"""Fake implementations for sharing domain testing."""

from finshare.domains.sharing.fakes.repository import FakeGrantRepository, FakeSourceRepository

__all__ = ["FakeGrantRepository", "FakeSourceRepository"]
