"""Unit tests for the SQLAlchemy sharing repositories.

The session is mocked; these tests check the issued statements and how
results are mapped, not the database.
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.dialects import postgresql

from finshare.domains.sharing.repository import GrantRepository, SourceRepository
from finshare.models.sharing_grant import SharingGrant


def _result(scalars):
    result = MagicMock()
    result.scalars.return_value.all.return_value = list(scalars)
    result.scalars.return_value.first.return_value = scalars[0] if scalars else None
    return result


def _sql(db) -> str:
    stmt = db.execute.await_args.args[0]
    return str(stmt.compile(dialect=postgresql.dialect()))


class TestGrantRepository:
    @pytest.mark.asyncio
    async def test_get_by_owner_and_recipient(self, db):
        grant = SharingGrant(id=1, owner_user_id=1, recipient_user_id=2)
        db.execute.return_value = _result([grant])

        found = await GrantRepository().get_by_owner_and_recipient(
            db, owner_id=1, recipient_id=2
        )

        assert found is grant
        sql = _sql(db)
        assert "sharing_grant.owner_user_id" in sql
        assert "sharing_grant.recipient_user_id" in sql

    @pytest.mark.asyncio
    async def test_get_missing(self, db):
        db.execute.return_value = _result([])

        assert (
            await GrantRepository().get_by_owner_and_recipient(db, owner_id=1, recipient_id=2)
            is None
        )

    @pytest.mark.asyncio
    async def test_list_owner_ids_coerces_to_int(self, db):
        db.execute.return_value = _result(["4", 5])

        assert await GrantRepository().list_owner_ids_for_recipient(db, recipient_id=2) == [4, 5]

    @pytest.mark.asyncio
    async def test_list_recipient_ids(self, db):
        db.execute.return_value = _result([2, 3])

        assert await GrantRepository().list_recipient_ids_for_owner(db, owner_id=1) == [2, 3]


class TestSourceRepository:
    @pytest.mark.asyncio
    async def test_empty_ids_skip_query(self, db):
        repo = SourceRepository()

        assert await repo.get_names_by_ids(db, owner_id=1, source_ids=[]) == []
        assert await repo.get_owned_ids(db, owner_id=1, source_ids=[]) == set()
        db.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_names_filtered_by_owner(self, db):
        db.execute.return_value = _result(["Salary"])

        names = await SourceRepository().get_names_by_ids(db, owner_id=1, source_ids=[7, 8])

        assert names == ["Salary"]
        assert db.execute.await_count == 1
        sql = _sql(db)
        assert "source.user_id" in sql
        assert "IN" in sql

    @pytest.mark.asyncio
    async def test_owned_ids(self, db):
        db.execute.return_value = _result([7])

        assert await SourceRepository().get_owned_ids(db, owner_id=1, source_ids=[7, 9]) == {7}
