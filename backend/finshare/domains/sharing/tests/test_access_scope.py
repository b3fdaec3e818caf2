"""Unit tests for AccessScopeResolver."""

import pytest

from finshare.domains.sharing.tests.conftest import OWNER_ID, RECIPIENT_ID, STRANGER_ID


class TestAccessibleOwnerIds:
    @pytest.mark.asyncio
    async def test_requester_alone_without_grants(self, db, resolver):
        assert await resolver.accessible_owner_ids(db, requester_id=STRANGER_ID) == [STRANGER_ID]

    @pytest.mark.asyncio
    async def test_includes_every_owner_sharing_with_requester(self, db, resolver, grant_repo):
        grant_repo.seed(OWNER_ID, RECIPIENT_ID, "read")
        grant_repo.seed(STRANGER_ID, RECIPIENT_ID, "write", scope="[9]")

        result = await resolver.accessible_owner_ids(db, requester_id=RECIPIENT_ID)

        assert result[0] == RECIPIENT_ID
        assert set(result) == {RECIPIENT_ID, OWNER_ID, STRANGER_ID}
        assert len(result) == 3

    @pytest.mark.asyncio
    async def test_requester_always_present_even_if_store_returns_it(self, db, resolver, grant_repo):
        grant_repo.seed(RECIPIENT_ID, RECIPIENT_ID)

        assert await resolver.accessible_owner_ids(db, requester_id=RECIPIENT_ID) == [RECIPIENT_ID]

    @pytest.mark.asyncio
    async def test_grants_in_other_direction_do_not_count(self, db, resolver, grant_repo):
        grant_repo.seed(RECIPIENT_ID, OWNER_ID)

        assert await resolver.accessible_owner_ids(db, requester_id=RECIPIENT_ID) == [RECIPIENT_ID]


class TestResolveViewOwner:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("as_owner", [OWNER_ID, str(OWNER_ID), f" {OWNER_ID} "])
    async def test_accepts_shared_owner(self, db, resolver, grant_repo, as_owner):
        grant_repo.seed(OWNER_ID, RECIPIENT_ID)

        result = await resolver.resolve_view_owner(
            db, requester_id=RECIPIENT_ID, as_owner_id=as_owner
        )
        assert result == OWNER_ID

    @pytest.mark.asyncio
    async def test_self_view(self, db, resolver, grant_repo):
        result = await resolver.resolve_view_owner(
            db, requester_id=RECIPIENT_ID, as_owner_id=RECIPIENT_ID
        )
        assert result == RECIPIENT_ID
        assert grant_repo.call_count("list_owner_ids_for_recipient") == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("as_owner", [None, "", "abc", "1.5", True])
    async def test_unusable_values_mean_aggregate_view(self, db, resolver, grant_repo, as_owner):
        grant_repo.seed(OWNER_ID, RECIPIENT_ID)

        assert (
            await resolver.resolve_view_owner(db, requester_id=RECIPIENT_ID, as_owner_id=as_owner)
            is None
        )

    @pytest.mark.asyncio
    async def test_owner_not_sharing_means_aggregate_view(self, db, resolver):
        assert (
            await resolver.resolve_view_owner(db, requester_id=RECIPIENT_ID, as_owner_id=OWNER_ID)
            is None
        )


class TestRecipientsOf:
    @pytest.mark.asyncio
    async def test_lists_recipients_without_owner(self, db, resolver, grant_repo):
        grant_repo.seed(OWNER_ID, RECIPIENT_ID)
        grant_repo.seed(OWNER_ID, STRANGER_ID)
        grant_repo.seed(OWNER_ID, OWNER_ID)

        assert sorted(await resolver.recipients_of(db, owner_id=OWNER_ID)) == [
            RECIPIENT_ID,
            STRANGER_ID,
        ]

    @pytest.mark.asyncio
    async def test_no_recipients(self, db, resolver):
        assert await resolver.recipients_of(db, owner_id=OWNER_ID) == []
