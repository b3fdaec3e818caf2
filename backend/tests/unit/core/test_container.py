"""Unit tests for container construction and the global container lifecycle."""

import pytest

from finshare.core import container as container_module
from finshare.core.config import Settings
from finshare.core.container import create_container, initialize_container, reset_container
from finshare.domains.sharing.fakes import FakeGrantRepository, FakeSourceRepository
from finshare.domains.sharing.protocols import (
    AccessScopeResolverProtocol,
    BatchVisibilityPipelineProtocol,
    PermissionMetaLoaderProtocol,
    WriteGateProtocol,
)
from finshare.domains.sharing.repository import GrantRepository, SourceRepository


@pytest.fixture(autouse=True)
def _clean_global_container():
    reset_container()
    yield
    reset_container()


class TestCreateContainer:
    def test_services_satisfy_protocols(self, test_container):
        assert isinstance(test_container.access_scope, AccessScopeResolverProtocol)
        assert isinstance(test_container.permission_meta_loader, PermissionMetaLoaderProtocol)
        assert isinstance(test_container.visibility_pipeline, BatchVisibilityPipelineProtocol)
        assert isinstance(test_container.write_gate, WriteGateProtocol)

    def test_defaults_to_sqlalchemy_repositories(self):
        built = create_container(Settings(_env_file=None))

        assert isinstance(built.grant_repo, GrantRepository)
        assert isinstance(built.source_repo, SourceRepository)

    def test_fail_closed_setting_reaches_loader(self):
        built = create_container(
            Settings(_env_file=None, SHARING_SCOPE_FAIL_OPEN=False),
            grant_repo=FakeGrantRepository(),
            source_repo=FakeSourceRepository(),
        )
        assert built.permission_meta_loader._scope_fail_open is False

    def test_replace_returns_new_container(self, test_container):
        other = FakeGrantRepository()

        modified = test_container.replace(grant_repo=other)

        assert modified.grant_repo is other
        assert test_container.grant_repo is not other
        assert modified.write_gate is test_container.write_gate


class TestSharedWiring:
    @pytest.mark.asyncio
    async def test_pipeline_and_resolver_share_the_grant_store(
        self, db, test_container, fake_grant_repo
    ):
        from finshare.domains.sharing.tests.conftest import _make_record

        fake_grant_repo.seed(1, 2, "write")

        owners = await test_container.access_scope.accessible_owner_ids(db, requester_id=2)
        views = await test_container.visibility_pipeline.filter_visible(
            db, records=[_make_record(owner_id=1)], requester_id=2
        )

        assert owners == [2, 1]
        assert [v.editable for v in views] == [True]


class TestGlobalContainer:
    def test_initialize_once(self):
        initialize_container(Settings(_env_file=None))
        assert container_module.container is not None

        with pytest.raises(RuntimeError):
            initialize_container(Settings(_env_file=None))

    def test_reset(self):
        initialize_container(Settings(_env_file=None))
        reset_container()
        assert container_module.container is None
