"""Container Factory.

All construction logic lives here. The factory reads settings and builds
the container with its implementations.
"""

from typing import Optional

from finshare.core.config import Settings
from finshare.core.container.container import Container
from finshare.core.logging import logger
from finshare.domains.sharing.access_scope import AccessScopeResolver
from finshare.domains.sharing.grant_validation import GrantScopeValidator
from finshare.domains.sharing.permission_meta import PermissionMetaLoader
from finshare.domains.sharing.pipeline import BatchVisibilityPipeline
from finshare.domains.sharing.protocols import (
    GrantRepositoryProtocol,
    SourceRepositoryProtocol,
)
from finshare.domains.sharing.repository import GrantRepository, SourceRepository
from finshare.domains.sharing.write_gate import WriteGate


def create_container(
    settings: Settings,
    *,
    grant_repo: Optional[GrantRepositoryProtocol] = None,
    source_repo: Optional[SourceRepositoryProtocol] = None,
) -> Container:
    """Build the container.

    ``grant_repo`` / ``source_repo`` default to the SQLAlchemy repositories;
    tests pass in-memory fakes to exercise the real wiring.
    """
    grant_repo = grant_repo or GrantRepository()
    source_repo = source_repo or SourceRepository()

    if not settings.SHARING_SCOPE_FAIL_OPEN:
        logger.info("Unparseable grant scopes will match nothing (fail-closed)")

    meta_loader = PermissionMetaLoader(
        grant_repo=grant_repo,
        source_repo=source_repo,
        scope_fail_open=settings.SHARING_SCOPE_FAIL_OPEN,
    )

    return Container(
        grant_repo=grant_repo,
        source_repo=source_repo,
        access_scope=AccessScopeResolver(grant_repo=grant_repo),
        permission_meta_loader=meta_loader,
        visibility_pipeline=BatchVisibilityPipeline(meta_loader=meta_loader),
        write_gate=WriteGate(meta_loader=meta_loader),
        grant_validator=GrantScopeValidator(
            source_repo=source_repo,
            max_scope_tokens=settings.SHARING_MAX_SCOPE_TOKENS,
        ),
    )
