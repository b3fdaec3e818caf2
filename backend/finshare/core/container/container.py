"""Dependency Injection Container.

The container is a simple immutable dataclass that holds protocol implementations.
It has no construction logic; that belongs in the factory.

Design principles:
- Container serves, factory builds
- Type safety: fields are protocol types
- Testing: construct directly with fakes
"""

from dataclasses import dataclass, replace
from typing import Any

from finshare.domains.sharing.grant_validation import GrantScopeValidator
from finshare.domains.sharing.protocols import (
    AccessScopeResolverProtocol,
    BatchVisibilityPipelineProtocol,
    GrantRepositoryProtocol,
    PermissionMetaLoaderProtocol,
    SourceRepositoryProtocol,
    WriteGateProtocol,
)


@dataclass(frozen=True)
class Container:
    """Immutable container holding all protocol implementations.

    Usage:
        # Production: use the global container built by factory
        from finshare.core.container import container
        views = await container.visibility_pipeline.filter_visible(
            db, records=rows, requester_id=user_id
        )

        # Testing: construct directly with fakes
        test_container = Container(grant_repo=FakeGrantRepository(), ...)
    """

    # Storage protocols (grant + source reads)
    grant_repo: GrantRepositoryProtocol
    source_repo: SourceRepositoryProtocol

    # Sharing engine
    access_scope: AccessScopeResolverProtocol
    permission_meta_loader: PermissionMetaLoaderProtocol
    visibility_pipeline: BatchVisibilityPipelineProtocol
    write_gate: WriteGateProtocol

    # Owner-side grant payload validation
    grant_validator: GrantScopeValidator

    def replace(self, **changes: Any) -> "Container":
        """Create a new container with some dependencies replaced.

        Useful for partial overrides in tests:

            modified = container.replace(grant_repo=FakeGrantRepository())

        Note: services already built keep their original collaborators.
        """
        return replace(self, **changes)
