"""Dependency Injection Container Module.

Usage:
------
    # Initialize at startup (call once)
    from finshare.core.container import initialize_container
    from finshare.core.config import settings
    initialize_container(settings)

    # Import the global container after initialization
    from finshare.core import container as container_module
    pipeline = container_module.container.visibility_pipeline

    # In tests (construct directly with fakes, don't use global)
    from finshare.core.container import create_container
    test_container = create_container(
        settings, grant_repo=FakeGrantRepository(), source_repo=FakeSourceRepository()
    )
"""

from typing import TYPE_CHECKING

from finshare.core.container.container import Container
from finshare.core.container.factory import create_container

if TYPE_CHECKING:
    from finshare.core.config import Settings

__all__ = ["Container", "create_container", "container", "initialize_container"]


container: Container | None = None
"""Global container instance.

Initialized via `initialize_container()` at application startup.

Do NOT import this in domain code. Domains receive dependencies
via constructor parameters, never by importing the container directly.
"""


def initialize_container(settings: "Settings") -> None:
    """Initialize the global container. Call once at startup.

    Raises:
        RuntimeError: If called more than once (container already initialized)
    """
    global container

    if container is not None:
        raise RuntimeError(
            "Container already initialized. "
            "initialize_container() should only be called once at startup."
        )

    container = create_container(settings)


def reset_container() -> None:
    """Reset the global container to None. For testing only."""
    global container
    container = None
