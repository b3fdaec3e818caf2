"""Permission meta loader.

Turns the stored grant for one owner -> requester pair into a
``PermissionMeta``. Nothing is cached: a grant edited or revoked a moment ago
is reflected by the very next call.

Failure policy:
    * storage errors propagate untouched (the caller's batch aborts);
    * ``exists`` and ``writable`` are never guessed;
    * a scope value that is not a JSON array is absorbed according to
      ``scope_fail_open``: True treats it as "no restriction", False as a
      scope that matches nothing.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from finshare.core.logging import ContextualLogger
from finshare.core.logging import logger as default_logger
from finshare.domains.sharing.exceptions import ScopeParseError
from finshare.domains.sharing.protocols import (
    GrantRepositoryProtocol,
    PermissionMetaLoaderProtocol,
    SourceRepositoryProtocol,
)
from finshare.domains.sharing.types import (
    NumericToken,
    PermissionMeta,
    TextToken,
    is_writable_level,
    normalize_name,
    parse_scope,
)


class PermissionMetaLoader(PermissionMetaLoaderProtocol):
    """Loads and normalizes sharing grants into ``PermissionMeta``."""

    def __init__(
        self,
        grant_repo: GrantRepositoryProtocol,
        source_repo: SourceRepositoryProtocol,
        scope_fail_open: bool = True,
        logger: Optional[ContextualLogger] = None,
    ) -> None:
        """Initialize with the grant and source stores."""
        self._grant_repo = grant_repo
        self._source_repo = source_repo
        self._scope_fail_open = scope_fail_open
        self._logger = logger or default_logger

    async def load(self, db: AsyncSession, *, owner_id: int, requester_id: int) -> PermissionMeta:
        """Build the meta for ``requester_id`` looking at ``owner_id``'s data.

        Owners looking at their own data short-circuit without touching
        storage. Otherwise one grant lookup is made, plus at most one source
        name lookup when the scope holds numeric ids.
        """
        if owner_id == requester_id:
            return PermissionMeta.for_owner()

        log = self._logger.with_context(owner_id=owner_id, requester_id=requester_id)

        grant = await self._grant_repo.get_by_owner_and_recipient(
            db, owner_id=owner_id, recipient_id=requester_id
        )
        if grant is None:
            log.debug("No sharing grant")
            return PermissionMeta.missing()

        writable = is_writable_level(grant.permission_level)

        try:
            tokens = parse_scope(grant.scope)
        except ScopeParseError as e:
            policy = "unrestricted" if self._scope_fail_open else "matching nothing"
            log.warning(f"Unparseable scope on grant {grant.id}, treating as {policy}: {e}")
            if self._scope_fail_open:
                return PermissionMeta.unrestricted(writable)
            return PermissionMeta.matching_nothing(writable)

        if tokens is None:
            log.debug(f"Loaded unscoped grant (writable={writable})")
            return PermissionMeta.unrestricted(writable)

        numeric = [t for t in tokens if isinstance(t, NumericToken)]
        if not numeric:
            # Only ids restrict a grant; name tokens alone leave it unscoped
            log.debug(f"Loaded grant with no scoped ids (writable={writable})")
            return PermissionMeta.unrestricted(writable)

        names = {
            name for name in (normalize_name(t.value) for t in tokens if isinstance(t, TextToken))
            if name
        }
        names |= await self._resolve_source_names(db, owner_id, numeric)

        meta = PermissionMeta(
            exists=True,
            writable=writable,
            scope_ids_numeric=frozenset(t.value for t in numeric),
            scope_ids_text=frozenset(t.text for t in numeric),
            scope_names=frozenset(names),
        )
        log.debug(
            f"Loaded scoped grant (writable={writable}, "
            f"ids={len(meta.scope_ids_numeric)}, names={len(meta.scope_names)})"
        )
        return meta

    async def _resolve_source_names(
        self, db: AsyncSession, owner_id: int, tokens: list[NumericToken]
    ) -> set[str]:
        source_ids = sorted({t.value for t in tokens if isinstance(t.value, int)})
        if not source_ids:
            return set()
        raw_names = await self._source_repo.get_names_by_ids(
            db, owner_id=owner_id, source_ids=source_ids
        )
        return {name for name in (normalize_name(n) for n in raw_names) if name}
