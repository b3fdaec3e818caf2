"""Sharing grant schemas."""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SharingGrantCreate(BaseModel):
    """Owner-supplied payload for a new grant.

    ``scope_source_ids`` is validated against the owner's sources before it is
    persisted; see ``GrantScopeValidator``.
    """

    recipient_user_id: int
    permission_level: Optional[str] = "read"
    scope_source_ids: Optional[List[Any]] = None


class SharingGrantUpdate(BaseModel):
    """Partial update. An explicit ``scope_source_ids=None`` clears the scope."""

    permission_level: Optional[str] = None
    scope_source_ids: Optional[List[Any]] = None


class SharingGrant(BaseModel):
    """Schema for a stored grant (with DB fields).

    ``scope`` is the raw stored value: normally a JSON array, but legacy rows
    may hold anything, so it is left untyped here and parsed by the
    permission meta loader.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_user_id: int
    recipient_user_id: int
    permission_level: Optional[str] = None
    scope: Optional[Any] = Field(default=None)
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
