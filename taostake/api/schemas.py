from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


DEFAULT_PAGE_FROM = 0
DEFAULT_PAGE_SIZE = 25


class _WireModel(BaseModel):
    # camelCase on the wire, snake_case in Python; immutable once built.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ProviderIdentity(_WireModel):
    identity: str
    name: Optional[str] = None
    description: Optional[str] = None
    avatar: Optional[str] = None
    website: Optional[str] = None
    twitter: Optional[str] = None
    location: Optional[str] = None


class Provider(_WireModel):
    # Delegate hotkey (ss58).
    provider: str
    owner: Optional[str] = None
    featured: bool = False

    service_fee: float = 0.0
    delegation_cap: str = "0"
    apr: float = 0.0
    num_users: int = 0
    num_nodes: int = 0
    cumulated_rewards: Optional[str] = None

    # Stake amounts are decimal strings in rao.
    stake: str = "0"
    top_up: str = "0"
    locked: str = "0"

    identity: Optional[str] = None
    # Only populated when the caller asks for identity info.
    identity_info: Optional[ProviderIdentity] = None


class ProviderDelegator(_WireModel):
    address: str
    stake: str = "0"


class ProviderFilter(_WireModel):
    identity: Optional[str] = None
    owner: Optional[str] = None
    providers: Optional[List[str]] = None


class ProviderQueryOptions(_WireModel):
    with_identity_info: bool = False
    with_latest_info: bool = False
    owner_address: Optional[str] = None

    @classmethod
    def apply_default_options(cls, owner: Optional[str], options: dict[str, Any]) -> "ProviderQueryOptions":
        """
        Merge raw flags over the defaults (unset flags stay False) and record
        `owner` so sources can scope enrichment to the owner after filtering.
        """
        flags = {k: bool(v) for k, v in options.items() if v is not None}
        return cls(**flags, owner_address=owner or None)


class PaginationParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    from_: int = Field(default=DEFAULT_PAGE_FROM, ge=0)
    size: int = Field(default=DEFAULT_PAGE_SIZE, gt=0)
