from __future__ import annotations

from typing import List, Optional, Protocol

from taostake.api.schemas import (
    PaginationParams,
    Provider,
    ProviderDelegator,
    ProviderFilter,
    ProviderQueryOptions,
)


class ProviderSource(Protocol):
    """Where provider data comes from. `None` always means "no such provider"."""

    def find_many(self, filter: ProviderFilter, options: ProviderQueryOptions) -> List[Provider]:  # noqa: A002
        ...

    def find_one(self, address: str) -> Optional[Provider]:
        ...

    def avatar_url(self, address: str) -> Optional[str]:
        ...

    def delegators(self, address: str, pagination: PaginationParams) -> Optional[List[ProviderDelegator]]:
        ...

    def delegators_count(self, address: str) -> int:
        ...
