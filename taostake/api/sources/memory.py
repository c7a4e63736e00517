from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional

import bittensor as bt

from taostake.api.schemas import (
    PaginationParams,
    Provider,
    ProviderDelegator,
    ProviderFilter,
    ProviderQueryOptions,
)


def _rao(value: Optional[str]) -> int:
    try:
        return int(value or "0")
    except ValueError:
        return 0


class InMemoryProviderSource:
    """
    Read-only provider snapshot.

    Snapshot file layout:
        {"providers": [<Provider json>...], "delegators": {"<provider>": [<ProviderDelegator json>...]}}
    """

    def __init__(
        self,
        providers: Iterable[Provider] = (),
        delegators: Optional[Mapping[str, Iterable[ProviderDelegator]]] = None,
    ):
        self._providers: Dict[str, Provider] = {p.provider: p for p in providers}
        self._delegators: Dict[str, List[ProviderDelegator]] = {}
        for address, items in (delegators or {}).items():
            # Largest stake first.
            self._delegators[address] = sorted(items, key=lambda d: _rao(d.stake), reverse=True)

    @classmethod
    def from_json_file(cls, path: str | Path) -> "InMemoryProviderSource":
        with open(path, "r", encoding="utf-8") as handle:
            data = json.load(handle)
        providers = [Provider.model_validate(p) for p in data.get("providers") or []]
        delegators = {
            address: [ProviderDelegator.model_validate(d) for d in items or []]
            for address, items in (data.get("delegators") or {}).items()
        }
        bt.logging.info(f"Loaded provider snapshot from {path}: {len(providers)} providers")
        return cls(providers, delegators)

    def find_many(self, filter: ProviderFilter, options: ProviderQueryOptions) -> List[Provider]:  # noqa: A002
        wanted = set(filter.providers) if filter.providers else None
        out: List[Provider] = []
        for p in self._providers.values():
            if filter.identity is not None and p.identity != filter.identity:
                continue
            if filter.owner is not None and p.owner != filter.owner:
                continue
            if wanted is not None and p.provider not in wanted:
                continue
            if not options.with_identity_info and p.identity_info is not None:
                p = p.model_copy(update={"identity_info": None})
            out.append(p)

        # Featured first, then most locked stake.
        out.sort(key=lambda p: (p.featured, _rao(p.locked)), reverse=True)
        return out

    def find_one(self, address: str) -> Optional[Provider]:
        return self._providers.get(address)

    def avatar_url(self, address: str) -> Optional[str]:
        p = self._providers.get(address)
        if p is None or p.identity_info is None:
            return None
        return p.identity_info.avatar

    def delegators(self, address: str, pagination: PaginationParams) -> Optional[List[ProviderDelegator]]:
        if address not in self._providers:
            return None
        items = self._delegators.get(address, [])
        return items[pagination.from_ : pagination.from_ + pagination.size]

    def delegators_count(self, address: str) -> int:
        return len(self._delegators.get(address, []))
