from __future__ import annotations

from typing import Iterable, List, Optional, Union

import bittensor as bt

from taostake.api.errors import NotFound
from taostake.api.params import (
    parse_address,
    parse_address_list,
    parse_bool,
    parse_pagination,
    parse_required_address,
)
from taostake.api.schemas import (
    Provider,
    ProviderDelegator,
    ProviderFilter,
    ProviderQueryOptions,
)
from taostake.api.sources.base import ProviderSource


class ProviderQueryResolver:
    """
    Validates raw request parameters, calls the provider source, and maps
    absence to `NotFound`.

    Raw values are accepted as the transport hands them over (strings or
    None); typed values are accepted as well so the resolver can be used
    directly. No state is kept between calls.
    """

    def __init__(self, source: ProviderSource):
        self.source = source

    def list_providers(
        self,
        identity: Optional[str] = None,
        owner: Optional[str] = None,
        providers: Union[None, str, Iterable[str]] = None,
        with_identity_info: Union[None, bool, str] = None,
        with_latest_info: Union[None, bool, str] = None,
    ) -> List[Provider]:
        owner_address = parse_address(owner, "owner")
        provider_addresses = parse_address_list(providers, "providers")
        options = ProviderQueryOptions.apply_default_options(
            owner_address,
            {
                "with_identity_info": _flag(with_identity_info, "withIdentityInfo"),
                "with_latest_info": _flag(with_latest_info, "withLatestInfo"),
            },
        )
        provider_filter = ProviderFilter(identity=identity or None, owner=owner_address, providers=provider_addresses)

        result = list(self.source.find_many(provider_filter, options))
        bt.logging.debug(f"list_providers filter={provider_filter.model_dump(exclude_none=True)} -> {len(result)} providers")
        return result

    def get_provider(self, address: str) -> Provider:
        address = parse_required_address(address)
        provider = self.source.find_one(address)
        if provider is None:
            bt.logging.warning(f"Provider '{address}' not found")
            raise NotFound(f"Provider '{address}' not found")
        return provider

    def get_provider_avatar_url(self, address: str) -> str:
        # The avatar route takes the address as-is; no format check.
        url = self.source.avatar_url(address)
        if not url:
            raise NotFound("Provider avatar not found")
        return url

    def get_provider_delegators(
        self,
        address: str,
        from_: Union[None, int, str] = None,
        size: Union[None, int, str] = None,
    ) -> List[ProviderDelegator]:
        address = parse_required_address(address)
        pagination = parse_pagination(_as_str(from_), _as_str(size))

        delegators = self.source.delegators(address, pagination)
        if delegators is None:
            bt.logging.warning(f"Provider '{address}' not found")
            raise NotFound(f"Provider '{address}' not found")
        return list(delegators)

    def get_provider_delegators_count(self, address: str) -> int:
        # Unlike the delegators list, an unknown provider is not a 404 here.
        address = parse_required_address(address)
        return int(self.source.delegators_count(address))


def _flag(value: Union[None, bool, str], name: str) -> Optional[bool]:
    if value is None or isinstance(value, bool):
        return value
    return parse_bool(value, name)


def _as_str(value: Union[None, int, str]) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    return str(value)
