from __future__ import annotations

from typing import Any, Dict, List, Optional, Type, TypeVar

import bittensor as bt
import requests
from pydantic import BaseModel, ValidationError
from requests.utils import quote

from taostake.api.errors import UpstreamFailure
from taostake.api.schemas import (
    PaginationParams,
    Provider,
    ProviderDelegator,
    ProviderFilter,
    ProviderQueryOptions,
)

M = TypeVar("M", bound=BaseModel)


def _is_dot_segment(address: str) -> bool:
    # `.` and `..` cannot be escaped: URL normalization collapses them even when percent-encoded.
    return address in (".", "..")


def _provider_path(address: str, *suffix: str) -> str:
    """`/providers/<address>/...` with the address escaped as a single path segment."""
    return "/".join(("/providers", quote(address, safe="")) + suffix)


def _validate(model: Type[M], item: Any) -> M:
    try:
        return model.model_validate(item)
    except ValidationError as exc:
        raise UpstreamFailure(f"Provider upstream returned a malformed {model.__name__} payload") from exc


class RemoteProviderSource:
    """
    Provider source backed by an upstream provider API exposing the same routes.

    Upstream 404s on single-provider routes mean "no such provider"; every other
    failure is raised as `UpstreamFailure`.
    """

    def __init__(self, base_url: str, *, timeout_s: float = 5.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s

    def _get(self, path: str, *, params: Optional[Dict[str, Any]] = None, allow_redirects: bool = True) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            r = requests.get(url, params=params, timeout=self.timeout_s, allow_redirects=allow_redirects)
        except requests.RequestException as exc:
            bt.logging.error(f"Provider upstream unreachable: GET {url}: {exc}")
            raise UpstreamFailure(f"Provider upstream unreachable: {exc}") from exc
        return r

    def _json(self, r: requests.Response, *, not_found_ok: bool = False) -> Any:
        if not_found_ok and r.status_code == 404:
            return None
        try:
            r.raise_for_status()
            return r.json()
        except (requests.RequestException, ValueError) as exc:
            bt.logging.error(f"Provider upstream failed with status {r.status_code}: {exc}")
            raise UpstreamFailure(f"Provider upstream error (status {r.status_code})") from exc

    def find_many(self, filter: ProviderFilter, options: ProviderQueryOptions) -> List[Provider]:  # noqa: A002
        params: Dict[str, Any] = {}
        if filter.identity is not None:
            params["identity"] = filter.identity
        if filter.owner is not None:
            params["owner"] = filter.owner
        if filter.providers:
            params["providers"] = ",".join(filter.providers)
        if options.with_identity_info:
            params["withIdentityInfo"] = "true"
        if options.with_latest_info:
            params["withLatestInfo"] = "true"

        data = self._json(self._get("/providers", params=params))
        if not isinstance(data, list):
            raise UpstreamFailure("Provider upstream returned a non-list provider payload")
        return [_validate(Provider, item) for item in data]

    def find_one(self, address: str) -> Optional[Provider]:
        if _is_dot_segment(address):
            return None
        data = self._json(self._get(_provider_path(address)), not_found_ok=True)
        if data is None:
            return None
        return _validate(Provider, data)

    def avatar_url(self, address: str) -> Optional[str]:
        if _is_dot_segment(address):
            return None
        r = self._get(_provider_path(address, "avatar"), allow_redirects=False)
        if r.status_code == 404:
            return None
        if r.is_redirect:
            return r.headers.get("location") or None
        self._json(r)
        raise UpstreamFailure(f"Provider upstream returned status {r.status_code} without an avatar redirect")

    def delegators(self, address: str, pagination: PaginationParams) -> Optional[List[ProviderDelegator]]:
        if _is_dot_segment(address):
            return None
        params = {"from": pagination.from_, "size": pagination.size}
        data = self._json(self._get(_provider_path(address, "delegators"), params=params), not_found_ok=True)
        if data is None:
            return None
        if not isinstance(data, list):
            raise UpstreamFailure("Provider upstream returned a non-list delegator payload")
        return [_validate(ProviderDelegator, item) for item in data]

    def delegators_count(self, address: str) -> int:
        if _is_dot_segment(address):
            return 0
        data = self._json(self._get(_provider_path(address, "delegators", "count")))
        try:
            return int(data)
        except (TypeError, ValueError) as exc:
            raise UpstreamFailure(f"Provider upstream returned a non-integer count: {data!r}") from exc
