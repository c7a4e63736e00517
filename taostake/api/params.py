"""
Explicit request-parameter parsing.

Every handler calls these before touching a provider source, so a malformed
value never reaches the source. Failures raise `InvalidArgument` (HTTP 400).
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Union

from taostake.api.errors import InvalidArgument
from taostake.api.schemas import DEFAULT_PAGE_FROM, DEFAULT_PAGE_SIZE, PaginationParams
from taostake.utils.address import is_valid_address

_TRUE = {"true", "1"}
_FALSE = {"false", "0"}
_INT_RE = re.compile(r"-?[0-9]+")


def parse_address(value: Optional[str], name: str = "address") -> Optional[str]:
    if value is None or value == "":
        return None
    if not is_valid_address(value):
        raise InvalidArgument(f"Invalid address for parameter '{name}': {value!r}")
    return value


def parse_required_address(value: str, name: str = "address") -> str:
    address = parse_address(value, name)
    if address is None:
        raise InvalidArgument(f"Missing required parameter '{name}'")
    return address


def parse_address_list(value: Union[None, str, Iterable[str]], name: str = "providers") -> Optional[List[str]]:
    """Accepts `a,b,c` or repeated query values; empty input means no filter."""
    if value is None:
        return None
    raw = [value] if isinstance(value, str) else list(value)

    out: List[str] = []
    for chunk in raw:
        for item in chunk.split(","):
            item = item.strip()
            if not item:
                continue
            if not is_valid_address(item):
                raise InvalidArgument(f"Invalid address for parameter '{name}': {item!r}")
            out.append(item)
    return out or None


def parse_bool(value: Optional[str], name: str) -> Optional[bool]:
    if value is None or value == "":
        return None
    raw = value.strip().lower()
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    raise InvalidArgument(f"Validation failed for parameter '{name}' (boolean expected)")


def parse_int(value: Optional[str], name: str, default: int) -> int:
    if value is None or value == "":
        return default
    if not _INT_RE.fullmatch(value):
        raise InvalidArgument(f"Validation failed for parameter '{name}' (numeric string is expected)")
    return int(value)


def parse_pagination(from_: Optional[str], size: Optional[str]) -> PaginationParams:
    start = parse_int(from_, "from", DEFAULT_PAGE_FROM)
    count = parse_int(size, "size", DEFAULT_PAGE_SIZE)
    if start < 0:
        raise InvalidArgument("Parameter 'from' must be a non-negative integer")
    if count <= 0:
        raise InvalidArgument("Parameter 'size' must be a positive integer")
    return PaginationParams(from_=start, size=count)
