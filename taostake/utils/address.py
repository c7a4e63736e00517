from __future__ import annotations

from typing import Any

from bittensor.utils import is_valid_ss58_address

# SS58 encoding of a 32-byte account id (1-byte prefix + key + 2-byte checksum).
SS58_ADDRESS_LENGTH = 48


def is_valid_address(value: Any) -> bool:
    """
    True when `value` is a checksum-valid ss58 account address.

    Raw `0x...` public keys are accepted by the underlying decoder but are not
    addresses, so the fixed ss58 length is enforced first.
    """
    if not isinstance(value, str) or len(value) != SS58_ADDRESS_LENGTH:
        return False
    try:
        return bool(is_valid_ss58_address(value))
    except (ValueError, IndexError):
        return False
