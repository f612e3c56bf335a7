"""Shared type definitions for chain configuration and API models."""

import string
from typing import Annotated, Any

from pydantic import AfterValidator, BeforeValidator, Field

from dexquote.errors import InvalidAddressError


def normalize_address(address: str, *, validate: bool = False) -> str:
    """Normalize an Ethereum address to lowercase.

    Args:
        address: An Ethereum address (with or without 0x prefix)
        validate: If True, raises InvalidAddressError for invalid addresses.
                  If False (default), returns normalized form without validation.

    Returns:
        Lowercase address with 0x prefix

    Raises:
        InvalidAddressError: If validate=True and address is not a valid Ethereum address
    """
    addr = address.lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr

    if validate and not is_valid_address(addr):
        raise InvalidAddressError(f"Invalid address: {address}")

    return addr


def is_valid_address(address: Any) -> bool:
    """Check if a value is a valid Ethereum address (0x + 40 hex chars)."""
    if not isinstance(address, str):
        return False
    if not address.startswith("0x"):
        return False
    if len(address) != 42:
        return False
    return all(c in string.hexdigits for c in address[2:])


def same_address(a: str, b: str) -> bool:
    """Case-insensitive address comparison."""
    return normalize_address(a) == normalize_address(b)


def _require_str(value: Any) -> Any:
    if not isinstance(value, str):
        raise ValueError(f"Address must be a string, got {type(value).__name__}")
    return value


# Ethereum address, accepted in any case and stored lowercase
Address = Annotated[
    str,
    BeforeValidator(_require_str),
    Field(pattern=r"^0x[a-fA-F0-9]{40}$"),
    AfterValidator(lambda v: v.lower()),
]
