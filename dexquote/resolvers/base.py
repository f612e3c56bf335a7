"""Shared helpers for pool resolvers."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import Any

from dexquote.client.base import ChainClient
from dexquote.contracts import ERC20_DECIMALS, ERC20_SYMBOL, ContractFunction
from dexquote.errors import MalformedResponseError
from dexquote.models.types import is_valid_address, normalize_address
from dexquote.units import MAX_DECIMALS


async def fan_out(*awaitables: Awaitable[Any]) -> list[Any]:
    """Run independent reads concurrently and wait for all of them.

    All-or-nothing: the first failure cancels the reads still in flight
    and is re-raised unchanged, so a stage never yields partial results.

    Returns:
        Results in argument order
    """
    tasks = [asyncio.ensure_future(aw) for aw in awaitables]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        # Let cancelled reads unwind before the error reaches the caller
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


async def read_one(
    client: ChainClient,
    address: str,
    function: ContractFunction,
    args: tuple[Any, ...] = (),
) -> Any:
    """Call a single-output function and return its only value."""
    result = await client.call(address, function, args)
    if len(result) != 1:
        raise MalformedResponseError(
            f"{function.signature} returned {len(result)} values, expected 1",
            address=address,
            function=function.signature,
        )
    return result[0]


async def read_address(
    client: ChainClient,
    address: str,
    function: ContractFunction,
    args: tuple[Any, ...] = (),
) -> str:
    """Call a function returning an address and normalize it."""
    value = await read_one(client, address, function, args)
    if not is_valid_address(value):
        raise MalformedResponseError(
            f"{function.signature} returned a non-address: {value!r}",
            address=address,
            function=function.signature,
        )
    return normalize_address(value)


async def read_symbol(client: ChainClient, token: str) -> str:
    """Read an ERC20 symbol."""
    value = await read_one(client, token, ERC20_SYMBOL)
    if not isinstance(value, str):
        raise MalformedResponseError(
            f"symbol() returned {type(value).__name__}, expected str",
            address=token,
            function=ERC20_SYMBOL.signature,
        )
    return value


async def read_decimals(client: ChainClient, token: str) -> int:
    """Read ERC20 decimals, checking the uint8 range."""
    value = await read_one(client, token, ERC20_DECIMALS)
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= MAX_DECIMALS:
        raise MalformedResponseError(
            f"decimals() returned {value!r}, expected uint8",
            address=token,
            function=ERC20_DECIMALS.signature,
        )
    return value


def read_uint(value: Any, *, address: str, function: ContractFunction) -> int:
    """Check that a decoded value is a non-negative integer."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise MalformedResponseError(
            f"{function.signature} returned {value!r}, expected unsigned integer",
            address=address,
            function=function.signature,
        )
    return value


__all__ = [
    "fan_out",
    "read_one",
    "read_address",
    "read_symbol",
    "read_decimals",
    "read_uint",
]
