"""Mock chain client for testing without RPC calls."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from dexquote.contracts import ContractFunction
from dexquote.errors import CallRevertedError, ChainReadError
from dexquote.models.types import is_valid_address, normalize_address


def _freeze(value: Any) -> Any:
    """Make call arguments hashable and case-insensitive for addresses."""
    if isinstance(value, str) and is_valid_address(value):
        return normalize_address(value)
    if isinstance(value, list | tuple):
        return tuple(_freeze(v) for v in value)
    return value


@dataclass(frozen=True)
class CallKey:
    """Key for looking up responses in MockChainClient."""

    address: str
    function: str  # function signature, e.g. "getPair(address,address)"
    args: tuple[Any, ...] = ()

    @classmethod
    def of(cls, address: str, function: ContractFunction, args: Sequence[Any] = ()) -> CallKey:
        return cls(normalize_address(address), function.signature, _freeze(tuple(args)))


class MockChainClient:
    """Scripted ChainClient.

    Configure with expected responses, and track calls for assertions.
    A configured exception is raised instead of returned. Unconfigured
    calls revert, like calling a function the contract does not have.

    Usage:
        client = MockChainClient()
        client.respond(TOKEN, ERC20_DECIMALS, (), (18,))
        client.fail(PAIR, V2_PAIR_GET_RESERVES, (), ChainTransportError("timeout"))
    """

    def __init__(
        self,
        responses: dict[CallKey, tuple[Any, ...] | ChainReadError] | None = None,
        latency: float = 0.0,
    ):
        """Initialize mock client.

        Args:
            responses: Mapping of CallKey -> decoded outputs or exception to raise
            latency: Seconds each call sleeps before answering, to exercise concurrency
        """
        self.responses = dict(responses or {})
        self.latency = latency
        self.calls: list[tuple[str, str, tuple[Any, ...]]] = []  # (address, signature, args)
        self.in_flight = 0
        self.max_in_flight = 0
        self.close_count = 0

    def respond(
        self,
        address: str,
        function: ContractFunction,
        args: Sequence[Any],
        result: tuple[Any, ...],
    ) -> None:
        """Script the decoded outputs of a call."""
        self.responses[CallKey.of(address, function, args)] = result

    def fail(
        self,
        address: str,
        function: ContractFunction,
        args: Sequence[Any],
        error: ChainReadError,
    ) -> None:
        """Script a call to raise an error."""
        self.responses[CallKey.of(address, function, args)] = error

    def called(self, function: ContractFunction) -> bool:
        """True if any call to this function signature was made."""
        return any(sig == function.signature for _, sig, _ in self.calls)

    async def close(self) -> None:
        self.close_count += 1

    async def call(
        self,
        address: str,
        function: ContractFunction,
        args: Sequence[Any] = (),
    ) -> tuple[Any, ...]:
        key = CallKey.of(address, function, args)
        self.calls.append((key.address, key.function, key.args))

        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.latency:
                await asyncio.sleep(self.latency)
            else:
                await asyncio.sleep(0)
        finally:
            self.in_flight -= 1

        response = self.responses.get(key)
        if response is None:
            raise CallRevertedError(
                f"No scripted response for {function.signature} at {address}",
                address=address,
                function=function.signature,
            )
        if isinstance(response, BaseException):
            raise response
        return response


__all__ = ["CallKey", "MockChainClient"]
