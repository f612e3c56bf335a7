"""Chain client capability used by the resolvers and the quote builder."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from dexquote.contracts import ContractFunction


@runtime_checkable
class ChainClient(Protocol):
    """Read-only contract call capability.

    This allows swapping between a real RPC-based client and a mock client
    for testing. Implementations must support many calls in flight at once
    and never sign anything.

    Failures are raised as ChainReadError subclasses:
    - CallRevertedError: the call reverted
    - ChainTransportError: network failure or timeout
    - MalformedResponseError: return data could not be decoded
    """

    async def call(
        self,
        address: str,
        function: ContractFunction,
        args: Sequence[Any] = (),
    ) -> tuple[Any, ...]:
        """Execute a read-only call and return the decoded outputs.

        Args:
            address: Contract address
            function: Function to call, with its ABI types
            args: Positional arguments matching function.inputs

        Returns:
            Decoded return values, one per entry in function.outputs
        """
        ...

    async def close(self) -> None:
        """Release transport resources (HTTP sessions). Safe to call twice."""
        ...


__all__ = ["ChainClient"]
