"""ChainClient backed by web3.py's async HTTP provider."""

from __future__ import annotations

import os
from collections.abc import Sequence
from typing import Any

import structlog
from eth_abi import decode, encode  # type: ignore[attr-defined]
from eth_abi.exceptions import DecodingError, EncodingError
from web3 import AsyncHTTPProvider, AsyncWeb3, Web3
from web3.exceptions import ContractLogicError

from dexquote.contracts import ContractFunction
from dexquote.errors import (
    CallRevertedError,
    ChainTransportError,
    InvalidAddressError,
    MalformedResponseError,
)
from dexquote.models.types import is_valid_address

logger = structlog.get_logger()

# Per-request RPC timeout in seconds, overridable via DEXQUOTE_RPC_TIMEOUT
DEFAULT_RPC_TIMEOUT = float(os.environ.get("DEXQUOTE_RPC_TIMEOUT", "10"))


class Web3ChainClient:
    """Real client that issues eth_call requests via RPC.

    Arguments are ABI-encoded with eth-abi and return data decoded the same
    way, so no contract ABI JSON is needed. Every failure is re-raised as a
    ChainReadError subclass; nothing is retried here.
    """

    def __init__(self, rpc_url: str, timeout: float = DEFAULT_RPC_TIMEOUT):
        """Initialize client with an RPC endpoint.

        Args:
            rpc_url: HTTP RPC URL (e.g., "https://eth.llamarpc.com")
            timeout: Request timeout in seconds
        """
        self.rpc_url = rpc_url
        self.w3 = AsyncWeb3(AsyncHTTPProvider(rpc_url, request_kwargs={"timeout": timeout}))

    async def close(self) -> None:
        """Close the provider's cached aiohttp session."""
        await self.w3.provider.disconnect()

    async def call(
        self,
        address: str,
        function: ContractFunction,
        args: Sequence[Any] = (),
    ) -> tuple[Any, ...]:
        """Execute a read-only call and return the decoded outputs."""
        if not is_valid_address(address):
            raise InvalidAddressError(f"Invalid contract address: {address}")

        try:
            calldata = function.selector + encode(list(function.inputs), list(args))
        except EncodingError as e:
            # Caller bug, not a chain failure
            raise ValueError(f"Cannot encode arguments for {function.signature}: {e}") from e

        try:
            result = await self.w3.eth.call(
                {"to": Web3.to_checksum_address(address), "data": "0x" + calldata.hex()}
            )
        except ContractLogicError as e:
            logger.warning(
                "chain_call_reverted",
                address=address,
                function=function.signature,
                error=str(e),
            )
            raise CallRevertedError(
                f"{function.signature} reverted at {address}: {e}",
                address=address,
                function=function.signature,
            ) from e
        except Exception as e:
            logger.warning(
                "chain_call_failed",
                address=address,
                function=function.signature,
                rpc_url=self.rpc_url[:50],
                error=str(e),
            )
            raise ChainTransportError(
                f"{function.signature} failed at {address}: {e}",
                address=address,
                function=function.signature,
            ) from e

        data = bytes(result)
        if not data and function.outputs:
            # Calls to an address without code succeed with empty return data
            raise MalformedResponseError(
                f"{function.signature} returned no data at {address} (not a contract?)",
                address=address,
                function=function.signature,
            )

        try:
            return tuple(decode(list(function.outputs), data))
        except DecodingError as e:
            logger.warning(
                "chain_call_malformed",
                address=address,
                function=function.signature,
                error=str(e),
            )
            raise MalformedResponseError(
                f"Cannot decode {function.signature} result from {address}: {e}",
                address=address,
                function=function.signature,
            ) from e


__all__ = ["Web3ChainClient", "DEFAULT_RPC_TIMEOUT"]
