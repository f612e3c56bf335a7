"""Chain client capability and implementations."""

from dexquote.client.base import ChainClient
from dexquote.client.mock import CallKey, MockChainClient
from dexquote.client.web3_client import Web3ChainClient

__all__ = [
    "ChainClient",
    "CallKey",
    "MockChainClient",
    "Web3ChainClient",
]
