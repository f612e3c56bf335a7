"""Chain configuration registry."""

from dexquote.chains.defaults import DEFAULT_CHAINS
from dexquote.chains.registry import ChainConfig, ChainRegistry, load_chain_registry

__all__ = [
    "DEFAULT_CHAINS",
    "ChainConfig",
    "ChainRegistry",
    "load_chain_registry",
]
