"""Chain registry: immutable per-chain configuration keyed by chain name."""

from __future__ import annotations

import json
import os
from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any, Literal

import structlog
from pydantic import BaseModel, ConfigDict, Field

from dexquote.chains.defaults import DEFAULT_CHAINS
from dexquote.errors import UnsupportedChainError
from dexquote.models.types import Address

logger = structlog.get_logger()

# Environment variables
CHAINS_FILE_ENV = "DEXQUOTE_CHAINS_FILE"
RPC_URL_ENV_PREFIX = "DEXQUOTE_RPC_URL_"


class ChainConfig(BaseModel):
    """Contract addresses and RPC endpoint for one chain.

    All addresses are validated on load and stored lowercase.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    rpc_url: str = Field(min_length=1)
    native_symbol: str = "ETH"
    wrapped_native: Address
    v2_factory: Address
    v2_router: Address
    v3_factory: Address | None = None
    v3_quoter: Address | None = None
    # 1 = Quoter (flat args), 2 = QuoterV2 (struct args)
    v3_quoter_version: Literal[1, 2] = 2
    v3_swap_router: Address | None = None

    @property
    def supports_v3(self) -> bool:
        return self.v3_factory is not None and self.v3_quoter is not None


class ChainRegistry:
    """Read-only mapping from chain name to ChainConfig.

    Lookups are case-insensitive. An unknown chain is an error, never a
    fallback to some default chain.
    """

    def __init__(self, configs: Mapping[str, ChainConfig]) -> None:
        chains: dict[str, ChainConfig] = {}
        for key, config in configs.items():
            norm = key.strip().lower()
            if norm in chains:
                raise ValueError(f"Duplicate chain key: {key}")
            # Snapshots carry config.name and are looked up by it again
            if config.name.strip().lower() != norm:
                raise ValueError(f"Chain key {key!r} does not match config name {config.name!r}")
            chains[norm] = config
        self._chains = MappingProxyType(chains)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Mapping[str, Any]]) -> ChainRegistry:
        """Build a registry from plain dicts (e.g., parsed JSON).

        The chain name defaults to the mapping key; an explicit name must
        match it.
        """
        configs = {
            key: ChainConfig.model_validate({"name": key.strip().lower(), **dict(value)})
            for key, value in raw.items()
        }
        return cls(configs)

    @classmethod
    def from_json_file(cls, path: str | Path) -> ChainRegistry:
        """Load a registry from a JSON object of chain name -> config."""
        with open(path) as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Chain file must contain a JSON object: {path}")
        return cls.from_mapping(data)

    def lookup(self, chain: str) -> ChainConfig:
        """Get the configuration for a chain.

        Raises:
            UnsupportedChainError: If the chain is not registered
        """
        config = self._chains.get(chain.strip().lower())
        if config is None:
            raise UnsupportedChainError(
                f"Unsupported chain: {chain} (supported: {', '.join(self.chains)})"
            )
        return config

    @property
    def chains(self) -> list[str]:
        """Registered chain names, sorted."""
        return sorted(self._chains)

    def __contains__(self, chain: object) -> bool:
        return isinstance(chain, str) and chain.strip().lower() in self._chains

    def __iter__(self) -> Iterator[str]:
        return iter(self.chains)

    def __len__(self) -> int:
        return len(self._chains)


def load_chain_registry(environ: Mapping[str, str] | None = None) -> ChainRegistry:
    """Load the registry once at startup.

    Uses the JSON file named by DEXQUOTE_CHAINS_FILE if set, else the
    built-in table. DEXQUOTE_RPC_URL_<CHAIN> overrides a chain's endpoint.

    Args:
        environ: Environment mapping (defaults to os.environ)

    Returns:
        The loaded ChainRegistry
    """
    env = os.environ if environ is None else environ

    chains_file = env.get(CHAINS_FILE_ENV)
    if chains_file:
        with open(chains_file) as f:
            raw: dict[str, dict[str, Any]] = json.load(f)
        source = chains_file
    else:
        raw = {key: dict(value) for key, value in DEFAULT_CHAINS.items()}
        source = "defaults"

    for key, value in raw.items():
        override = env.get(RPC_URL_ENV_PREFIX + key.strip().upper())
        if override:
            value["rpc_url"] = override

    registry = ChainRegistry.from_mapping(raw)
    logger.info("chain_registry_loaded", source=source, chains=registry.chains)
    return registry


__all__ = [
    "ChainConfig",
    "ChainRegistry",
    "load_chain_registry",
    "CHAINS_FILE_ENV",
    "RPC_URL_ENV_PREFIX",
]
