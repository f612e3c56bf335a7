"""Pytest configuration and fixtures."""

import pytest

from dexquote.chains.defaults import DEFAULT_CHAINS
from dexquote.chains.registry import ChainConfig, ChainRegistry
from dexquote.client.base import ChainClient
from dexquote.client.mock import MockChainClient
from dexquote.engine import PoolQuoteEngine
from tests.helpers.constants import NOW


@pytest.fixture
def registry() -> ChainRegistry:
    """Registry built from the built-in chain table."""
    return ChainRegistry.from_mapping(DEFAULT_CHAINS)


@pytest.fixture
def eth(registry: ChainRegistry) -> ChainConfig:
    """Mainnet config (Quoter V1, has a V3 swap router)."""
    return registry.lookup("eth")


@pytest.fixture
def bsc(registry: ChainRegistry) -> ChainConfig:
    """BSC config (QuoterV2, no V3 swap router)."""
    return registry.lookup("bsc")


@pytest.fixture
def mock_client() -> MockChainClient:
    """Empty scripted chain client."""
    return MockChainClient()


@pytest.fixture
def clock():
    """Fixed clock returning NOW."""
    return lambda: float(NOW)


# =============================================================================
# Engine with dependency injection
# =============================================================================


class RecordingFactory:
    """Client factory that hands out one client and records which chains asked."""

    def __init__(self, client: ChainClient) -> None:
        self.client = client
        self.chains: list[str] = []

    def __call__(self, chain: ChainConfig) -> ChainClient:
        self.chains.append(chain.name)
        return self.client


@pytest.fixture
def client_factory(mock_client: MockChainClient) -> RecordingFactory:
    """Factory returning the shared mock client."""
    return RecordingFactory(mock_client)


@pytest.fixture
def engine(registry: ChainRegistry, client_factory: RecordingFactory) -> PoolQuoteEngine:
    """Engine wired to the mock client."""
    return PoolQuoteEngine(registry, client_factory=client_factory, clock=lambda: float(NOW))
