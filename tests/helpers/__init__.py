"""Test helpers module for shared test utilities.

- constants: Addresses and the fixed test clock
- scripting: Functions that script a MockChainClient with pool state
- snapshots: Ready-made pool snapshots for quoting tests
"""

from tests.helpers.constants import (
    HIGH_TOKEN,
    LOW_TOKEN,
    NOW,
    PAIR,
    POOL,
    Q96,
    RECIPIENT,
    UNI,
    WETH,
)
from tests.helpers.scripting import (
    script_token,
    script_v2_pair,
    script_v2_quote,
    script_v3_pool,
    script_v3_quote,
)
from tests.helpers.snapshots import make_v2_snapshot, make_v3_snapshot

__all__ = [
    # Constants
    "WETH",
    "UNI",
    "LOW_TOKEN",
    "HIGH_TOKEN",
    "PAIR",
    "POOL",
    "RECIPIENT",
    "NOW",
    "Q96",
    # Scripting
    "script_token",
    "script_v2_pair",
    "script_v3_pool",
    "script_v2_quote",
    "script_v3_quote",
    # Snapshots
    "make_v2_snapshot",
    "make_v3_snapshot",
]
