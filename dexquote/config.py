"""Quote configuration."""

from dataclasses import dataclass
from decimal import Decimal

from dexquote.constants import V3_FEE_MEDIUM


@dataclass(frozen=True)
class QuoteConfig:
    """Tunable parameters for pool resolution and quoting.

    The 20-minute swap deadline is deliberately not here: it is a fixed
    constant (DEADLINE_WINDOW_SECONDS) and cannot be overridden.

    Attributes:
        advisory_fee_rate: Rate of the informational fee reported with each
            swap request (default: 0.3%)
        default_fee_tier: V3 fee tier used when the caller gives none
            (default: 3000, the 0.3% tier)
    """

    advisory_fee_rate: Decimal = Decimal("0.003")
    default_fee_tier: int = V3_FEE_MEDIUM


# Default configuration instance
DEFAULT_QUOTE_CONFIG = QuoteConfig()
