"""Type definitions and enumerations for FX forward valuation.

All enumerations inherit from str for JSON serializability and easy comparison.
"""

from enum import Enum
from typing import TypeAlias

# Type aliases for clarity
Amount: TypeAlias = float  # Monetary amount
Rate: TypeAlias = float  # Exchange rate (units of target per unit of source)
ForwardPoints: TypeAlias = float  # Pips, 1/10000 of a rate unit
Time: TypeAlias = float  # Year fraction under some day count convention
Tenor: TypeAlias = str  # Format: NU (e.g., '1W', '3M', '1Y')

# Forward points are quoted in 1/10000 of the exchange rate unit.
PIP_FACTOR: float = 10000.0


class ExchangeRateType(str, Enum):
    """How an exchange rate was obtained.

    A direct rate carries a quoted number; a derived rate is the composition
    of two other rates and applies them in sequence.
    """

    DIRECT = "DIRECT"
    DERIVED = "DERIVED"


class ForwardType(str, Enum):
    """Direction of an FX forward seen from the base currency."""

    SELL_BASE_BUY_TERM = "SELL_BASE_BUY_TERM"
    BUY_BASE_SELL_TERM = "BUY_BASE_SELL_TERM"

    def get_sign(self) -> float:
        """Sign applied to the base notional.

        Returns:
            -1.0 when the base currency is sold, +1.0 when it is bought

        Example:
            >>> ForwardType.SELL_BASE_BUY_TERM.get_sign()
            -1.0
        """
        if self is ForwardType.SELL_BASE_BUY_TERM:
            return -1.0
        return 1.0


class DayCountConvention(str, Enum):
    """Day count conventions for year fraction calculation.

    References:
        ISDA 2006 Definitions, Section 4.16
    """

    AA = "AA"  # Actual/Actual ISDA
    A360 = "A360"  # Actual/360
    A365 = "A365"  # Actual/365 Fixed
    E30360 = "30E360"  # 30E/360 (Eurobond basis)
    B30360 = "30360"  # 30/360 US (Bond Basis)


class BusinessDayConvention(str, Enum):
    """Business day adjustment conventions.

    Modified conventions do not let the adjustment cross a month boundary.
    """

    UNADJUSTED = "UNADJUSTED"
    FOLLOWING = "FOLLOWING"
    MODIFIED_FOLLOWING = "MODIFIED_FOLLOWING"
    PRECEDING = "PRECEDING"
    MODIFIED_PRECEDING = "MODIFIED_PRECEDING"


class TimeUnit(str, Enum):
    """Units a tenor can be expressed in."""

    DAYS = "D"
    WEEKS = "W"
    MONTHS = "M"
    YEARS = "Y"
