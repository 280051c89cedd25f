"""EUR-USD FX Forward Valuation Example

This example values two FX forwards as of 11 March 2020:

1. A 3-month EUR/USD outright: sell EUR 10,000 at 1.1389 against a spot of
   1.1351 and 45 forward points, discounted on a deposit curve.
2. A 5-day USD/EUR outright: sell USD 12,925,000 at 0.897487215294618 against
   a USD/EUR forward points curve, each leg discounted on its own curve.

It demonstrates:
- Tenor and spot date arithmetic with FxTerms
- The flat quote engine and the forward points curve engine
- Lazy recalculation when market data moves
- Evaluating a forward points curve on a grid with the JAX kernels
"""

import numpy as np

from fxpoints.core import (
    EUR,
    USD,
    Date,
    DayCountConvention,
    ExchangeRate,
    ForwardExchangeRate,
    Money,
    Period,
    Settings,
)
from fxpoints.engines import FlatForwardPointsEngine, ForwardPointsEngine
from fxpoints.instruments import ForeignExchangeForward, FxTerms
from fxpoints.observers import RelinkableHandle
from fxpoints.termstructures import (
    FlatForward,
    InterpolatedDiscountCurve,
    InterpolatedFxForwardPointTermStructure,
)
from fxpoints.utilities import MondayToFridayCalendar, year_fraction

# Deposit rates (Actual/360, simple compounding)
DEPOSITS = [
    ("1W", -0.00523),
    ("1M", -0.00503),
    ("3M", -0.00473),
    ("6M", -0.00429),
    ("1Y", -0.00339),
]


def deposit_discount_curve(today: Date) -> InterpolatedDiscountCurve:
    """Discount factors implied by simple deposit rates, interpolated log-linearly."""
    calendar = MondayToFridayCalendar()
    dates, discounts = [today], [1.0]
    for tenor, rate in DEPOSITS:
        maturity = calendar.advance(today, tenor)
        tau = year_fraction(today, maturity, DayCountConvention.A360)
        dates.append(maturity)
        discounts.append(1.0 / (1.0 + rate * tau))
    return InterpolatedDiscountCurve(dates, discounts, DayCountConvention.AA)


def main():
    """Run the FX forward valuation example."""
    print("=" * 80)
    print("FX FORWARD VALUATION")
    print("=" * 80)
    print()

    today = Date(2020, 3, 11)
    Settings.instance().evaluation_date = today
    print(f"Today: {today} (weekday {today.weekday()})")
    print()

    # ==================== Flat Quote Valuation ====================

    terms = FxTerms.for_currency_pair(EUR, USD)
    delivery = terms.calendar.adjust(today + Period.parse("3M"))
    fx_forward = ForeignExchangeForward(
        delivery, Money(10000.0, EUR), ExchangeRate(EUR, USD, 1.1389)
    )
    print(f"Valuation of FxFwd: {fx_forward}")
    print("-" * 80)

    spot_rate, forward_points = 1.1351, 45.0
    discount_handle = RelinkableHandle(deposit_discount_curve(today))
    fx_forward.set_pricing_engine(
        FlatForwardPointsEngine(USD, spot_rate, forward_points, discount_handle)
    )

    print(f"Spot Rate:           {spot_rate:.4f}")
    print(f"Forward Points:      {forward_points:.1f} pips")
    print(f"All-in Forward:      {spot_rate + forward_points / 10000.0:.4f}")
    print(f"Forward Value:       {fx_forward.forward_net_value_term()}")
    print(f"NPV:                 {fx_forward.npv():,.6f} USD")
    print()

    discount_handle.link_to(FlatForward(today, 0.0))
    print(f"NPV (no discounting): {fx_forward.npv():,.6f} USD")
    print()

    # ==================== Forward Points Curve Valuation ====================

    usd_eur_spot = ExchangeRate(USD, EUR, 0.9103736341)
    quotes = [
        ForwardExchangeRate(usd_eur_spot, -4.051701, Period.parse("1W")),
        ForwardExchangeRate(usd_eur_spot, -17.6, Period.parse("1M")),
        ForwardExchangeRate(usd_eur_spot, -52.3, Period.parse("3M")),
    ]
    points_curve = InterpolatedFxForwardPointTermStructure.from_forward_rates(today, quotes)

    usd_eur_forward = ForeignExchangeForward(
        Date(2020, 3, 16),
        Money(12925000.0, USD),
        ExchangeRate(USD, EUR, 0.897487215294618),
        terms=FxTerms(day_count_convention=DayCountConvention.A365),
    )
    usd_eur_forward.set_pricing_engine(
        ForwardPointsEngine(
            usd_eur_spot, points_curve, FlatForward(today, 0.0), FlatForward(today, 0.0)
        )
    )

    print(f"Valuation of FxFwd: {usd_eur_forward}")
    print("-" * 80)
    print(f"Fair Forward Points: {usd_eur_forward.fair_forward_points():.6f}")
    print(f"Forward Rate:        {usd_eur_forward.result('forward_rate'):.10f}")
    print(f"Term Notional:       {usd_eur_forward.contract_notional_amount_term}")
    print(f"Term Net Value:      {usd_eur_forward.forward_net_value_term()}")
    print(f"Term Gross Value:    {usd_eur_forward.forward_gross_value_term()}")
    print(f"Base Net Value:      {usd_eur_forward.forward_net_value_base()}")
    print()

    # ==================== Curve on a Grid ====================

    grid = np.linspace(0.0, 0.3, 7)
    print("Forward points curve:")
    print(f"{'Time':>8} {'Points':>12}")
    for t, p in zip(grid, np.asarray(points_curve.forward_points_at(grid))):
        print(f"{t:>8.3f} {p:>12.4f}")
    print()

    print("=" * 80)


if __name__ == "__main__":
    main()
