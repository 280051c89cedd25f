"""Property-based tests for forward points curves and forward valuation.

Invariants:
- The curve reproduces its quoted nodes
- Between two nodes the points lie between the node values
- Past the last node the points stay at the last quote
- Buying and selling the same forward give opposite values
- Gross values add the notional back on the side the trade delivers
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from fxpoints.core.exchange_rate import ExchangeRate
from fxpoints.core.money import EUR, USD, Money
from fxpoints.core.time import Date
from fxpoints.core.types import ForwardType
from fxpoints.engines.forward_points import ForwardPointsEngine
from fxpoints.instruments.fx_forward import ForeignExchangeForward
from fxpoints.termstructures import FlatForward, InterpolatedFxForwardPointTermStructure

REFERENCE = Date(2020, 3, 11)
SPOT = ExchangeRate(EUR, USD, 1.1351)

points = st.floats(min_value=-500.0, max_value=500.0, allow_nan=False, allow_infinity=False)


@st.composite
def curves(draw):
    """Curve with 1 to 6 nodes at increasing day offsets."""
    offsets = draw(
        st.lists(st.integers(min_value=1, max_value=3650), min_size=1, max_size=6, unique=True)
    )
    offsets.sort()
    values = draw(st.lists(points, min_size=len(offsets), max_size=len(offsets)))
    dates = [REFERENCE + offset for offset in offsets]
    return InterpolatedFxForwardPointTermStructure(REFERENCE, SPOT, dates, values)


class TestCurveProperties:
    """Properties of the interpolated forward points curve."""

    @given(curve=curves())
    @settings(max_examples=50, deadline=None)
    def test_reproduces_nodes(self, curve):
        for node_date, value in curve.nodes():
            assert curve.forward_points(node_date) == pytest.approx(value, abs=1e-9)

    @given(curve=curves(), fraction=st.floats(min_value=0.0, max_value=1.0))
    @settings(max_examples=50, deadline=None)
    def test_bounded_between_nodes(self, curve, fraction):
        times, data = curve.times, curve.data
        for i in range(len(times) - 1):
            t = times[i] + fraction * (times[i + 1] - times[i])
            low, high = sorted((data[i], data[i + 1]))
            assert low - 1e-9 <= curve.forward_points(t) <= high + 1e-9

    @given(curve=curves(), beyond=st.floats(min_value=0.0, max_value=50.0))
    @settings(max_examples=50, deadline=None)
    def test_flat_past_last_node(self, curve, beyond):
        last = curve.forward_points_vector[-1]
        assert curve.forward_points(curve.max_time() + beyond) == last


class TestValuationProperties:
    """Properties of forward valuation."""

    @given(
        notional=st.floats(min_value=1.0, max_value=1e8, allow_nan=False),
        contract_rate=st.floats(min_value=0.5, max_value=2.0, allow_nan=False),
        days=st.integers(min_value=0, max_value=400),
    )
    @settings(max_examples=30, deadline=None)
    def test_buy_and_sell_offset(self, notional, contract_rate, days):
        curve = InterpolatedFxForwardPointTermStructure(
            REFERENCE, SPOT, [Date(2020, 6, 11), Date(2021, 3, 11)], [45.0, 160.0]
        )
        discount = FlatForward(REFERENCE, 0.01)
        values = []
        for forward_type in ForwardType:
            fwd = ForeignExchangeForward(
                REFERENCE + days,
                Money(notional, EUR),
                ExchangeRate(EUR, USD, contract_rate),
                forward_type,
            )
            fwd.set_pricing_engine(ForwardPointsEngine(SPOT, curve, discount, discount))
            values.append(fwd.npv())
        assert values[0] == pytest.approx(-values[1])

    @given(
        notional=st.floats(min_value=1.0, max_value=1e8, allow_nan=False),
        contract_rate=st.floats(min_value=0.5, max_value=2.0, allow_nan=False),
        days=st.integers(min_value=0, max_value=400),
        forward_type=st.sampled_from(ForwardType),
    )
    @settings(max_examples=30, deadline=None)
    def test_gross_values_add_back_notional(self, notional, contract_rate, days, forward_type):
        curve = InterpolatedFxForwardPointTermStructure(
            REFERENCE, SPOT, [Date(2020, 6, 11), Date(2021, 3, 11)], [45.0, 160.0]
        )
        discount = FlatForward(REFERENCE, 0.01)
        fwd = ForeignExchangeForward(
            REFERENCE + days,
            Money(notional, EUR),
            ExchangeRate(EUR, USD, contract_rate),
            forward_type,
        )
        fwd.set_pricing_engine(ForwardPointsEngine(SPOT, curve, discount, discount))
        sign = fwd.base_sign()

        base_net = fwd.forward_net_value_base().value
        base_gross = fwd.forward_gross_value_base().value
        if forward_type == ForwardType.SELL_BASE_BUY_TERM:
            assert base_net <= base_gross
        else:
            assert base_net >= base_gross
        assert base_gross == pytest.approx(base_net - sign * notional)

        term_net = fwd.forward_net_value_term().value
        term_notional = fwd.contract_notional_amount_term.value
        assert fwd.forward_gross_value_term().value == pytest.approx(
            term_net + sign * term_notional
        )
