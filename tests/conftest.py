"""Pytest configuration and shared fixtures for fxpoints tests.

This module provides the market data of the two reference valuations used
across the suite (a EUR/USD flat quote and a USD/EUR forward points curve) and
pins the global evaluation date for every test.
"""

from typing import Any

import jax
import pytest

from fxpoints.core import EUR, USD, Date, ExchangeRate, saved_settings
from fxpoints.termstructures import FlatForward, InterpolatedFxForwardPointTermStructure

EVALUATION_DATE = Date(2020, 3, 11)


@pytest.fixture(autouse=True)
def evaluation_date() -> Date:
    """Pin the evaluation date to 2020-03-11 and restore it afterwards.

    Returns:
        The pinned evaluation date
    """
    with saved_settings() as settings:
        settings.evaluation_date = EVALUATION_DATE
        yield EVALUATION_DATE


@pytest.fixture
def sample_dates() -> dict[str, Date]:
    """Provide common date fixtures for testing.

    Returns:
        Dictionary of commonly used dates in tests
    """
    return {
        "today": EVALUATION_DATE,
        "spot": Date(2020, 3, 13),
        "one_week": Date(2020, 3, 18),
        "delivery": Date(2020, 3, 16),
        "three_months": Date(2020, 6, 11),
        "past": Date(2020, 1, 2),
    }


@pytest.fixture
def eur_usd_spot() -> ExchangeRate:
    """EUR/USD spot used by the flat quote valuation."""
    return ExchangeRate(EUR, USD, 1.1351)


@pytest.fixture
def usd_eur_spot() -> ExchangeRate:
    """USD/EUR spot the forward points curve is quoted against."""
    return ExchangeRate(USD, EUR, 0.9103736341)


@pytest.fixture
def usd_eur_curve(usd_eur_spot: ExchangeRate) -> InterpolatedFxForwardPointTermStructure:
    """Single-node USD/EUR forward points curve (1W at -4.051701 pips)."""
    return InterpolatedFxForwardPointTermStructure(
        EVALUATION_DATE, usd_eur_spot, [Date(2020, 3, 18)], [-4.051701]
    )


@pytest.fixture
def multi_node_curve(usd_eur_spot: ExchangeRate) -> InterpolatedFxForwardPointTermStructure:
    """USD/EUR forward points curve with 1W, 1M and 3M nodes."""
    return InterpolatedFxForwardPointTermStructure(
        EVALUATION_DATE,
        usd_eur_spot,
        [Date(2020, 3, 18), Date(2020, 4, 11), Date(2020, 6, 11)],
        [-4.051701, -17.6, -52.3],
    )


@pytest.fixture
def zero_curve() -> FlatForward:
    """Flat discount curve at a zero rate (every discount factor is 1)."""
    return FlatForward(EVALUATION_DATE, 0.0)


@pytest.fixture
def tolerance() -> dict[str, float]:
    """Provide numerical tolerance values for float comparisons.

    Returns:
        Dictionary with different tolerance levels
    """
    return {
        "rtol": 1e-5,  # Relative tolerance (float32 JAX kernels)
        "atol": 1e-8,  # Absolute tolerance
        "strict_rtol": 1e-10,  # Strict relative tolerance
        "strict_atol": 1e-12,  # Strict absolute tolerance
    }


@pytest.fixture(autouse=True)
def reset_jax_config() -> None:
    """Clear JAX compilation caches after each test.

    This ensures tests don't interfere with each other's JAX state.
    """
    yield
    jax.clear_caches()


# Configure pytest markers
def pytest_configure(config: Any) -> None:
    """Configure custom pytest markers.

    Args:
        config: Pytest configuration object
    """
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")
