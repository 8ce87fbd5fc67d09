"""Market analytics derived from a company snapshot.

Pure Decimal functions: change_24h, price_range, format_market_cap.
The only non-determinism is the explicit estimate used when a company has
too little history; it draws from an injectable RandomSource so tests can
seed it.
"""

import random
from decimal import ROUND_HALF_UP, Decimal
from typing import Protocol

from desk.exceptions import InvalidCompanyError, InvalidSeriesError
from desk.models import Company, PriceRange

_HUNDRED = Decimal("100")
_CENT = Decimal("0.01")

# Volatility term (U - 0.45) * 7 for U in [0, 1): [-3.15, +4.05)
VOLATILITY_CENTER = Decimal("0.45")
VOLATILITY_SCALE = Decimal("7")

# Synthetic band around current price when no history exists
RANGE_LOW_FACTOR = Decimal("0.95")
RANGE_HIGH_FACTOR = Decimal("1.05")

_MARKET_CAP_BUCKETS: tuple[tuple[Decimal, str], ...] = (
    (Decimal("1e9"), "B"),
    (Decimal("1e6"), "M"),
    (Decimal("1e3"), "K"),
)


class RandomSource(Protocol):
    """Anything exposing random() -> float in [0, 1). random.Random qualifies."""

    def random(self) -> float: ...


_default_random = random.Random()


def estimate_change_24h(
    daily_increase_rate: Decimal,
    random_source: RandomSource | None = None,
) -> Decimal:
    """Approximate a 24h change when no measured history is available.

    Returns daily_increase_rate * 100 plus a volatility term in [-3.15, +4.05).
    This is an estimate, not a measurement.
    """
    source = random_source or _default_random
    u = Decimal(str(source.random()))
    return daily_increase_rate * _HUNDRED + (u - VOLATILITY_CENTER) * VOLATILITY_SCALE


def change_24h(company: Company, random_source: RandomSource | None = None) -> Decimal:
    """Percent change between the last two points of the company's series.

    Falls back to estimate_change_24h() when fewer than two points exist.

    Raises:
        InvalidSeriesError: the previous point's price is zero.
    """
    series = company.chart_data
    if len(series) < 2:
        return estimate_change_24h(company.daily_increase_rate, random_source)

    latest = series[-1].price
    previous = series[-2].price
    if previous == 0:
        raise InvalidSeriesError(
            f"Cannot compute change for {company.symbol}: previous price is zero"
        )
    return (latest - previous) / previous * _HUNDRED


def price_range(company: Company) -> PriceRange:
    """Min/max price over the full series, or a +/-5% band around current price.

    Raises:
        InvalidCompanyError: no series and no current price.
    """
    if company.chart_data:
        prices = [point.price for point in company.chart_data]
        return PriceRange(min=min(prices), max=max(prices))

    if company.current_price is None:
        raise InvalidCompanyError(
            f"{company.symbol} has neither price history nor a current price"
        )
    return PriceRange(
        min=company.current_price * RANGE_LOW_FACTOR,
        max=company.current_price * RANGE_HIGH_FACTOR,
    )


def format_market_cap(value: Decimal | int | float) -> str:
    """Render a market cap with a B/M/K suffix and two decimals.

    Values below 1,000 are printed as-is without a suffix ("$750").
    Precondition: value >= 0. Negative input raises ValueError.
    """
    amount = value if isinstance(value, Decimal) else Decimal(str(value))
    if amount < 0:
        raise ValueError(f"Market cap must be non-negative, got {amount}")

    for threshold, suffix in _MARKET_CAP_BUCKETS:
        if amount >= threshold:
            scaled = (amount / threshold).quantize(_CENT, rounding=ROUND_HALF_UP)
            return f"${scaled}{suffix}"

    if amount == amount.to_integral_value():
        return f"${int(amount)}"
    return f"${format(amount.normalize(), 'f')}"


def daily_growth_percent(company: Company) -> Decimal:
    """Configured daily increase rate as a percentage with two decimals."""
    return (company.daily_increase_rate * _HUNDRED).quantize(_CENT, rounding=ROUND_HALF_UP)
