"""Market analytics derived from company snapshots."""

from desk.analytics.market import (
    RandomSource,
    change_24h,
    daily_growth_percent,
    estimate_change_24h,
    format_market_cap,
    price_range,
)

__all__ = [
    "RandomSource",
    "change_24h",
    "daily_growth_percent",
    "estimate_change_24h",
    "format_market_cap",
    "price_range",
]
