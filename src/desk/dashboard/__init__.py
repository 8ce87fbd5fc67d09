"""Account dashboard aggregation."""

from desk.dashboard.aggregator import DashboardAggregator

__all__ = ["DashboardAggregator"]
