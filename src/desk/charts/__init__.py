"""Chart period selection and series loading."""

from desk.charts.controller import ChartPeriodController, to_period

__all__ = ["ChartPeriodController", "to_period"]
