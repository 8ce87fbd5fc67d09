"""Chart period controller -- price series for the company detail view.

Fetches the series for the selected (company, period) pair. A failed fetch
never blocks the view: the company's embedded chart_data is used instead and
the series is flagged as fallback.

Overlapping fetches (rapid re-selection) are resolved last-writer-wins:
each fetch takes a sequence number and its result is applied only if no
newer selection happened in the meantime.
"""

from desk.backend.client import BackendClient
from desk.exceptions import DeskError, ValidationError
from desk.logging import get_logger
from desk.models import ChartSeries, Company, Period

logger = get_logger(__name__)


def to_period(value: Period | str) -> Period:
    """Coerce "1m" | "3m" | "6m" | "1y" to Period.

    Raises:
        ValidationError: value is not a known period.
    """
    try:
        return Period(value)
    except ValueError as e:
        raise ValidationError(f"Unknown chart period: {value!r}") from e


class ChartPeriodController:
    """Holds the selected company, period, and the series currently shown."""

    def __init__(
        self,
        backend: BackendClient,
        default_period: Period = Period.SIX_MONTHS,
    ) -> None:
        self._backend = backend
        self._default_period = default_period
        self._selected_company: Company | None = None
        self._selected_period = default_period
        self._series: ChartSeries | None = None
        self._last_error: DeskError | None = None
        self._sequence = 0

    @property
    def selected_company(self) -> Company | None:
        return self._selected_company

    @property
    def selected_period(self) -> Period:
        return self._selected_period

    @property
    def series(self) -> ChartSeries | None:
        return self._series

    @property
    def last_error(self) -> DeskError | None:
        """Error of the most recently applied fetch, if it fell back."""
        return self._last_error

    async def select_company(self, company: Company) -> ChartSeries | None:
        """Select a company and load its series for the current period.

        Returns:
            The applied series, or None if a newer selection superseded this one.
        """
        self._selected_company = company
        self._series = None
        self._last_error = None
        return await self._fetch()

    async def select_period(self, period: Period | str) -> ChartSeries | None:
        """Change the period; reloads the series when a company is selected."""
        self._selected_period = to_period(period)
        if self._selected_company is None:
            return None
        return await self._fetch()

    def close(self) -> None:
        """Discard the selection. Results still in flight are ignored."""
        self._sequence += 1
        self._selected_company = None
        self._series = None
        self._last_error = None

    def reset(self) -> None:
        """Close the view and go back to the default period."""
        self.close()
        self._selected_period = self._default_period

    async def _fetch(self) -> ChartSeries | None:
        self._sequence += 1
        request_id = self._sequence
        company = self._selected_company
        period = self._selected_period
        assert company is not None

        try:
            points = await self._backend.get_company_chart(company.id, period)
            series = ChartSeries(company_id=company.id, period=period, points=tuple(points))
            error: DeskError | None = None
        except DeskError as e:
            logger.warning(
                "chart_fetch_failed_using_cached",
                company_id=company.id,
                period=period.value,
                error=str(e),
            )
            series = ChartSeries(
                company_id=company.id,
                period=period,
                points=company.chart_data,
                is_fallback=True,
            )
            error = e

        if request_id != self._sequence:
            logger.debug(
                "chart_result_discarded",
                company_id=company.id,
                period=period.value,
                request_id=request_id,
                latest_id=self._sequence,
            )
            return None

        self._series = series
        self._last_error = error
        return series
