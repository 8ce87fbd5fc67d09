"""Conversion of backend JSON payloads into typed domain records.

CRITICAL: numbers arrive as JSON floats/strings and are converted via
Decimal(str(value)) so that 0.1 stays 0.1.
"""

from decimal import Decimal, InvalidOperation
from typing import Any

from desk.exceptions import InvalidCompanyError, InvalidSeriesError, ValidationError
from desk.logging import get_logger
from desk.models import (
    ChartPoint,
    Company,
    Counterparty,
    DashboardSnapshot,
    Statistics,
    Transaction,
    TransactionType,
)

logger = get_logger(__name__)


def to_decimal(value: Any, default: Decimal = Decimal("0")) -> Decimal:
    """Convert a JSON number or numeric string to Decimal, falling back to default."""
    if value is None:
        return default
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return default
    return result if result.is_finite() else default


def validate_series(points: list[ChartPoint]) -> None:
    """Enforce chronological order: dates must be non-decreasing.

    Dates are ISO-8601 strings, which order correctly as text.
    """
    for previous, current in zip(points, points[1:]):
        if current.date < previous.date:
            raise InvalidSeriesError(
                f"Series out of order: {current.date!r} follows {previous.date!r}"
            )


def parse_chart_points(raw_points: list[dict] | None) -> list[ChartPoint]:
    """Parse a list of {date, price, volume} dicts into a validated series.

    Raises:
        InvalidSeriesError: not a list, a point is not an object, or dates decrease.
    """
    if raw_points is None:
        return []
    if not isinstance(raw_points, list):
        raise InvalidSeriesError(f"Chart data is not a list: {type(raw_points).__name__}")
    for raw in raw_points:
        if not isinstance(raw, dict):
            raise InvalidSeriesError(f"Chart point is not an object: {raw!r}")

    points = [
        ChartPoint(
            date=str(raw.get("date", "")),
            price=to_decimal(raw.get("price")),
            volume=to_decimal(raw.get("volume")),
        )
        for raw in raw_points
    ]
    validate_series(points)
    return points


def parse_company(raw: dict) -> Company:
    """Parse a single company record.

    Raises:
        InvalidCompanyError: id, symbol, or name is missing.
        InvalidSeriesError: the embedded chart_data is malformed or out of order.
    """
    if not isinstance(raw, dict):
        raise InvalidCompanyError(f"Company record is not an object: {raw!r}")
    company_id = raw.get("id") or raw.get("_id")
    symbol = raw.get("symbol")
    name = raw.get("name")
    if not company_id or not symbol or not name:
        raise InvalidCompanyError(f"Company record missing identity fields: {raw!r}")

    current_price = raw.get("current_price")

    return Company(
        id=str(company_id),
        symbol=str(symbol),
        name=str(name),
        category=str(raw.get("category") or ""),
        description=str(raw.get("description") or ""),
        logo=str(raw.get("logo") or ""),
        current_price=to_decimal(current_price) if current_price is not None else None,
        starting_price=to_decimal(raw.get("starting_price")),
        market_cap=to_decimal(raw.get("market_cap")),
        daily_increase_rate=to_decimal(raw.get("daily_increase_rate")),
        total_supply=to_decimal(raw.get("total_supply")),
        circulating_supply=to_decimal(raw.get("circulating_supply")),
        chart_data=tuple(parse_chart_points(raw.get("chart_data"))),
        last_updated=str(raw.get("last_updated") or ""),
    )


def parse_companies(raw_companies: list[dict]) -> list[Company]:
    """Parse a catalog listing, skipping (and logging) malformed records.

    Raises:
        ValidationError: the listing itself is not a list.
    """
    if not isinstance(raw_companies, list):
        raise ValidationError(f"Company listing is not a list: {type(raw_companies).__name__}")
    companies: list[Company] = []
    for raw in raw_companies:
        try:
            companies.append(parse_company(raw))
        except ValidationError as e:
            logger.warning("invalid_company_record", error=str(e))
    return companies


def _parse_counterparty(raw: dict | None) -> Counterparty:
    if not isinstance(raw, dict):
        raw = {}
    return Counterparty(
        name=str(raw.get("name") or ""),
        wallet_id=str(raw.get("walletId") or ""),
    )


def parse_transaction(raw: dict) -> Transaction:
    """Parse one entry of recentTransactions."""
    if not isinstance(raw, dict):
        raise ValidationError(f"Transaction record is not an object: {raw!r}")
    try:
        tx_type = TransactionType(raw.get("type"))
    except ValueError as e:
        raise ValidationError(f"Unknown transaction type: {raw.get('type')!r}") from e

    return Transaction(
        id=str(raw.get("id") or raw.get("_id") or ""),
        transaction_id=str(raw.get("transactionId") or ""),
        amount=to_decimal(raw.get("amount")),
        type=tx_type,
        status=str(raw.get("status") or ""),
        sender=_parse_counterparty(raw.get("sender")),
        receiver=_parse_counterparty(raw.get("receiver")),
        description=str(raw.get("description") or ""),
        created_at=str(raw.get("createdAt") or ""),
    )


def parse_dashboard(raw: dict) -> DashboardSnapshot:
    """Parse the dashboard payload. Malformed transactions are skipped.

    Raises:
        ValidationError: the payload, its statistics, or its transaction list
            has the wrong shape.
    """
    if not isinstance(raw, dict):
        raise ValidationError(f"Dashboard payload is not an object: {type(raw).__name__}")
    stats = raw.get("statistics") or {}
    if not isinstance(stats, dict):
        raise ValidationError(f"Dashboard statistics is not an object: {stats!r}")
    raw_transactions = raw.get("recentTransactions") or []
    if not isinstance(raw_transactions, list):
        raise ValidationError("Dashboard recentTransactions is not a list")

    transactions: list[Transaction] = []
    for raw_tx in raw_transactions:
        try:
            transactions.append(parse_transaction(raw_tx))
        except ValidationError as e:
            logger.warning("invalid_transaction_record", error=str(e))

    return DashboardSnapshot(
        balance=to_decimal(raw.get("balance")),
        wallet_id=str(raw.get("walletId") or ""),
        name=str(raw.get("name") or ""),
        email=str(raw.get("email") or ""),
        statistics=Statistics(
            total_sent=to_decimal(stats.get("totalSent")),
            total_received=to_decimal(stats.get("totalReceived")),
            total_transactions=int(to_decimal(stats.get("totalTransactions"))),
        ),
        recent_transactions=transactions,
    )
