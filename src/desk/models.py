"""Shared data models for the marketplace dashboard core.

CRITICAL: All monetary values use Decimal. Never use float for prices, amounts, or balances.
Records are read-only snapshots of backend state; the backend owns every mutation.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class Period(str, Enum):
    """Chart time window."""

    ONE_MONTH = "1m"
    THREE_MONTHS = "3m"
    SIX_MONTHS = "6m"
    ONE_YEAR = "1y"


class PaymentMethod(str, Enum):
    """Off-platform payment channel configured by the administrator."""

    WALLET = "wallet"
    UPI = "upi"


class TransactionType(str, Enum):
    """Direction of a transaction relative to the current user."""

    SENT = "sent"
    RECEIVED = "received"


@dataclass
class ChartPoint:
    """A single point of a price history series."""

    date: str  # ISO-8601
    price: Decimal
    volume: Decimal = Decimal("0")


@dataclass
class Company:
    """Tradeable catalog entry (asset) as returned by the backend."""

    id: str
    symbol: str
    name: str
    category: str = ""
    description: str = ""
    logo: str = ""
    current_price: Decimal | None = None
    starting_price: Decimal = Decimal("0")
    market_cap: Decimal = Decimal("0")
    daily_increase_rate: Decimal = Decimal("0")
    total_supply: Decimal = Decimal("0")
    circulating_supply: Decimal = Decimal("0")
    chart_data: tuple[ChartPoint, ...] = ()
    last_updated: str = ""


@dataclass
class ChartSeries:
    """Price series for one (company, period) selection.

    is_fallback is True when the points are the company's embedded chart_data
    used after the dedicated chart fetch failed.
    """

    company_id: str
    period: Period
    points: tuple[ChartPoint, ...]
    is_fallback: bool = False


@dataclass
class PriceRange:
    """Lowest and highest price over a series."""

    min: Decimal
    max: Decimal


@dataclass(frozen=True)
class PaymentConfiguration:
    """Admin-controlled payment target. Immutable for the life of one workflow."""

    qr_code_image: str
    payment_method: PaymentMethod = PaymentMethod.WALLET

    @property
    def is_configured(self) -> bool:
        return bool(self.qr_code_image)


@dataclass
class PurchaseIntent:
    """Amount being entered in the buy dialog and the coins it converts to."""

    amount_text: str = ""
    amount: Decimal | None = None
    derived_coin_amount: Decimal = Decimal("0.00")


@dataclass
class DepositRequest:
    """Deposit request sent to the backend for admin approval."""

    amount: Decimal
    payment_method: str


@dataclass
class DepositResult:
    """Backend acknowledgement of a deposit request (acceptance, not settlement)."""

    accepted: bool
    message: str | None = None


@dataclass
class Counterparty:
    """One side of a transaction."""

    name: str
    wallet_id: str


@dataclass
class Transaction:
    """A recent account transaction shown on the dashboard."""

    id: str
    transaction_id: str
    amount: Decimal
    type: TransactionType
    status: str
    sender: Counterparty
    receiver: Counterparty
    description: str = ""
    created_at: str = ""


@dataclass
class Statistics:
    """Lifetime account statistics."""

    total_sent: Decimal = Decimal("0")
    total_received: Decimal = Decimal("0")
    total_transactions: int = 0


@dataclass
class DashboardSnapshot:
    """Account overview. Replaced wholesale on every successful load."""

    balance: Decimal
    wallet_id: str
    name: str = ""
    email: str = ""
    statistics: Statistics = field(default_factory=Statistics)
    recent_transactions: list[Transaction] = field(default_factory=list)
