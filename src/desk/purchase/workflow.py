"""Deposit/buy workflow -- a single explicit state machine.

    IDLE -> CONFIG_CHECK -> BLOCKED (-> IDLE)
                         -> AMOUNT_ENTRY -> SUBMITTING -> SUCCESS (-> IDLE)
                                                       -> FAILED (-> AMOUNT_ENTRY)

Buying is gated behind the admin payment configuration. The user pays
off-platform (QR code), then confirms here; the workflow only submits a
deposit request. Crediting happens on the backend after admin approval
and is never assumed by this module.
"""

from collections.abc import Awaitable, Callable
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum

from desk.backend.client import BackendClient
from desk.config import PurchaseSettings
from desk.exceptions import (
    AuthorizationError,
    ConfigurationError,
    InvalidAmountError,
    TransportError,
    WorkflowStateError,
)
from desk.logging import bind_context, clear_context, get_logger
from desk.models import Company, DepositRequest, PaymentConfiguration, PaymentMethod, PurchaseIntent
from desk.purchase.provider import ConfigurationProvider
from desk.session import expire_session
from desk.ui import UserInterface

logger = get_logger(__name__)

_CENT = Decimal("0.01")

MSG_UNCONFIGURED = "Admin has not configured buy settings yet"
MSG_INVALID_AMOUNT = "Please enter a valid amount"
MSG_SUBMITTED = "Deposit request submitted! Coins will be credited after admin approval."
MSG_REJECTED = "Failed to submit deposit request"
MSG_PAYMENT_FAILED = "Payment failed. Please try again."

SuccessHook = Callable[[], Awaitable[object]]


class WorkflowState(str, Enum):
    """States of the deposit/buy workflow."""

    IDLE = "idle"
    CONFIG_CHECK = "config_check"
    BLOCKED = "blocked"
    AMOUNT_ENTRY = "amount_entry"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"


def parse_amount(text: str) -> Decimal | None:
    """Parse a free-form amount. Returns None for empty or non-numeric input."""
    text = text.strip()
    if not text:
        return None
    try:
        amount = Decimal(text)
    except InvalidOperation:
        return None
    return amount if amount.is_finite() else None


class PurchaseWorkflow:
    """Gated purchase flow shared by the catalog and the dashboard.

    Args:
        backend: Receives the deposit request.
        provider: Source of the admin payment configuration, read once per open().
        ui: Collaborator for notices and redirects.
        settings: Coin conversion rate and submitted-method policy.
    """

    def __init__(
        self,
        backend: BackendClient,
        provider: ConfigurationProvider,
        ui: UserInterface,
        settings: PurchaseSettings,
    ) -> None:
        self._backend = backend
        self._provider = provider
        self._ui = ui
        self._settings = settings
        self._state = WorkflowState.IDLE
        self._configuration: PaymentConfiguration | None = None
        self._intent: PurchaseIntent | None = None
        self._company: Company | None = None
        self._on_success: SuccessHook | None = None
        self._last_outcome: WorkflowState | None = None
        # Bumped by every open() and reset; a stale open() must not apply its result
        self._attempt = 0

    # ──────────────────────────────────────────────
    # Read-only state
    # ──────────────────────────────────────────────

    @property
    def state(self) -> WorkflowState:
        return self._state

    @property
    def configuration(self) -> PaymentConfiguration | None:
        return self._configuration

    @property
    def intent(self) -> PurchaseIntent | None:
        return self._intent

    @property
    def company(self) -> Company | None:
        """Company the user is buying, or None for a generic coin purchase."""
        return self._company

    @property
    def last_outcome(self) -> WorkflowState | None:
        """Terminal outcome of the most recent attempt (BLOCKED, SUCCESS, or FAILED)."""
        return self._last_outcome

    @property
    def coin_rate(self) -> Decimal:
        return self._settings.coin_rate

    @property
    def can_submit(self) -> bool:
        """True when the entered amount is a number greater than zero."""
        return (
            self._state == WorkflowState.AMOUNT_ENTRY
            and self._intent is not None
            and self._intent.amount is not None
            and self._intent.amount > 0
        )

    # ──────────────────────────────────────────────
    # Transitions
    # ──────────────────────────────────────────────

    async def open(
        self,
        company: Company | None = None,
        on_success: SuccessHook | None = None,
    ) -> WorkflowState:
        """Enter the workflow for a company, or for generic coins when company is None.

        on_success is awaited after an accepted deposit so the initiating
        view can refresh its data.

        Returns:
            AMOUNT_ENTRY when configured, BLOCKED otherwise (the workflow is
            then back in IDLE). IDLE when the attempt was cancelled while the
            configuration was being read; nothing is applied in that case.
        """
        self._require_state(WorkflowState.IDLE, "open")
        self._state = WorkflowState.CONFIG_CHECK
        self._attempt += 1
        attempt = self._attempt
        bind_context(purchase_target=company.symbol if company else "coins")

        try:
            configuration = await self._provider.get_payment_configuration()
            if configuration is None or not configuration.is_configured:
                raise ConfigurationError("Payment QR code not configured")
        except ConfigurationError as e:
            if attempt != self._attempt:
                return self._abandoned()
            logger.warning("purchase_blocked", reason=str(e))
            self._ui.error(MSG_UNCONFIGURED)
            self._finish(WorkflowState.BLOCKED)
            return WorkflowState.BLOCKED
        except Exception:
            if attempt == self._attempt:
                self._reset()
            raise

        if attempt != self._attempt:
            return self._abandoned()

        self._configuration = configuration
        self._intent = PurchaseIntent()
        self._company = company
        self._on_success = on_success
        self._state = WorkflowState.AMOUNT_ENTRY
        logger.info("purchase_opened", payment_method=configuration.payment_method.value)
        return self._state

    def set_amount(self, text: str) -> PurchaseIntent:
        """Record the entered amount and recompute the derived coin amount.

        Unparsable input is kept as typed; its derived amount is 0.00 and
        submission stays disabled.
        """
        self._require_state(WorkflowState.AMOUNT_ENTRY, "set_amount")
        amount = parse_amount(text)
        derived = (amount if amount is not None else Decimal("0")) * self._settings.coin_rate
        self._intent = PurchaseIntent(
            amount_text=text,
            amount=amount,
            derived_coin_amount=derived.quantize(_CENT, rounding=ROUND_HALF_UP),
        )
        return self._intent

    async def submit(self) -> WorkflowState:
        """Send the deposit request for the entered amount.

        Returns:
            SUCCESS (workflow closed), FAILED (back in AMOUNT_ENTRY with the
            amount kept, or IDLE after a session expiry), or AMOUNT_ENTRY when
            the amount was invalid and nothing was sent.
        """
        self._require_state(WorkflowState.AMOUNT_ENTRY, "submit")
        try:
            amount = self._validated_amount()
        except InvalidAmountError as e:
            logger.info("purchase_amount_rejected", reason=str(e))
            self._ui.error(MSG_INVALID_AMOUNT)
            return WorkflowState.AMOUNT_ENTRY

        request = DepositRequest(amount=amount, payment_method=self._submitted_method())
        self._state = WorkflowState.SUBMITTING
        logger.info(
            "purchase_submitting",
            amount=str(amount),
            payment_method=request.payment_method,
        )

        try:
            result = await self._backend.request_deposit(request)
        except AuthorizationError:
            self._finish(WorkflowState.FAILED)
            expire_session(self._ui)
            return WorkflowState.FAILED
        except TransportError as e:
            logger.warning("purchase_request_failed", error=str(e))
            self._ui.error(str(e) or MSG_PAYMENT_FAILED)
            return self._fail()
        except Exception:
            self._state = WorkflowState.AMOUNT_ENTRY
            raise

        if not result.accepted:
            logger.warning("purchase_rejected", message=result.message)
            self._ui.error(result.message or MSG_REJECTED)
            return self._fail()

        logger.info("purchase_accepted", amount=str(amount))
        self._ui.success(MSG_SUBMITTED)
        on_success = self._on_success
        self._finish(WorkflowState.SUCCESS)
        if on_success is not None:
            await on_success()
        return WorkflowState.SUCCESS

    def cancel(self) -> None:
        """Abandon the workflow from any state except SUBMITTING."""
        if self._state == WorkflowState.SUBMITTING:
            raise WorkflowStateError("Cannot cancel while a deposit request is in flight")
        if self._state != WorkflowState.IDLE:
            logger.info("purchase_cancelled", state=self._state.value)
        self._reset()

    def reset(self) -> None:
        """Forget any open attempt and the last outcome.

        A submission already in flight is left to finish.
        """
        if self._state == WorkflowState.SUBMITTING:
            logger.warning("purchase_reset_skipped", reason="submission_in_flight")
            return
        self._reset()
        self._last_outcome = None

    # ──────────────────────────────────────────────
    # Internals
    # ──────────────────────────────────────────────

    def _require_state(self, expected: WorkflowState, operation: str) -> None:
        if self._state != expected:
            raise WorkflowStateError(
                f"{operation}() requires state {expected.value}, current state is {self._state.value}"
            )

    def _validated_amount(self) -> Decimal:
        amount = self._intent.amount if self._intent is not None else None
        if amount is None or amount <= 0:
            raise InvalidAmountError(f"Amount must be greater than zero, got {amount}")
        return amount

    def _submitted_method(self) -> str:
        if self._settings.force_wallet_method or self._configuration is None:
            return PaymentMethod.WALLET.value
        return self._configuration.payment_method.value

    def _fail(self) -> WorkflowState:
        """Record a failed attempt and return to amount entry with the intent kept."""
        self._last_outcome = WorkflowState.FAILED
        self._state = WorkflowState.AMOUNT_ENTRY
        return WorkflowState.FAILED

    def _finish(self, outcome: WorkflowState) -> None:
        self._last_outcome = outcome
        self._reset()

    def _abandoned(self) -> WorkflowState:
        logger.info("purchase_open_abandoned")
        return WorkflowState.IDLE

    def _reset(self) -> None:
        self._attempt += 1
        self._state = WorkflowState.IDLE
        self._configuration = None
        self._intent = None
        self._company = None
        self._on_success = None
        clear_context("purchase_target")
