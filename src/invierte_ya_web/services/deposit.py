"""Deposit submission."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from invierte_ya_web.config import Settings, get_settings
from invierte_ya_web.domain.entities import DepositReceipt, User
from invierte_ya_web.domain.validation import validate_deposit_amount
from invierte_ya_web.formatting import format_cop, parse_amount_text
from invierte_ya_web.logging_config import get_logger
from invierte_ya_web.session.manager import SessionManager

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class DepositOutcome:
    receipt: DepositReceipt
    # None when the follow-up profile fetch failed and ended the session
    user: User | None

    @property
    def message(self) -> str:
        return (
            "¡Depósito exitoso! Se han agregado "
            f"${format_cop(self.receipt.amount_deposited)} COP a tu cuenta."
        )


def preview_new_balance(balance: Decimal, amount: Decimal) -> Decimal:
    """Transient display only; the re-fetched profile is what counts."""
    return balance + amount


async def submit_deposit(
    session: SessionManager, amount_text: str, settings: Settings | None = None
) -> DepositOutcome:
    """Validate, deposit and re-fetch the profile.

    Raises InvalidAmountError before any request when the amount is out of
    band, or the API error when the deposit itself fails. Once the server
    has accepted the deposit this returns an outcome, even if the profile
    could not be re-fetched.
    """
    settings = settings or get_settings()
    amount = validate_deposit_amount(
        parse_amount_text(amount_text),
        minimum=settings.min_deposit,
        maximum=settings.max_deposit,
    )
    receipt = await session.api.deposit(amount)
    if receipt.amount_deposited == 0:
        receipt = DepositReceipt(
            message=receipt.message,
            transaction_id=receipt.transaction_id,
            amount_deposited=amount,
            previous_balance=receipt.previous_balance,
            new_balance=receipt.new_balance,
            timestamp=receipt.timestamp,
        )
    logger.info(
        "deposit_completed",
        transaction_id=receipt.transaction_id,
        amount=str(amount),
    )
    user = await session.refresh_after_change()
    return DepositOutcome(receipt=receipt, user=user)
