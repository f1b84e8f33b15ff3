"""Fund catalogue and subscription form state."""

from __future__ import annotations

from decimal import Decimal

from invierte_ya_web.api_client import InvierteYaAPIClient
from invierte_ya_web.domain.entities import Fund
from invierte_ya_web.domain.validation import (
    subscription_amount,
    subscription_block_reason,
    validate_subscription,
)
from invierte_ya_web.exceptions import AuthenticationError
from invierte_ya_web.logging_config import get_logger
from invierte_ya_web.session.manager import SessionManager

logger = get_logger(__name__)


async def load_active_funds(api: InvierteYaAPIClient) -> list[Fund]:
    return [f for f in await api.list_funds() if f.is_active]


class SubscriptionForm:
    """Per-fund amount overrides typed by the user.

    A fund without an override subscribes with its minimum amount.
    """

    def __init__(self) -> None:
        self._overrides: dict[str, str] = {}

    def set_override(self, fund_id: str, text: str | None) -> None:
        if text and text.strip():
            self._overrides[fund_id] = text
        else:
            self._overrides.pop(fund_id, None)

    def override(self, fund_id: str) -> str:
        return self._overrides.get(fund_id, "")

    def amount_for(self, fund: Fund) -> Decimal:
        return subscription_amount(fund, self._overrides.get(fund.fund_id))

    def block_reason(self, fund: Fund, balance: Decimal) -> str | None:
        return subscription_block_reason(fund, self.amount_for(fund), balance)

    async def subscribe(self, session: SessionManager, fund: Fund) -> str:
        """Validate against the last known balance, subscribe, re-fetch profile.

        Returns the success message. Validation failures raise before any
        request is sent; once the server accepts the subscription, a failed
        profile re-fetch no longer raises.
        """
        user = session.user
        if user is None:
            raise AuthenticationError()
        amount = validate_subscription(fund, self.amount_for(fund), user.balance)
        receipt = await session.api.subscribe(fund.fund_id, amount)
        logger.info(
            "subscription_created",
            fund_id=fund.fund_id,
            transaction_id=receipt.transaction_id,
            amount=str(amount),
        )
        self._overrides.pop(fund.fund_id, None)
        await session.refresh_after_change()
        return f"¡Suscripción exitosa a {fund.name}!"
