"""Portfolio: subscriptions and transaction history, plus cancellation."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from decimal import Decimal

from invierte_ya_web.api_client import InvierteYaAPIClient
from invierte_ya_web.domain.entities import Subscription, Transaction, total_invested
from invierte_ya_web.exceptions import InvierteYaError
from invierte_ya_web.logging_config import get_logger
from invierte_ya_web.session.manager import SessionManager

logger = get_logger(__name__)

ConfirmCallback = Callable[[Subscription], Awaitable[bool]]


@dataclass(frozen=True, slots=True)
class PortfolioData:
    subscriptions: list[Subscription] = field(default_factory=list)
    transactions: list[Transaction] = field(default_factory=list)

    @property
    def total_invested(self) -> Decimal:
        return total_invested(self.subscriptions)

    @property
    def active_count(self) -> int:
        return sum(1 for s in self.subscriptions if s.is_active)


@dataclass(frozen=True, slots=True)
class CancellationOutcome:
    subscription: Subscription
    # None when reloading the portfolio failed after the server cancelled
    data: PortfolioData | None

    @property
    def message(self) -> str:
        return f"Suscripción a {self.subscription.fund_name} cancelada"


async def load_portfolio(api: InvierteYaAPIClient) -> PortfolioData:
    subscriptions, transactions = await asyncio.gather(
        api.list_subscriptions(),
        api.list_transactions(),
    )
    return PortfolioData(subscriptions=subscriptions, transactions=transactions)


async def cancel_subscription(
    session: SessionManager,
    subscription: Subscription,
    confirm: ConfirmCallback,
) -> CancellationOutcome | None:
    """Cancel after explicit confirmation and reload everything from the server.

    Returns None, without sending anything, when the user declines. Errors
    raise only while the cancellation itself has not been accepted.
    """
    if not await confirm(subscription):
        logger.debug("cancellation_declined", subscription_id=subscription.subscription_id)
        return None
    await session.api.cancel_subscription(subscription.subscription_id)
    logger.info("subscription_cancelled", subscription_id=subscription.subscription_id)
    try:
        data: PortfolioData | None = await load_portfolio(session.api)
    except InvierteYaError as e:
        logger.warning("portfolio_reload_failed", error=e.error_code)
        data = None
    await session.refresh_after_change()
    return CancellationOutcome(subscription=subscription, data=data)
