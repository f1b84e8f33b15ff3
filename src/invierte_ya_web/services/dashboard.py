"""Dashboard aggregate: profile plus capped previews of the three lists."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from decimal import Decimal

from invierte_ya_web.config import Settings, get_settings
from invierte_ya_web.domain.entities import (
    Fund,
    Subscription,
    Transaction,
    User,
    total_invested,
)
from invierte_ya_web.logging_config import get_logger
from invierte_ya_web.session.manager import SessionManager

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class DashboardData:
    user: User
    funds: list[Fund] = field(default_factory=list)
    recent_transactions: list[Transaction] = field(default_factory=list)
    subscriptions: list[Subscription] = field(default_factory=list)
    subscription_preview: int = 3

    @property
    def active_subscriptions(self) -> list[Subscription]:
        return [s for s in self.subscriptions if s.is_active]

    @property
    def active_preview(self) -> list[Subscription]:
        return self.active_subscriptions[: self.subscription_preview]

    @property
    def total_invested(self) -> Decimal:
        return total_invested(self.subscriptions)

    @property
    def active_count(self) -> int:
        return len(self.active_subscriptions)


async def load_dashboard(
    session: SessionManager, settings: Settings | None = None
) -> DashboardData:
    """Fetch funds, transactions and subscriptions concurrently, then the profile.

    Any failure fails the whole load; nothing is partially returned.
    """
    settings = settings or get_settings()
    api = session.api
    funds, transactions, subscriptions = await asyncio.gather(
        api.list_funds(),
        api.list_transactions(),
        api.list_subscriptions(),
    )
    user = await session.refresh_profile()
    logger.debug(
        "dashboard_loaded",
        funds=len(funds),
        transactions=len(transactions),
        subscriptions=len(subscriptions),
    )
    return DashboardData(
        user=user,
        funds=funds[: settings.dashboard_fund_preview],
        recent_transactions=transactions[: settings.dashboard_transaction_preview],
        subscriptions=subscriptions,
        subscription_preview=settings.dashboard_subscription_preview,
    )
