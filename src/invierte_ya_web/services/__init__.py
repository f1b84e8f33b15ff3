from invierte_ya_web.services.dashboard import DashboardData, load_dashboard
from invierte_ya_web.services.deposit import (
    DepositOutcome,
    preview_new_balance,
    submit_deposit,
)
from invierte_ya_web.services.funds import SubscriptionForm, load_active_funds
from invierte_ya_web.services.portfolio import (
    CancellationOutcome,
    PortfolioData,
    cancel_subscription,
    load_portfolio,
)
from invierte_ya_web.services.profile import save_profile

__all__ = [
    "CancellationOutcome",
    "DashboardData",
    "DepositOutcome",
    "PortfolioData",
    "SubscriptionForm",
    "cancel_subscription",
    "load_active_funds",
    "load_dashboard",
    "load_portfolio",
    "preview_new_balance",
    "save_profile",
    "submit_deposit",
]
