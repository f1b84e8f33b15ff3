from invierte_ya_web.domain.entities import (
    AuthToken,
    DepositReceipt,
    Fund,
    RegistrationForm,
    Subscription,
    SubscriptionReceipt,
    Transaction,
    User,
    total_invested,
)
from invierte_ya_web.domain.value_objects import (
    TRANSACTION_DISPLAY,
    FundCategory,
    NotificationPreference,
    SubscriptionStatus,
    TransactionDisplay,
    TransactionKind,
)

__all__ = [
    "TRANSACTION_DISPLAY",
    "AuthToken",
    "DepositReceipt",
    "Fund",
    "FundCategory",
    "NotificationPreference",
    "RegistrationForm",
    "Subscription",
    "SubscriptionReceipt",
    "SubscriptionStatus",
    "Transaction",
    "TransactionDisplay",
    "TransactionKind",
    "User",
    "total_invested",
]
