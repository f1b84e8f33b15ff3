from invierte_ya_web.domain.entities import (
    Fund,
    RegistrationForm,
    Subscription,
    Transaction,
    User,
)
from invierte_ya_web.domain.value_objects import (
    FundCategory,
    NotificationPreference,
    SubscriptionStatus,
    TransactionKind,
)

__all__ = [
    "Fund",
    "FundCategory",
    "NotificationPreference",
    "RegistrationForm",
    "Subscription",
    "SubscriptionStatus",
    "Transaction",
    "TransactionKind",
    "User",
]

__version__ = "0.1.0"
