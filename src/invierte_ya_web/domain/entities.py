from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from invierte_ya_web.domain.value_objects import (
    FundCategory,
    NotificationPreference,
    SubscriptionStatus,
    TransactionKind,
)
from invierte_ya_web.formatting import format_cop


@dataclass(frozen=True, slots=True)
class User:
    user_id: str
    email: str
    balance: Decimal
    phone: str = ""
    notification_preference: NotificationPreference = NotificationPreference.EMAIL
    created_at: datetime | None = None

    @property
    def display_name(self) -> str:
        return self.email.split("@", 1)[0]


@dataclass(frozen=True, slots=True)
class Fund:
    fund_id: str
    name: str
    minimum_amount: Decimal
    category: FundCategory
    is_active: bool = True


@dataclass(frozen=True, slots=True)
class Subscription:
    subscription_id: str
    fund_id: str
    fund_name: str
    amount: Decimal
    status: SubscriptionStatus = SubscriptionStatus.ACTIVE
    fund_category: FundCategory | None = None
    subscription_date: datetime | None = None

    @property
    def is_active(self) -> bool:
        return self.status is SubscriptionStatus.ACTIVE


@dataclass(frozen=True, slots=True)
class Transaction:
    transaction_id: str
    kind: TransactionKind
    amount: Decimal
    description: str
    status: str = ""
    fund_id: str | None = None
    fund_name: str | None = None
    timestamp: datetime | None = None

    @property
    def signed_amount(self) -> str:
        return f"{self.kind.display.sign}${format_cop(self.amount)} COP"


@dataclass(frozen=True, slots=True)
class AuthToken:
    access_token: str
    token_type: str = "bearer"


@dataclass(frozen=True, slots=True)
class DepositReceipt:
    message: str
    transaction_id: str
    amount_deposited: Decimal
    previous_balance: Decimal
    new_balance: Decimal
    timestamp: datetime | None = None


@dataclass(frozen=True, slots=True)
class SubscriptionReceipt:
    message: str
    transaction_id: str


@dataclass(frozen=True, slots=True)
class RegistrationForm:
    email: str
    password: str
    phone: str
    notification_preference: NotificationPreference = NotificationPreference.EMAIL

    def to_payload(self) -> dict[str, str]:
        return {
            "email": self.email.strip(),
            "password": self.password,
            "phone": "".join(self.phone.split()),
            "notification_preference": self.notification_preference.value,
        }


def total_invested(subscriptions: list[Subscription]) -> Decimal:
    """Advisory local sum over active subscriptions; the server is authoritative."""
    return sum(
        (s.amount for s in subscriptions if s.is_active), start=Decimal("0")
    )
