from dataclasses import dataclass
from enum import Enum

from invierte_ya_web.logging_config import get_logger

logger = get_logger(__name__)


class NotificationPreference(str, Enum):
    EMAIL = "EMAIL"
    SMS = "SMS"

    @classmethod
    def parse(cls, raw: object) -> "NotificationPreference":
        try:
            return cls(str(raw or "").strip().upper())
        except ValueError:
            return cls.EMAIL


class FundCategory(str, Enum):
    FPV = "FPV"
    FIC = "FIC"

    @property
    def label(self) -> str:
        return FUND_CATEGORY_LABELS[self]


FUND_CATEGORY_LABELS: dict[FundCategory, str] = {
    FundCategory.FPV: "Fondo de Pensiones Voluntarias",
    FundCategory.FIC: "Fondo de Inversión Colectiva",
}


class SubscriptionStatus(str, Enum):
    ACTIVE = "ACTIVE"
    CANCELLED = "CANCELLED"


class TransactionKind(str, Enum):
    """Closed set of ledger entry types, plus an explicit fallback tag.

    The server has sent these in both lower and upper case; parse() is
    case-insensitive and never raises.
    """

    DEPOSIT = "DEPOSIT"
    SUBSCRIPTION = "SUBSCRIPTION"
    CANCELLATION = "CANCELLATION"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, raw: object) -> "TransactionKind":
        tag = str(raw or "").strip().upper()
        try:
            kind = cls(tag)
        except ValueError:
            kind = cls.UNKNOWN
        if kind is cls.UNKNOWN:
            logger.warning("unknown_transaction_type", raw_type=raw)
        return kind

    @property
    def display(self) -> "TransactionDisplay":
        return TRANSACTION_DISPLAY[self]


@dataclass(frozen=True, slots=True)
class TransactionDisplay:
    icon: str
    sign: str
    tone: str
    label: str


TRANSACTION_DISPLAY: dict[TransactionKind, TransactionDisplay] = {
    TransactionKind.DEPOSIT: TransactionDisplay(
        icon="💰", sign="+", tone="text-emerald-700", label="Depósito"
    ),
    TransactionKind.SUBSCRIPTION: TransactionDisplay(
        icon="📈", sign="-", tone="text-blue-700", label="Suscripción"
    ),
    TransactionKind.CANCELLATION: TransactionDisplay(
        icon="📉", sign="-", tone="text-rose-700", label="Cancelación"
    ),
    TransactionKind.UNKNOWN: TransactionDisplay(
        icon="💳", sign="-", tone="text-slate-700", label="Transacción"
    ),
}
