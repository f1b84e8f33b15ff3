"""Normalization of ledger service payloads into domain objects.

The service's response shapes have drifted over time: list endpoints may
answer with a bare list or an envelope object, subscriptions report either
``amount`` or ``invested_amount`` and either a ``status`` string or an
``is_active`` flag, and transaction types come in either case. Every known
shape is handled here so the rest of the client only sees domain types.

List parsers never raise: an absent or malformed payload yields an empty
list and malformed items are skipped (and logged).
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any, TypeVar

from dateutil import parser as date_parser  # type: ignore[import-untyped]

from invierte_ya_web.domain.entities import (
    AuthToken,
    DepositReceipt,
    Fund,
    Subscription,
    SubscriptionReceipt,
    Transaction,
    User,
)
from invierte_ya_web.domain.value_objects import (
    FundCategory,
    NotificationPreference,
    SubscriptionStatus,
    TransactionKind,
)
from invierte_ya_web.exceptions import TransportError
from invierte_ya_web.formatting import to_decimal
from invierte_ya_web.logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

ENVELOPE_KEYS: tuple[str, ...] = (
    "transactions",
    "active_subscriptions",
    "subscriptions",
    "funds",
    "items",
    "data",
)


class PayloadShapeError(ValueError):
    """A single payload item lacks a required field."""


def unwrap_list(payload: Any, *keys: str) -> list[dict[str, Any]]:
    """Return the list inside ``payload``.

    Accepts a bare list or a dict wrapping the list under one of ``keys``
    (or the common envelope keys when none are given). Anything else, and
    any non-dict item, is discarded.
    """
    items: Any = payload
    if isinstance(payload, Mapping):
        items = None
        for key in keys or ENVELOPE_KEYS:
            if isinstance(payload.get(key), list):
                items = payload[key]
                break
    if not isinstance(items, list):
        if payload is not None:
            logger.warning(
                "list_payload_malformed", payload_type=type(payload).__name__
            )
        return []
    return [item for item in items if isinstance(item, Mapping)]


def parse_many(
    items: list[dict[str, Any]], parse: Callable[[Mapping[str, Any]], T]
) -> list[T]:
    parsed: list[T] = []
    for item in items:
        try:
            parsed.append(parse(item))
        except (PayloadShapeError, ValueError, TypeError) as e:
            logger.warning(
                "payload_item_skipped", parser=parse.__name__, reason=str(e)
            )
    return parsed


def parse_timestamp(value: Any) -> datetime | None:
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    try:
        return date_parser.isoparse(str(value))
    except (ValueError, OverflowError):
        return None


def _require(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = data.get(key)
        if value not in (None, ""):
            return value
    raise PayloadShapeError(f"missing field: {'|'.join(keys)}")


_FALSE_FLAGS = frozenset({"false", "0", "no", "n", "off", ""})


def parse_flag(value: Any, default: bool = True) -> bool:
    """Booleans may arrive as JSON booleans, numbers or strings such as 'false'."""
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() not in _FALSE_FLAGS
    return bool(value)


def _expect_mapping(payload: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise TransportError(f"Respuesta inesperada del servidor ({what})")
    return payload


def parse_auth_token(payload: Any) -> AuthToken:
    data = _expect_mapping(payload, "token")
    token = data.get("access_token")
    if not isinstance(token, str) or not token:
        raise TransportError("Respuesta inesperada del servidor (token)")
    return AuthToken(
        access_token=token, token_type=str(data.get("token_type") or "bearer")
    )


def parse_user(payload: Any) -> User:
    data = _expect_mapping(payload, "usuario")
    try:
        user_id = str(_require(data, "user_id", "id"))
        email = str(_require(data, "email"))
    except PayloadShapeError as e:
        raise TransportError(
            "Respuesta inesperada del servidor (usuario)", context={"reason": str(e)}
        ) from e
    return User(
        user_id=user_id,
        email=email,
        balance=to_decimal(data.get("balance")),
        phone=str(data.get("phone") or ""),
        notification_preference=NotificationPreference.parse(
            data.get("notification_preference")
        ),
        created_at=parse_timestamp(data.get("created_at")),
    )


def parse_fund(data: Mapping[str, Any]) -> Fund:
    return Fund(
        fund_id=str(_require(data, "fund_id", "id")),
        name=str(_require(data, "name", "fund_name")),
        minimum_amount=to_decimal(data.get("minimum_amount")),
        category=FundCategory(str(_require(data, "category")).upper()),
        is_active=parse_flag(data.get("is_active")),
    )


def _subscription_status(data: Mapping[str, Any]) -> SubscriptionStatus:
    raw_status = data.get("status")
    if isinstance(raw_status, str) and raw_status.strip():
        return SubscriptionStatus(raw_status.strip().upper())
    if "is_active" in data:
        return (
            SubscriptionStatus.ACTIVE
            if parse_flag(data.get("is_active"))
            else SubscriptionStatus.CANCELLED
        )
    # /users/me/subscriptions only ever lists active ones
    return SubscriptionStatus.ACTIVE


def parse_subscription(data: Mapping[str, Any]) -> Subscription:
    fund_id = str(_require(data, "fund_id"))
    raw_category = data.get("fund_category") or data.get("category")
    try:
        category = FundCategory(str(raw_category).upper()) if raw_category else None
    except ValueError:
        category = None
    amount = data.get("amount")
    if amount is None:
        amount = data.get("invested_amount")
    return Subscription(
        subscription_id=str(_require(data, "subscription_id", "transaction_id", "id")),
        fund_id=fund_id,
        fund_name=str(data.get("fund_name") or fund_id),
        amount=to_decimal(amount),
        status=_subscription_status(data),
        fund_category=category,
        subscription_date=parse_timestamp(data.get("subscription_date")),
    )


def describe_transaction(kind: TransactionKind, fund_id: str | None) -> str:
    if kind is TransactionKind.SUBSCRIPTION:
        return f"Inversión en fondo {fund_id}"
    if kind is TransactionKind.CANCELLATION:
        return f"Cancelación de inversión en fondo {fund_id}"
    if kind is TransactionKind.DEPOSIT:
        return "Depósito de dinero"
    return "Transacción"


def parse_transaction(data: Mapping[str, Any]) -> Transaction:
    kind = TransactionKind.parse(data.get("transaction_type") or data.get("type"))
    fund_id = data.get("fund_id")
    fund_id = str(fund_id) if fund_id not in (None, "") else None
    fund_name = data.get("fund_name")
    return Transaction(
        transaction_id=str(_require(data, "transaction_id", "id")),
        kind=kind,
        amount=to_decimal(data.get("amount")),
        description=str(data.get("description") or describe_transaction(kind, fund_id)),
        status=str(data.get("status") or ""),
        fund_id=fund_id,
        fund_name=str(fund_name) if fund_name else None,
        timestamp=parse_timestamp(data.get("timestamp")),
    )


def parse_deposit_receipt(payload: Any) -> DepositReceipt:
    data = _expect_mapping(payload, "depósito")
    return DepositReceipt(
        message=str(data.get("message") or ""),
        transaction_id=str(data.get("transaction_id") or ""),
        amount_deposited=to_decimal(data.get("amount_deposited")),
        previous_balance=to_decimal(data.get("previous_balance")),
        new_balance=to_decimal(data.get("new_balance")),
        timestamp=parse_timestamp(data.get("timestamp")),
    )


def parse_subscription_receipt(payload: Any) -> SubscriptionReceipt:
    data = _expect_mapping(payload, "suscripción")
    return SubscriptionReceipt(
        message=str(data.get("message") or ""),
        transaction_id=str(data.get("transaction_id") or ""),
    )


def parse_funds(payload: Any) -> list[Fund]:
    return parse_many(unwrap_list(payload, "funds", "data", "items"), parse_fund)


def parse_subscriptions(payload: Any) -> list[Subscription]:
    return parse_many(
        unwrap_list(payload, "active_subscriptions", "subscriptions", "data"),
        parse_subscription,
    )


def parse_transactions(payload: Any) -> list[Transaction]:
    return parse_many(
        unwrap_list(payload, "transactions", "data", "items"), parse_transaction
    )
