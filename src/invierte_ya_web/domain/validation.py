"""Client-side pre-validation mirroring the ledger service's rules.

These checks only decide whether a form may be submitted. The server stays
the source of truth and may still reject what passes here.
"""

from __future__ import annotations

import re
from decimal import Decimal

from invierte_ya_web.domain.entities import Fund, RegistrationForm
from invierte_ya_web.exceptions import (
    BelowMinimumError,
    InsufficientBalanceError,
    InvalidAmountError,
    ValidationError,
)
from invierte_ya_web.formatting import format_cop, parse_amount_text

# E.164-ish: optional '+', no leading zero, up to 15 digits
REGISTRATION_PHONE_RE = re.compile(r"^\+?[1-9]\d{1,14}$")
PROFILE_PHONE_RE = re.compile(r"^\+?[0-9\s\-()]{10,}$")
EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def validate_deposit_amount(
    amount: Decimal, *, minimum: Decimal, maximum: Decimal
) -> Decimal:
    """Return the amount if it lies in [minimum, maximum], else raise."""
    if amount < minimum:
        raise InvalidAmountError(
            amount, f"El monto mínimo de depósito es ${format_cop(minimum)} COP"
        )
    if amount > maximum:
        raise InvalidAmountError(
            amount, f"El monto máximo de depósito es ${format_cop(maximum)} COP"
        )
    return amount


def deposit_block_reason(
    amount: Decimal, *, minimum: Decimal, maximum: Decimal
) -> str | None:
    try:
        validate_deposit_amount(amount, minimum=minimum, maximum=maximum)
    except InvalidAmountError as e:
        return e.message
    return None


def subscription_amount(fund: Fund, override_text: str | None) -> Decimal:
    """The user's override when one was typed, otherwise the fund minimum."""
    if override_text and override_text.strip():
        return parse_amount_text(override_text)
    return fund.minimum_amount


def validate_subscription(fund: Fund, amount: Decimal, balance: Decimal) -> Decimal:
    if amount < fund.minimum_amount:
        raise BelowMinimumError(fund.name, amount, fund.minimum_amount)
    if amount > balance:
        raise InsufficientBalanceError(amount, balance)
    return amount


def subscription_block_reason(
    fund: Fund, amount: Decimal, balance: Decimal
) -> str | None:
    try:
        validate_subscription(fund, amount, balance)
    except ValidationError as e:
        return e.message
    return None


def validate_email(email: str) -> str:
    email = (email or "").strip()
    if not email:
        raise ValidationError("El email es requerido")
    if not EMAIL_RE.match(email):
        raise ValidationError("Por favor ingresa un email válido")
    return email


def validate_login(email: str, password: str) -> None:
    validate_email(email)
    if not password:
        raise ValidationError("La contraseña es requerida")


def validate_registration(
    form: RegistrationForm, confirm_password: str, *, min_password_length: int = 6
) -> RegistrationForm:
    validate_email(form.email)
    if form.password != confirm_password:
        raise ValidationError("Las contraseñas no coinciden")
    if len(form.password) < min_password_length:
        raise ValidationError(
            f"La contraseña debe tener al menos {min_password_length} caracteres"
        )
    if not REGISTRATION_PHONE_RE.match("".join(form.phone.split())):
        raise ValidationError("Por favor ingresa un número de teléfono válido")
    return form


def validate_profile_contact(email: str, phone: str) -> None:
    if not (email or "").strip():
        raise ValidationError("El email es requerido")
    if "@" not in email:
        raise ValidationError("Por favor ingresa un email válido")
    if phone and not PROFILE_PHONE_RE.match(phone):
        raise ValidationError("Por favor ingresa un número de teléfono válido")
