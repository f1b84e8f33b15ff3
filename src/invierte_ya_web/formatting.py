"""Display formatting for Colombian pesos and dates.

Amounts are whole COP units; the es-CO locale groups thousands with '.'.
"""

from __future__ import annotations

import re
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

_NON_DIGITS = re.compile(r"[^0-9]")

_MONTHS_ES = (
    "enero",
    "febrero",
    "marzo",
    "abril",
    "mayo",
    "junio",
    "julio",
    "agosto",
    "septiembre",
    "octubre",
    "noviembre",
    "diciembre",
)


def to_decimal(value: Any, default: Decimal = Decimal("0")) -> Decimal:
    """Coerce a JSON number or numeric string to Decimal."""
    if value is None or isinstance(value, bool):
        return default
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return default


def parse_amount_text(text: str | None) -> Decimal:
    """Read an amount typed by the user, ignoring every non-digit.

    "50.000" -> 50000, "$ 1,000,000 COP" -> 1000000, "" -> 0.
    """
    digits = _NON_DIGITS.sub("", text or "")
    if not digits:
        return Decimal("0")
    return Decimal(int(digits))


def format_cop(amount: Decimal | int | float | None) -> str:
    """Format an amount with es-CO grouping: 1234567 -> '1.234.567'."""
    value = to_decimal(amount).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    return sign + f"{abs(int(value)):,}".replace(",", ".")


def format_money(amount: Decimal | int | float | None) -> str:
    """'$50.000 COP'."""
    return f"${format_cop(amount)} COP"


def format_amount_input(text: str | None) -> str:
    """Normalize a free-text amount field for redisplay ('50000' -> '50.000')."""
    digits = _NON_DIGITS.sub("", text or "")
    if not digits:
        return ""
    return format_cop(int(digits))


def format_date(value: datetime | None, *, with_time: bool = False) -> str:
    """Long Spanish date: '18 de octubre de 2026' (optionally with HH:MM)."""
    if value is None:
        return "No disponible"
    text = f"{value.day} de {_MONTHS_ES[value.month - 1]} de {value.year}"
    if with_time:
        text += f", {value:%H:%M}"
    return text


def format_short_date(value: datetime | None) -> str:
    """'18/10/2026'."""
    if value is None:
        return ""
    return f"{value.day}/{value.month}/{value.year}"
