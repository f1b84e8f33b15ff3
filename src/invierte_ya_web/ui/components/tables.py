# pyright: reportMissingImports=false

"""Table helpers."""

from __future__ import annotations

from typing import Any

from nicegui import ui  # pyright: ignore[reportMissingImports]

from invierte_ya_web.domain.entities import Transaction
from invierte_ya_web.formatting import format_date
from invierte_ya_web.ui.constants import TABLE

TRANSACTION_COLUMNS: list[dict[str, Any]] = [
    {"name": "icon", "label": "", "field": "icon"},
    {"name": "description", "label": "Descripción", "field": "description"},
    {"name": "date", "label": "Fecha", "field": "date", "sortable": True},
    {"name": "status", "label": "Estado", "field": "status"},
    {"name": "amount", "label": "Monto", "field": "amount", "align": "right"},
]


def transaction_rows(transactions: list[Transaction]) -> list[dict[str, Any]]:
    return [
        {
            "id": t.transaction_id,
            "icon": t.kind.display.icon,
            "description": t.description,
            "date": format_date(t.timestamp, with_time=True),
            "status": t.status,
            "amount": t.signed_amount,
        }
        for t in transactions
    ]


def data_table(
    *,
    columns: list[dict[str, Any]],
    rows: list[dict[str, Any]],
    row_key: str = "id",
    pagination: int | dict[str, Any] = 25,
) -> Any:
    return ui.table(
        columns=columns,
        rows=rows,
        row_key=row_key,
        pagination=pagination,
    ).classes(TABLE)
