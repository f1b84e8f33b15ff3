# pyright: reportMissingImports=false

"""Form field helpers."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from nicegui import ui  # pyright: ignore[reportMissingImports]

from invierte_ya_web.formatting import format_amount_input
from invierte_ya_web.ui.constants import INPUT


def money_input(
    label: str,
    *,
    placeholder: str = "0",
    on_change: Callable[[str], None] | None = None,
) -> Any:
    """Free-text COP field that regroups digits as the user types ('50.000')."""
    inp = ui.input(label=label, placeholder=placeholder).props(
        "dense outlined prefix=$ suffix=COP"
    ).classes(INPUT)

    def _reformat(e: Any) -> None:
        formatted = format_amount_input(str(e.value or ""))
        if formatted != (e.value or ""):
            inp.set_value(formatted)
            return
        if on_change is not None:
            on_change(formatted)

    inp.on_value_change(_reformat)
    return inp


def select_field(
    label: str,
    *,
    options: dict[str, str],
    value: str | None = None,
    on_change: Callable[[Any], None] | None = None,
) -> Any:
    sel = ui.select(options=options, label=label, value=value).props("dense outlined")
    if on_change is not None:
        sel.on_value_change(on_change)
    return sel


def text_field(label: str, *, password: bool = False, placeholder: str = "") -> Any:
    return (
        ui.input(
            label=label,
            placeholder=placeholder,
            password=password,
            password_toggle_button=password,
        )
        .props("dense outlined")
        .classes(INPUT)
    )
