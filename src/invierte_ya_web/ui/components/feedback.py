# pyright: reportMissingImports=false

"""Inline error/success messages and the manual retry affordance."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from nicegui import ui  # pyright: ignore[reportMissingImports]

from invierte_ya_web.ui.constants import BUTTON_SECONDARY, ERROR_TEXT, SUCCESS_TEXT


class StatusBanner:
    def __init__(self) -> None:
        self._label = ui.label("").classes("w-full")
        self._label.set_visibility(False)

    def error(self, message: str) -> None:
        self._show(f"⚠️ {message}", ERROR_TEXT)

    def success(self, message: str) -> None:
        self._show(f"✅ {message}", SUCCESS_TEXT)

    def clear(self) -> None:
        self._label.set_text("")
        self._label.set_visibility(False)

    def _show(self, text: str, css: str) -> None:
        self._label.classes(replace=f"w-full {css}")
        self._label.set_text(text)
        self._label.set_visibility(True)


def retry_panel(container: Any, message: str, on_retry: Callable[[], Awaitable[None]]) -> None:
    """Replace ``container``'s content with an error and a 'Reintentar' button."""
    container.clear()
    with container, ui.row().classes("w-full items-center gap-3"):
        ui.label(f"⚠️ {message}").classes(ERROR_TEXT)
        ui.button("🔄 Reintentar", on_click=on_retry).classes(BUTTON_SECONDARY)


def loading(container: Any, message: str) -> None:
    container.clear()
    with container, ui.row().classes("items-center gap-2"):
        ui.spinner()
        ui.label(message).classes("text-slate-500")
