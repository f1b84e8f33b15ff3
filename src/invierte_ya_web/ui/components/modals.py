# pyright: reportMissingImports=false

"""Dialog/modal helpers."""

from __future__ import annotations

from nicegui import ui  # pyright: ignore[reportMissingImports]

from invierte_ya_web.ui.constants import BUTTON_DANGER


async def ask_confirmation(
    *,
    title: str,
    message: str,
    confirm_label: str = "Confirmar",
    cancel_label: str = "Cancelar",
) -> bool:
    """Open a modal and wait for the user's answer.

    Closing the dialog any other way counts as declining.
    """
    with ui.dialog() as dialog, ui.card().classes("w-[28rem]"):
        ui.label(title).classes("text-lg font-semibold")
        ui.label(message).classes("text-slate-700")
        with ui.row().classes("w-full justify-end gap-2"):
            ui.button(cancel_label, on_click=lambda: dialog.submit(False)).props("flat")
            ui.button(confirm_label, on_click=lambda: dialog.submit(True)).classes(
                BUTTON_DANGER
            )
    result = await dialog
    dialog.delete()
    return result is True

