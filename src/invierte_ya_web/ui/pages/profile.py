# pyright: reportMissingImports=false

"""Profile page."""

from __future__ import annotations

from nicegui import ui  # pyright: ignore[reportMissingImports]

from invierte_ya_web.exceptions import InvierteYaError
from invierte_ya_web.formatting import format_date, format_money
from invierte_ya_web.services.profile import save_profile
from invierte_ya_web.session.manager import SessionManager
from invierte_ya_web.ui.components.feedback import StatusBanner
from invierte_ya_web.ui.components.forms import text_field
from invierte_ya_web.ui.constants import (
    BUTTON_PRIMARY,
    CARD,
    CARD_PAD,
    MUTED,
    NOTIFICATION_OPTIONS,
    PAGE_TITLE,
    SECTION_TITLE,
    STAT_VALUE,
)


def render(session: SessionManager) -> None:
    ui.label("👤 Mi Perfil").classes(PAGE_TITLE)
    banner = StatusBanner()

    details = ui.card().classes(f"{CARD} {CARD_PAD} w-full max-w-2xl")
    editor = ui.card().classes(f"{CARD} {CARD_PAD} w-full max-w-2xl")
    editor.set_visibility(False)

    with ui.card().classes(f"{CARD} {CARD_PAD} w-full max-w-2xl"):
        ui.label("💰 Información Financiera").classes(SECTION_TITLE)
        balance_label = ui.label("").classes(STAT_VALUE)

    def show_details() -> None:
        user = session.user
        details.clear()
        if user is None:
            return
        balance_label.set_text(format_money(user.balance))
        with details:
            with ui.row().classes("w-full justify-between"):
                ui.label("Información Personal").classes(SECTION_TITLE)
                ui.button("✏️ Editar", on_click=start_editing).props("flat dense")
            for label, value in (
                ("Email", user.email),
                ("Teléfono", user.phone or "No especificado"),
                (
                    "Notificaciones",
                    NOTIFICATION_OPTIONS.get(
                        user.notification_preference.value,
                        user.notification_preference.value,
                    ),
                ),
                ("Miembro desde", format_date(user.created_at, with_time=True)),
            ):
                with ui.row().classes("w-full gap-2"):
                    ui.label(f"{label}:").classes(MUTED)
                    ui.label(value)

    with editor:
        ui.label("Editar información").classes(SECTION_TITLE)
        email_in = text_field("Email")
        phone_in = text_field("Teléfono", placeholder="+57 300 123 4567")

        async def save() -> None:
            banner.clear()
            try:
                await save_profile(
                    session, str(email_in.value or ""), str(phone_in.value or "")
                )
            except InvierteYaError as e:
                banner.error(e.message)
                return
            banner.success("Perfil actualizado exitosamente")
            stop_editing()

        with ui.row().classes("w-full justify-end gap-2 pt-2"):
            ui.button("Cancelar", on_click=lambda: stop_editing()).props("flat")
            ui.button("Guardar Cambios", on_click=save).classes(BUTTON_PRIMARY)

    def start_editing() -> None:
        user = session.user
        email_in.set_value(user.email if user else "")
        phone_in.set_value(user.phone if user else "")
        banner.clear()
        details.set_visibility(False)
        editor.set_visibility(True)

    def stop_editing() -> None:
        editor.set_visibility(False)
        details.set_visibility(True)
        show_details()

    show_details()
