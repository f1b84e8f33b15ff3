# pyright: reportMissingImports=false

"""Registration page."""

from __future__ import annotations

from nicegui import ui  # pyright: ignore[reportMissingImports]

from invierte_ya_web.config import get_settings
from invierte_ya_web.domain.entities import RegistrationForm
from invierte_ya_web.domain.validation import validate_registration
from invierte_ya_web.domain.value_objects import NotificationPreference
from invierte_ya_web.exceptions import InvierteYaError
from invierte_ya_web.session.manager import SessionManager
from invierte_ya_web.ui.components.feedback import StatusBanner
from invierte_ya_web.ui.components.forms import select_field, text_field
from invierte_ya_web.ui.constants import (
    BUTTON_PRIMARY,
    CARD,
    CARD_PAD,
    MUTED,
    NOTIFICATION_OPTIONS,
)


def render(session: SessionManager) -> None:
    settings = get_settings()

    with ui.card().classes(f"{CARD} {CARD_PAD} w-full max-w-md mx-auto"):
        ui.label("📈 Invierte Ya").classes("text-2xl font-semibold text-slate-900")
        ui.label("Crear Cuenta").classes("text-lg text-slate-700")

        banner = StatusBanner()
        email_in = text_field("📧 Correo Electrónico", placeholder="tu@email.com")
        phone_in = text_field("📱 Teléfono", placeholder="+57 300 123 4567")
        password_in = text_field(
            "🔒 Contraseña",
            password=True,
            placeholder=f"Mínimo {settings.minimum_password_length} caracteres",
        )
        confirm_in = text_field(
            "🔒 Confirmar Contraseña", password=True, placeholder="Repite tu contraseña"
        )
        preference_in = select_field(
            "🔔 Preferencia de Notificaciones",
            options=NOTIFICATION_OPTIONS,
            value=NotificationPreference.EMAIL.value,
        ).classes("w-full")

        async def submit() -> None:
            banner.clear()
            form = RegistrationForm(
                email=str(email_in.value or "").strip(),
                password=str(password_in.value or ""),
                phone=str(phone_in.value or ""),
                notification_preference=NotificationPreference.parse(
                    preference_in.value
                ),
            )
            try:
                validate_registration(
                    form,
                    str(confirm_in.value or ""),
                    min_password_length=settings.minimum_password_length,
                )
                button.disable()
                button.set_text("Creando cuenta...")
                await session.register(form)
            except InvierteYaError as e:
                banner.error(e.message)
                button.enable()
                button.set_text("Crear Cuenta")
                return
            ui.navigate.to("/dashboard")

        button = ui.button("Crear Cuenta", on_click=submit).classes(
            f"{BUTTON_PRIMARY} w-full"
        )

        with ui.row().classes("gap-1"):
            ui.label("¿Ya tienes una cuenta?").classes(MUTED)
            ui.link("Inicia sesión aquí", "/login")
