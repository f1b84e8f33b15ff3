# pyright: reportMissingImports=false

"""Login page."""

from __future__ import annotations

from nicegui import ui  # pyright: ignore[reportMissingImports]

from invierte_ya_web.domain.validation import validate_login
from invierte_ya_web.exceptions import InvierteYaError
from invierte_ya_web.session.manager import SessionManager
from invierte_ya_web.ui.components.feedback import StatusBanner
from invierte_ya_web.ui.components.forms import text_field
from invierte_ya_web.ui.constants import BUTTON_PRIMARY, CARD, CARD_PAD, MUTED


def render(session: SessionManager) -> None:
    with ui.card().classes(f"{CARD} {CARD_PAD} w-full max-w-md mx-auto"):
        ui.label("📈 Invierte Ya").classes("text-2xl font-semibold text-slate-900")
        ui.label("Iniciar Sesión").classes("text-lg text-slate-700")

        banner = StatusBanner()
        email_in = text_field("📧 Correo Electrónico", placeholder="tu@email.com")
        password_in = text_field("🔒 Contraseña", password=True)

        async def submit() -> None:
            banner.clear()
            email = str(email_in.value or "")
            password = str(password_in.value or "")
            try:
                validate_login(email, password)
                button.disable()
                button.set_text("Iniciando sesión...")
                await session.login(email, password)
            except InvierteYaError as e:
                banner.error(e.message)
                button.enable()
                button.set_text("Iniciar Sesión")
                return
            ui.navigate.to("/dashboard")

        button = ui.button("Iniciar Sesión", on_click=submit).classes(
            f"{BUTTON_PRIMARY} w-full"
        )
        password_in.on("keydown.enter", submit)

        with ui.row().classes("gap-1"):
            ui.label("¿No tienes una cuenta?").classes(MUTED)
            ui.link("Regístrate aquí", "/register")
