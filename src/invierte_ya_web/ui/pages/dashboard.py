# pyright: reportMissingImports=false

from __future__ import annotations

from nicegui import ui  # pyright: ignore[reportMissingImports]

from invierte_ya_web.exceptions import InvierteYaError
from invierte_ya_web.formatting import format_cop, format_money, format_short_date
from invierte_ya_web.services.dashboard import DashboardData, load_dashboard
from invierte_ya_web.session.manager import SessionManager
from invierte_ya_web.ui.components.feedback import loading, retry_panel
from invierte_ya_web.ui.constants import (
    BUTTON_PRIMARY,
    BUTTON_SECONDARY,
    CARD,
    CARD_PAD,
    MUTED,
    PAGE_TITLE,
    SECTION_TITLE,
    STAT_LABEL,
    STAT_VALUE,
)


def render(session: SessionManager) -> None:
    title = ui.label("").classes(PAGE_TITLE)
    ui.label("Aquí tienes un resumen de tu actividad de inversión").classes(
        "text-slate-600"
    )

    body = ui.column().classes("w-full gap-4")

    async def refresh() -> None:
        loading(body, "Cargando dashboard...")
        try:
            data = await load_dashboard(session)
        except InvierteYaError:
            retry_panel(body, "Error al cargar los datos del dashboard", refresh)
            return
        title.set_text(f"¡Bienvenido, {data.user.display_name}! 👋")
        body.clear()
        with body:
            _summary(data)
            with ui.row().classes("w-full gap-4 items-stretch"):
                _featured_funds(data)
                _recent_transactions(data)
                _subscriptions(data)
            _quick_actions()

    ui.timer(0.05, refresh, once=True)


def _summary(data: DashboardData) -> None:
    with ui.card().classes(f"{CARD} {CARD_PAD} w-full"):
        ui.label("💰 Resumen Financiero").classes(SECTION_TITLE)
        with ui.row().classes("w-full gap-6"):
            for label, value in (
                ("Saldo disponible", format_money(data.user.balance)),
                ("Total invertido", format_money(data.total_invested)),
                ("Fondos activos", str(data.active_count)),
            ):
                with ui.column().classes("gap-0"):
                    ui.label(label).classes(STAT_LABEL)
                    ui.label(value).classes(STAT_VALUE)
        with ui.row().classes("gap-2 pt-2"):
            ui.button(
                "💳 Depositar Dinero", on_click=lambda: ui.navigate.to("/deposit")
            ).classes(BUTTON_PRIMARY)
            ui.button(
                "📊 Ver Fondos", on_click=lambda: ui.navigate.to("/funds")
            ).classes(BUTTON_SECONDARY)


def _featured_funds(data: DashboardData) -> None:
    with ui.card().classes(f"{CARD} {CARD_PAD} flex-1"):
        with ui.row().classes("w-full justify-between"):
            ui.label("📈 Fondos Destacados").classes(SECTION_TITLE)
            ui.link("Ver todos", "/funds")
        if not data.funds:
            ui.label("No hay fondos disponibles").classes(MUTED)
        for fund in data.funds:
            with ui.row().classes("w-full justify-between"):
                ui.label(fund.name)
                ui.badge(fund.category.value)
            ui.label(f"Mín: ${format_cop(fund.minimum_amount)}").classes(MUTED)


def _recent_transactions(data: DashboardData) -> None:
    with ui.card().classes(f"{CARD} {CARD_PAD} flex-1"):
        with ui.row().classes("w-full justify-between"):
            ui.label("📋 Transacciones Recientes").classes(SECTION_TITLE)
            ui.link("Ver todas", "/transactions")
        if not data.recent_transactions:
            ui.label("No hay transacciones recientes").classes(MUTED)
        for txn in data.recent_transactions:
            display = txn.kind.display
            with ui.row().classes("w-full justify-between"):
                ui.label(f"{display.icon} {display.label}")
                ui.label(f"${format_cop(txn.amount)}").classes(display.tone)
            ui.label(format_short_date(txn.timestamp)).classes(MUTED)


def _subscriptions(data: DashboardData) -> None:
    with ui.card().classes(f"{CARD} {CARD_PAD} flex-1"):
        with ui.row().classes("w-full justify-between"):
            ui.label("🎯 Mis Suscripciones").classes(SECTION_TITLE)
            ui.link("Ver portafolio", "/portfolio")
        if not data.active_preview:
            ui.label("No tienes suscripciones activas").classes(MUTED)
            ui.link("Explorar Fondos", "/funds")
        for sub in data.active_preview:
            with ui.row().classes("w-full justify-between"):
                ui.label(sub.fund_name)
                ui.label(f"${format_cop(sub.amount)}")
            ui.label(f"Desde: {format_short_date(sub.subscription_date)}").classes(MUTED)


def _quick_actions() -> None:
    with ui.card().classes(f"{CARD} {CARD_PAD} w-full"):
        ui.label("🚀 Acciones Rápidas").classes(SECTION_TITLE)
        with ui.row().classes("w-full gap-3"):
            for title, blurb, path in (
                ("Depositar", "Agregar dinero a tu cuenta", "/deposit"),
                ("Invertir", "Explorar fondos disponibles", "/funds"),
                ("Portafolio", "Gestionar tus inversiones", "/portfolio"),
                ("Configurar", "Ajustar tu perfil", "/profile"),
            ):
                with ui.link(target=path).classes("no-underline flex-1"):  # noqa: SIM117
                    with ui.card().classes(f"{CARD} {CARD_PAD}"):
                        ui.label(title).classes("font-semibold text-slate-900")
                        ui.label(blurb).classes(MUTED)
