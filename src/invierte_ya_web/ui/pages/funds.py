# pyright: reportMissingImports=false

"""Funds page."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from nicegui import ui  # pyright: ignore[reportMissingImports]

from invierte_ya_web.config import get_settings
from invierte_ya_web.domain.entities import Fund
from invierte_ya_web.domain.value_objects import FundCategory
from invierte_ya_web.exceptions import InvierteYaError
from invierte_ya_web.formatting import format_cop, format_money
from invierte_ya_web.services.funds import SubscriptionForm, load_active_funds
from invierte_ya_web.session.manager import SessionManager
from invierte_ya_web.ui.components.feedback import StatusBanner, loading, retry_panel
from invierte_ya_web.ui.components.forms import money_input
from invierte_ya_web.ui.constants import (
    BUTTON_PRIMARY,
    BUTTON_SECONDARY,
    CARD,
    CARD_PAD,
    ERROR_TEXT,
    FUND_CATEGORY_BLURBS,
    MUTED,
    PAGE_TITLE,
    SECTION_TITLE,
)


def render(session: SessionManager) -> None:
    settings = get_settings()
    form = SubscriptionForm()
    funds: list[Fund] = []

    ui.label("📊 Fondos de Inversión").classes(PAGE_TITLE)
    ui.label("Explora y suscríbete a nuestros fondos de inversión").classes(
        "text-slate-600"
    )
    balance_label = ui.label("").classes("text-slate-700")
    banner = StatusBanner()
    grid = ui.row().classes("w-full gap-4")

    def balance() -> Decimal:
        return session.user.balance if session.user is not None else Decimal("0")

    def show_balance() -> None:
        balance_label.set_text(f"Saldo disponible: {format_money(balance())}")

    def render_cards() -> None:
        show_balance()
        grid.clear()
        with grid:
            if not funds:
                with ui.card().classes(f"{CARD} {CARD_PAD} w-full"):
                    ui.label("No hay fondos disponibles").classes(SECTION_TITLE)
                    ui.label("Actualmente no hay fondos activos para invertir.").classes(
                        MUTED
                    )
                    ui.button("🔄 Recargar", on_click=refresh).classes(BUTTON_SECONDARY)
                return
            for fund in funds:
                _fund_card(fund)

    def _fund_card(fund: Fund) -> None:
        with ui.card().classes(f"{CARD} {CARD_PAD} w-80"):
            with ui.row().classes("w-full justify-between items-center"):
                ui.label(fund.name).classes("font-semibold text-slate-900")
                ui.badge(fund.category.value)
            ui.label(fund.category.label).classes(MUTED)
            ui.label(f"Monto mínimo: {format_money(fund.minimum_amount)}")
            ui.label(FUND_CATEGORY_BLURBS[fund.category.value]).classes(MUTED)

            def update(_: Any = None) -> None:
                amount = form.amount_for(fund)
                reason = form.block_reason(fund, balance())
                button.set_text(f"Invertir ${format_cop(amount)}")
                if reason is None:
                    hint.set_text("")
                    button.enable()
                else:
                    hint.set_text(
                        "Saldo insuficiente"
                        if amount >= fund.minimum_amount
                        else f"Monto mínimo: ${format_cop(fund.minimum_amount)}"
                    )
                    button.disable()

            def on_amount(text: str) -> None:
                form.set_override(fund.fund_id, text)
                update()

            amount_in = money_input(
                "Monto a invertir",
                placeholder=format_cop(fund.minimum_amount),
                on_change=on_amount,
            )
            hint = ui.label("").classes(f"text-xs {ERROR_TEXT}")
            button = ui.button("").classes(BUTTON_PRIMARY)
            amount_in.set_value(form.override(fund.fund_id))

            async def subscribe() -> None:
                banner.clear()
                button.disable()
                button.set_text("Suscribiendo...")
                try:
                    message = await form.subscribe(session, fund)
                except InvierteYaError as e:
                    banner.error(e.message)
                    update()
                    return
                banner.success(message)
                ui.timer(settings.success_message_seconds, banner.clear, once=True)
                render_cards()

            button.on_click(subscribe)
            update()

    async def refresh() -> None:
        banner.clear()
        loading(grid, "Cargando fondos...")
        try:
            loaded = await load_active_funds(session.api)
        except InvierteYaError:
            retry_panel(grid, "Error al cargar los fondos", refresh)
            return
        funds[:] = loaded
        render_cards()

    with ui.card().classes(f"{CARD} {CARD_PAD} w-full"):
        ui.label("Información sobre los Fondos").classes(SECTION_TITLE)
        for category in FundCategory:
            ui.label(f"{category.value} - {category.label}").classes("font-semibold")
            ui.label(FUND_CATEGORY_BLURBS[category.value]).classes(MUTED)

    show_balance()
    ui.timer(0.05, refresh, once=True)
