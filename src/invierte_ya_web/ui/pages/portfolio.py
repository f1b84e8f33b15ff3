# pyright: reportMissingImports=false

"""Portfolio page: subscriptions and transaction history."""

from __future__ import annotations

from nicegui import ui  # pyright: ignore[reportMissingImports]

from invierte_ya_web.domain.entities import Subscription
from invierte_ya_web.exceptions import InvierteYaError
from invierte_ya_web.formatting import format_date, format_money
from invierte_ya_web.services.portfolio import (
    PortfolioData,
    cancel_subscription,
    load_portfolio,
)
from invierte_ya_web.session.manager import SessionManager
from invierte_ya_web.ui.components.feedback import (
    StatusBanner,
    loading,
    retry_panel,
)
from invierte_ya_web.ui.components.modals import ask_confirmation
from invierte_ya_web.ui.components.tables import (
    TRANSACTION_COLUMNS,
    data_table,
    transaction_rows,
)
from invierte_ya_web.ui.constants import (
    BUTTON_DANGER,
    CARD,
    CARD_PAD,
    MUTED,
    PAGE_TITLE,
    SECTION_TITLE,
    STAT_LABEL,
    STAT_VALUE,
)


async def _confirm_cancel(subscription: Subscription) -> bool:
    return await ask_confirmation(
        title="Cancelar suscripción",
        message=(
            "¿Estás seguro de que deseas cancelar tu suscripción a "
            f"{subscription.fund_name}?"
        ),
        confirm_label="Sí, cancelar",
        cancel_label="No",
    )


def render(session: SessionManager, *, initial_tab: str = "subscriptions") -> None:
    ui.label("📊 Mi Portafolio").classes(PAGE_TITLE)
    ui.label("Gestiona tus inversiones y revisa tu historial financiero").classes(
        "text-slate-600"
    )

    banner = StatusBanner()
    body = ui.column().classes("w-full gap-4")

    def render_data(data: PortfolioData) -> None:
        body.clear()
        with body:
            with ui.row().classes("w-full gap-4"):
                balance = session.user.balance if session.user is not None else 0
                for label, value in (
                    ("Saldo Disponible", format_money(balance)),
                    ("Total Invertido", format_money(data.total_invested)),
                    ("Fondos Activos", str(data.active_count)),
                ):
                    with ui.card().classes(f"{CARD} {CARD_PAD} w-64"):
                        ui.label(label).classes(STAT_LABEL)
                        ui.label(value).classes(STAT_VALUE)

            with ui.tabs().classes("w-full") as tabs:
                subs_tab = ui.tab(f"📈 Mis Inversiones ({len(data.subscriptions)})")
                txn_tab = ui.tab(f"📋 Historial ({len(data.transactions)})")

            initial = txn_tab if initial_tab == "transactions" else subs_tab
            with ui.tab_panels(tabs, value=initial).classes("w-full"):
                with ui.tab_panel(subs_tab):
                    _subscriptions_panel(data)
                with ui.tab_panel(txn_tab):
                    _transactions_panel(data)

    def _subscriptions_panel(data: PortfolioData) -> None:
        if not data.subscriptions:
            ui.label("No tienes inversiones activas").classes(SECTION_TITLE)
            ui.label("Comienza a invertir en nuestros fondos disponibles").classes(MUTED)
            ui.link("🚀 Ver Fondos Disponibles", "/funds")
            return
        with ui.row().classes("w-full gap-4"):
            for sub in data.subscriptions:
                with ui.card().classes(f"{CARD} {CARD_PAD} w-80"):
                    with ui.row().classes("w-full justify-between"):
                        ui.label(sub.fund_name).classes("font-semibold")
                        ui.label("✅ Activa" if sub.is_active else "❌ Cancelada")
                    ui.label(format_money(sub.amount)).classes("text-lg")
                    ui.label(
                        f"Desde: {format_date(sub.subscription_date, with_time=True)}"
                    ).classes(MUTED)
                    if sub.is_active:
                        ui.button(
                            "❌ Cancelar Suscripción",
                            on_click=lambda s=sub: cancel(s),
                        ).classes(BUTTON_DANGER)

    def _transactions_panel(data: PortfolioData) -> None:
        if not data.transactions:
            ui.label("No tienes transacciones registradas").classes(SECTION_TITLE)
            ui.label(
                "Realiza tu primer depósito o inversión para ver el historial"
            ).classes(MUTED)
            ui.link("💰 Hacer Depósito", "/deposit")
            return
        data_table(
            columns=TRANSACTION_COLUMNS,
            rows=transaction_rows(data.transactions),
            row_key="id",
        )

    async def refresh() -> None:
        loading(body, "Cargando tu portafolio...")
        try:
            data = await load_portfolio(session.api)
        except InvierteYaError as e:
            retry_panel(
                body,
                e.message or "Error al cargar la información del portafolio",
                refresh,
            )
            return
        render_data(data)

    async def cancel(subscription: Subscription) -> None:
        banner.clear()
        try:
            outcome = await cancel_subscription(session, subscription, _confirm_cancel)
        except InvierteYaError as e:
            banner.error(e.message)
            return
        if outcome is None:
            return
        banner.success(outcome.message)
        if outcome.data is None:
            await refresh()
        else:
            render_data(outcome.data)

    ui.timer(0.05, refresh, once=True)
