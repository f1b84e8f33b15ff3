# pyright: reportMissingImports=false

"""Deposit page."""

from __future__ import annotations

from nicegui import ui  # pyright: ignore[reportMissingImports]

from invierte_ya_web.config import get_settings
from invierte_ya_web.domain.validation import deposit_block_reason
from invierte_ya_web.exceptions import InvierteYaError
from invierte_ya_web.formatting import format_cop, format_money, parse_amount_text
from invierte_ya_web.services.deposit import preview_new_balance, submit_deposit
from invierte_ya_web.session.manager import SessionManager
from invierte_ya_web.ui.components.feedback import StatusBanner
from invierte_ya_web.ui.components.forms import money_input
from invierte_ya_web.ui.constants import (
    BUTTON_PRIMARY,
    BUTTON_SECONDARY,
    CARD,
    CARD_PAD,
    MUTED,
    PAGE_TITLE,
    SECTION_TITLE,
)


def render(session: SessionManager) -> None:
    settings = get_settings()

    ui.label("💳 Depositar Dinero").classes(PAGE_TITLE)
    ui.label("Agrega fondos a tu cuenta para comenzar a invertir").classes(
        "text-slate-600"
    )
    balance_label = ui.label("").classes("text-slate-700")

    banner = StatusBanner()

    with ui.card().classes(f"{CARD} {CARD_PAD} w-full max-w-xl"):
        amount_in = money_input("Monto a depositar", on_change=lambda _: recalc())
        ui.label(
            f"Mínimo: ${format_cop(settings.min_deposit)} · "
            f"Máximo: ${format_cop(settings.max_deposit)}"
        ).classes(MUTED)

        ui.label("💡 Montos sugeridos").classes(SECTION_TITLE)
        with ui.row().classes("gap-2"):
            for quick in settings.quick_deposit_amounts:
                ui.button(
                    f"${format_cop(quick)}",
                    on_click=lambda q=quick: amount_in.set_value(format_cop(q)),
                ).classes(BUTTON_SECONDARY).props("dense")

        with ui.column().classes("w-full gap-1 pt-2"):
            amount_preview = ui.label("").classes("text-slate-700")
            balance_preview = ui.label("").classes("text-slate-700")

        submit_btn = ui.button("💰 Depositar").classes(BUTTON_PRIMARY)

    def recalc() -> None:
        user = session.user
        balance = user.balance if user is not None else 0
        amount = parse_amount_text(amount_in.value)
        balance_label.set_text(f"💰 Saldo actual: {format_money(balance)}")
        amount_preview.set_text(f"Monto a depositar: {format_money(amount)}")
        balance_preview.set_text(
            f"Nuevo saldo: {format_money(preview_new_balance(balance, amount))}"
        )
        submit_btn.set_text(f"💰 Depositar ${format_cop(amount)} COP")
        # above the maximum stays clickable; submit reports the limit
        if amount < settings.min_deposit:
            submit_btn.disable()
        else:
            submit_btn.enable()

    async def submit() -> None:
        banner.clear()
        reason = deposit_block_reason(
            parse_amount_text(amount_in.value),
            minimum=settings.min_deposit,
            maximum=settings.max_deposit,
        )
        if reason is not None:
            banner.error(reason)
            return
        submit_btn.disable()
        submit_btn.set_text("Procesando depósito...")
        try:
            outcome = await submit_deposit(session, str(amount_in.value or ""), settings)
        except InvierteYaError as e:
            banner.error(e.message)
            recalc()
            return
        amount_in.set_value("")
        recalc()
        if outcome.user is None:
            # session ended with the failed re-fetch; the login redirect follows
            banner.success(outcome.message)
            return
        banner.success(
            f"{outcome.message} Redirigiendo al dashboard en "
            f"{settings.redirect_delay_seconds:g} segundos..."
        )
        ui.timer(
            settings.redirect_delay_seconds,
            lambda: ui.navigate.to("/dashboard"),
            once=True,
        )

    submit_btn.on_click(submit)

    with ui.card().classes(f"{CARD} {CARD_PAD} w-full max-w-xl"):
        ui.label("ℹ️ Información importante").classes(SECTION_TITLE)
        for line in (
            "🔒 Todas las transacciones son seguras y encriptadas",
            "⚡ Los depósitos se procesan instantáneamente",
            "📧 Recibirás una confirmación por email/SMS",
            "📊 Puedes ver el historial en la sección de transacciones",
        ):
            ui.label(line).classes(MUTED)

    recalc()
