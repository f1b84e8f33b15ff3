# pyright: reportMissingImports=false

"""Navigation components."""

from __future__ import annotations

from nicegui import ui  # pyright: ignore[reportMissingImports]

from invierte_ya_web.domain.entities import User
from invierte_ya_web.formatting import format_money
from invierte_ya_web.session.manager import SessionManager
from invierte_ya_web.ui.constants import BRAND, NAV_ITEMS, NAV_LINK, NAV_LINK_ACTIVE


def header(session: SessionManager, *, active_path: str = "") -> None:
    with ui.header(elevated=True).classes("bg-white border-b border-slate-200"):  # noqa: SIM117
        with ui.row().classes("w-full items-center justify-between px-4 py-2"):
            ui.link(BRAND, "/dashboard").classes(
                "text-lg font-semibold text-slate-900 no-underline"
            )

            with ui.row().classes("gap-1"):
                for item in NAV_ITEMS:
                    css = NAV_LINK_ACTIVE if item["path"] == active_path else NAV_LINK
                    ui.link(item["label"], item["path"]).classes(css)

            with ui.row().classes("items-center gap-3"):
                user = session.user
                if user is not None:
                    with ui.column().classes("gap-0 items-end"):
                        name_label = ui.label(user.display_name).classes(
                            "text-sm text-slate-900"
                        )
                        balance_label = ui.label(format_money(user.balance)).classes(
                            "text-xs text-slate-500"
                        )

                    def follow(updated: User) -> None:
                        name_label.set_text(updated.display_name)
                        balance_label.set_text(format_money(updated.balance))

                    session.add_profile_listener(follow)
                ui.button("Cerrar sesión", on_click=session.logout).props("flat dense")


def public_header(*, active_path: str = "") -> None:
    with ui.header(elevated=True).classes("bg-white border-b border-slate-200"):  # noqa: SIM117
        with ui.row().classes("w-full items-center justify-between px-4 py-2"):
            ui.label(BRAND).classes("text-lg font-semibold text-slate-900")
            with ui.row().classes("gap-1"):
                for path, label in (
                    ("/login", "Iniciar Sesión"),
                    ("/register", "Registrarse"),
                ):
                    css = NAV_LINK_ACTIVE if path == active_path else NAV_LINK
                    ui.link(label, path).classes(css)
