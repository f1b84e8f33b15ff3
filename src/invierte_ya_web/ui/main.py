# pyright: reportMissingImports=false

"""NiceGUI entry point and routing."""

from __future__ import annotations

import os
from collections.abc import Callable, MutableMapping
from typing import Any

import httpx

from invierte_ya_web.api_client import InvierteYaAPIClient
from invierte_ya_web.config import get_settings
from invierte_ya_web.logging_config import LogContext, configure_logging, get_logger
from invierte_ya_web.session.manager import SessionManager
from invierte_ya_web.session.store import MappingTokenStore

logger = get_logger(__name__)

_http_client: httpx.AsyncClient | None = None


def _require_nicegui() -> Any:
    try:
        from nicegui import ui
    except ImportError as e:  # pragma: no cover
        raise ImportError(
            "NiceGUI is required for the web client. Install with 'pip install invierte-ya-web'."
        ) from e
    return ui


def _shared_http_client() -> httpx.AsyncClient:
    """One connection pool per process; tokens travel per request."""
    global _http_client
    if _http_client is None:
        settings = get_settings()
        _http_client = httpx.AsyncClient(
            base_url=settings.api_base_url,
            timeout=settings.api_timeout,
            headers={"Content-Type": "application/json"},
        )
    return _http_client


async def _close_http_client() -> None:
    global _http_client
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None


def add_global_styles() -> None:
    ui = _require_nicegui()
    ui.add_head_html(
        """
<style type="text/tailwindcss">
  @layer components {
    .iy-page {
      @apply bg-slate-50 min-h-screen;
    }
  }
</style>
"""
    )


def build_session(
    storage: MutableMapping[str, Any],
    navigate: Callable[[str], None],
    *,
    http_client: httpx.AsyncClient | None = None,
) -> SessionManager:
    """Session over one browser's storage; an ended session navigates to /login."""
    settings = get_settings()
    store = MappingTokenStore(storage, settings.token_storage_key)
    api = InvierteYaAPIClient(
        settings.api_base_url,
        token_store=store,
        client=http_client or _shared_http_client(),
    )
    session = SessionManager(api)

    def _to_login(reason: str) -> None:
        logger.info("redirect_to_login", reason=reason)
        navigate("/login")

    session.add_session_ended_listener(_to_login)
    return session


async def open_session() -> SessionManager:
    """Build the per-browser session and re-validate any stored token."""
    from nicegui import app, ui

    client = ui.context.client

    def navigate(path: str) -> None:
        with client:
            ui.navigate.to(path)

    session = build_session(app.storage.user, navigate)
    client.on_disconnect(session.close)
    await session.restore()
    return session


def create_ui() -> None:
    ui = _require_nicegui()

    from fastapi.responses import RedirectResponse

    from invierte_ya_web.ui.components.nav import header, public_header
    from invierte_ya_web.ui.pages import (
        dashboard,
        deposit,
        funds,
        login,
        portfolio,
        profile,
        register,
    )

    def shell(session: SessionManager, path: str, render_fn: Callable[[], None]) -> None:
        add_global_styles()
        if session.is_authenticated:
            header(session, active_path=path)
        else:
            public_header(active_path=path)
        with ui.column().classes("iy-page w-full"):  # noqa: SIM117
            with ui.column().classes("max-w-[1200px] w-full mx-auto p-6 gap-4"):
                render_fn()

    async def protected(path: str, render_fn: Callable[[SessionManager], None]) -> Any:
        session = await open_session()
        if not session.is_authenticated:
            session.close()
            return RedirectResponse("/login")
        with LogContext(page=path):
            shell(session, path, lambda: render_fn(session))
        return None

    async def public(path: str, render_fn: Callable[[SessionManager], None]) -> Any:
        session = await open_session()
        if session.is_authenticated:
            session.close()
            return RedirectResponse("/dashboard")
        shell(session, path, lambda: render_fn(session))
        return None

    @ui.page("/")  # type: ignore[untyped-decorator]
    async def index() -> Any:
        session = await open_session()
        target = "/dashboard" if session.is_authenticated else "/login"
        session.close()
        return RedirectResponse(target)

    @ui.page("/dashboard")  # type: ignore[untyped-decorator]
    async def dashboard_page() -> Any:
        return await protected("/dashboard", dashboard.render)

    @ui.page("/funds")  # type: ignore[untyped-decorator]
    async def funds_page() -> Any:
        return await protected("/funds", funds.render)

    @ui.page("/deposit")  # type: ignore[untyped-decorator]
    async def deposit_page() -> Any:
        return await protected("/deposit", deposit.render)

    @ui.page("/portfolio")  # type: ignore[untyped-decorator]
    async def portfolio_page() -> Any:
        return await protected("/portfolio", portfolio.render)

    @ui.page("/transactions")  # type: ignore[untyped-decorator]
    async def transactions_page() -> Any:
        return await protected(
            "/portfolio",
            lambda session: portfolio.render(session, initial_tab="transactions"),
        )

    @ui.page("/profile")  # type: ignore[untyped-decorator]
    async def profile_page() -> Any:
        return await protected("/profile", profile.render)

    @ui.page("/login")  # type: ignore[untyped-decorator]
    async def login_page() -> Any:
        return await public("/login", login.render)

    @ui.page("/register")  # type: ignore[untyped-decorator]
    async def register_page() -> Any:
        return await public("/register", register.render)

    @ui.page("/{unknown:path}")  # type: ignore[untyped-decorator]
    def fallback_page(unknown: str) -> Any:
        return RedirectResponse("/dashboard")


def run(
    *,
    port: int | None = None,
    api_url: str | None = None,
    reload: bool | None = None,
) -> None:
    ui = _require_nicegui()
    from nicegui import app

    if api_url:
        # read again by the reload worker process
        os.environ["IYW_API_BASE_URL"] = api_url
        get_settings.cache_clear()

    settings = get_settings()
    configure_logging(settings)

    app.on_shutdown(_close_http_client)

    logger.info(
        "ui_starting",
        api_base_url=settings.api_base_url,
        port=port or settings.ui_port,
    )
    create_ui()
    ui.run(
        title=settings.app_name,
        host=settings.ui_host,
        port=port or settings.ui_port,
        reload=settings.ui_reload if reload is None else reload,
        storage_secret=settings.storage_secret,
        show=False,
    )


if __name__ in {"__main__", "__mp_main__"}:
    run()
