"""HTTP client wrapper for the Invierte Ya ledger API.

Every remote call goes through ``InvierteYaAPIClient._request_json``, which
attaches the bearer token when one is stored and reacts uniformly to
authentication failures: the token is evicted, the registered
session-invalid callbacks run, and ``SessionExpiredError`` is raised. The
client never navigates; whoever owns the session decides what to do.
"""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal
from typing import Any

import httpx

from invierte_ya_web import adapters
from invierte_ya_web.config import get_settings
from invierte_ya_web.domain.entities import (
    AuthToken,
    DepositReceipt,
    Fund,
    RegistrationForm,
    Subscription,
    SubscriptionReceipt,
    Transaction,
    User,
)
from invierte_ya_web.exceptions import (
    APIError,
    AuthenticationError,
    BusinessRuleError,
    SessionExpiredError,
    TransportError,
)
from invierte_ya_web.logging_config import get_logger
from invierte_ya_web.session.store import TokenStore

logger = get_logger(__name__)

SessionInvalidCallback = Callable[[], None]

GENERIC_ERROR = "Ocurrió un error inesperado. Inténtalo de nuevo."


def _error_message(response: httpx.Response) -> str:
    """Extract the server-provided message from an error body, if any."""
    try:
        payload = response.json()
    except ValueError:
        return ""
    if not isinstance(payload, dict):
        return ""
    for key in ("message", "error", "detail"):
        raw = payload.get(key)
        if isinstance(raw, str) and raw.strip():
            return raw
        # FastAPI validation errors: [{"loc": [...], "msg": "..."}]
        if isinstance(raw, list) and raw:
            first = raw[0]
            if isinstance(first, dict) and first.get("msg"):
                return str(first["msg"])
            return str(first)
    return ""


class InvierteYaAPIClient:
    def __init__(
        self,
        base_url: str | None = None,
        *,
        token_store: TokenStore,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> None:
        settings = get_settings()
        self._base_url = (base_url or settings.api_base_url).rstrip("/")
        self._token_store = token_store
        self._owns_client = client is None
        self._client = (
            client
            if client is not None
            else httpx.AsyncClient(
                base_url=self._base_url,
                timeout=timeout if timeout is not None else settings.api_timeout,
                headers={"Content-Type": "application/json"},
            )
        )
        self._session_invalid_callbacks: list[SessionInvalidCallback] = []

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def token_store(self) -> TokenStore:
        return self._token_store

    def on_session_invalid(
        self, callback: SessionInvalidCallback
    ) -> Callable[[], None]:
        """Register a callback for rejected tokens. Returns an unsubscribe function."""
        self._session_invalid_callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._session_invalid_callbacks:
                self._session_invalid_callbacks.remove(callback)

        return unsubscribe

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def _invalidate_session(self, method: str, path: str) -> None:
        self._token_store.clear()
        logger.warning("session_invalidated", method=method, path=path)
        for callback in list(self._session_invalid_callbacks):
            callback()

    async def _request_json(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        fallback: str = GENERIC_ERROR,
        credential_exchange: bool = False,
    ) -> Any:
        headers: dict[str, str] = {}
        token = self._token_store.get()
        if token and not credential_exchange:
            headers["Authorization"] = f"Bearer {token}"

        try:
            r = await self._client.request(method, path, json=json, headers=headers)
        except httpx.HTTPError as e:
            logger.error(
                "api_transport_failed", method=method, path=path, error=str(e)
            )
            raise TransportError(fallback, context={"path": path}) from e

        if 200 <= r.status_code < 300:
            if r.status_code == 204 or not r.content:
                return None
            try:
                return r.json()
            except ValueError as e:
                raise TransportError(fallback, context={"path": path}) from e

        message = _error_message(r)
        logger.warning(
            "api_request_failed",
            method=method,
            path=path,
            status_code=r.status_code,
            detail=message,
        )

        if credential_exchange and 400 <= r.status_code < 500:
            raise AuthenticationError(message or fallback)
        if r.status_code == 401:
            self._invalidate_session(method, path)
            raise SessionExpiredError()
        if 400 <= r.status_code < 500:
            raise BusinessRuleError(r.status_code, message or fallback)
        raise APIError(r.status_code, message or fallback)

    # -- authentication -----------------------------------------------------

    async def login(self, email: str, password: str) -> AuthToken:
        data = await self._request_json(
            "POST",
            "/auth/login",
            json={"email": email.strip(), "password": password},
            fallback="Credenciales inválidas. Inténtalo de nuevo.",
            credential_exchange=True,
        )
        token = adapters.parse_auth_token(data)
        self._token_store.set(token.access_token)
        return token

    async def register(self, form: RegistrationForm) -> AuthToken:
        data = await self._request_json(
            "POST",
            "/auth/register",
            json=form.to_payload(),
            fallback="Error al crear la cuenta. Inténtalo de nuevo.",
            credential_exchange=True,
        )
        token = adapters.parse_auth_token(data)
        self._token_store.set(token.access_token)
        return token

    def logout(self) -> None:
        self._token_store.clear()

    def is_authenticated(self) -> bool:
        return self._token_store.has_token()

    # -- user -----------------------------------------------------------------

    async def get_profile(self) -> User:
        data = await self._request_json(
            "GET",
            "/users/me",
            fallback="Error al obtener la información del usuario",
        )
        return adapters.parse_user(data)

    async def deposit(self, amount: Decimal) -> DepositReceipt:
        data = await self._request_json(
            "POST",
            "/users/me/deposit",
            json={"amount": int(amount)},
            fallback="Error al procesar el depósito. Inténtalo de nuevo.",
        )
        return adapters.parse_deposit_receipt(data)

    async def list_transactions(self) -> list[Transaction]:
        data = await self._request_json(
            "GET",
            "/users/me/transactions",
            fallback="Error al cargar las transacciones",
        )
        return adapters.parse_transactions(data)

    async def list_subscriptions(self) -> list[Subscription]:
        data = await self._request_json(
            "GET",
            "/users/me/subscriptions",
            fallback="Error al cargar las suscripciones",
        )
        return adapters.parse_subscriptions(data)

    # -- funds ----------------------------------------------------------------

    async def list_funds(self) -> list[Fund]:
        data = await self._request_json(
            "GET", "/funds", fallback="Error al cargar los fondos"
        )
        return adapters.parse_funds(data)

    async def subscribe(
        self, fund_id: str, amount: Decimal | None = None
    ) -> SubscriptionReceipt:
        payload: dict[str, Any] = {"fund_id": fund_id}
        if amount is not None:
            payload["amount"] = int(amount)
        data = await self._request_json(
            "POST",
            "/funds/subscribe",
            json=payload,
            fallback="Error al suscribirse al fondo",
        )
        return adapters.parse_subscription_receipt(data)

    async def cancel_subscription(self, subscription_id: str) -> str:
        data = await self._request_json(
            "DELETE",
            f"/funds/subscriptions/{subscription_id}",
            fallback="Error al cancelar la suscripción",
        )
        if isinstance(data, dict):
            return str(data.get("message") or "")
        return ""

    # -- service --------------------------------------------------------------

    async def health_check(self) -> dict[str, Any]:
        data = await self._request_json(
            "GET", "/health", fallback="El servicio no está disponible"
        )
        if not isinstance(data, dict):
            raise TransportError("El servicio no está disponible")
        return data

    async def api_info(self) -> dict[str, Any]:
        data = await self._request_json(
            "GET", "/info", fallback="El servicio no está disponible"
        )
        return data if isinstance(data, dict) else {}

    async def initialize_funds(self) -> tuple[str, list[Fund]]:
        data = await self._request_json(
            "POST", "/init-funds", fallback="Error al inicializar los fondos"
        )
        if not isinstance(data, dict):
            return "", []
        return str(data.get("message") or ""), adapters.parse_funds(
            data.get("funds_created")
        )
