from __future__ import annotations

from decimal import Decimal

import httpx
import pytest
from fake_ledger import TEST_EMAIL, TEST_PASSWORD

from invierte_ya_web.api_client import InvierteYaAPIClient
from invierte_ya_web.domain.entities import RegistrationForm
from invierte_ya_web.domain.value_objects import (
    FundCategory,
    NotificationPreference,
    TransactionKind,
)
from invierte_ya_web.exceptions import (
    APIError,
    AuthenticationError,
    BusinessRuleError,
    SessionExpiredError,
    TransportError,
)
from invierte_ya_web.session.store import MemoryTokenStore


class TestAuthentication:
    async def test_login_stores_token(self, api_client, registered_user, token_store) -> None:
        token = await api_client.login(TEST_EMAIL, TEST_PASSWORD)

        assert token.token_type == "bearer"
        assert token_store.get() == token.access_token
        assert api_client.is_authenticated()

    async def test_login_trims_email(self, api_client, registered_user) -> None:
        await api_client.login(f"  {TEST_EMAIL} ", TEST_PASSWORD)

        assert api_client.is_authenticated()

    async def test_invalid_credentials_raise_without_teardown(
        self, api_client, registered_user, token_store
    ) -> None:
        fired: list[bool] = []
        api_client.on_session_invalid(lambda: fired.append(True))

        with pytest.raises(AuthenticationError) as exc:
            await api_client.login(TEST_EMAIL, "wrong")

        assert not isinstance(exc.value, SessionExpiredError)
        assert exc.value.message == "Credenciales inválidas"
        assert token_store.get() is None
        assert fired == []

    async def test_register_sends_normalized_phone(self, api_client, ledger) -> None:
        form = RegistrationForm(
            email="nuevo@example.com",
            password="secreto",
            phone="+57 300 123 4567",
            notification_preference=NotificationPreference.SMS,
        )

        await api_client.register(form)

        user = ledger.users["nuevo@example.com"]
        assert user["phone"] == "+573001234567"
        assert user["notification_preference"] == "SMS"
        assert api_client.is_authenticated()

    async def test_register_duplicate_email(self, api_client, registered_user) -> None:
        form = RegistrationForm(email=TEST_EMAIL, password="secreto", phone="+573001112233")

        with pytest.raises(AuthenticationError) as exc:
            await api_client.register(form)

        assert exc.value.message == "El email ya está registrado"

    async def test_logout_clears_token(self, api_client, registered_user) -> None:
        await api_client.login(TEST_EMAIL, TEST_PASSWORD)

        api_client.logout()

        assert not api_client.is_authenticated()


class TestProtectedCalls:
    async def test_profile_uses_bearer_token(self, api_client, registered_user) -> None:
        await api_client.login(TEST_EMAIL, TEST_PASSWORD)

        user = await api_client.get_profile()

        assert user.email == TEST_EMAIL
        assert user.balance == Decimal("100000")

    async def test_missing_token_is_session_expiry(self, api_client, token_store) -> None:
        fired: list[bool] = []
        api_client.on_session_invalid(lambda: fired.append(True))

        with pytest.raises(SessionExpiredError):
            await api_client.get_profile()

        assert fired == [True]

    async def test_revoked_token_evicts_and_notifies(
        self, api_client, registered_user, ledger, token_store
    ) -> None:
        await api_client.login(TEST_EMAIL, TEST_PASSWORD)
        ledger.revoke_all_tokens()
        fired: list[bool] = []
        api_client.on_session_invalid(lambda: fired.append(True))

        with pytest.raises(SessionExpiredError):
            await api_client.list_transactions()

        assert token_store.get() is None
        assert fired == [True]

    async def test_unsubscribe_stops_notifications(self, api_client) -> None:
        fired: list[bool] = []
        unsubscribe = api_client.on_session_invalid(lambda: fired.append(True))
        unsubscribe()

        with pytest.raises(SessionExpiredError):
            await api_client.get_profile()

        assert fired == []

    async def test_deposit_returns_receipt(self, api_client, registered_user) -> None:
        await api_client.login(TEST_EMAIL, TEST_PASSWORD)

        receipt = await api_client.deposit(Decimal("50000"))

        assert receipt.amount_deposited == Decimal("50000")
        assert receipt.previous_balance == Decimal("100000")
        assert receipt.new_balance == Decimal("150000")

    async def test_business_rule_rejection_keeps_session(
        self, api_client, registered_user, token_store
    ) -> None:
        await api_client.login(TEST_EMAIL, TEST_PASSWORD)

        with pytest.raises(BusinessRuleError) as exc:
            await api_client.subscribe("4", Decimal("250000"))

        assert exc.value.status_code == 400
        assert "saldo" in exc.value.message
        assert token_store.get() is not None

    async def test_transactions_envelope_is_unwrapped(self, api_client, registered_user) -> None:
        await api_client.login(TEST_EMAIL, TEST_PASSWORD)
        await api_client.deposit(Decimal("20000"))

        transactions = await api_client.list_transactions()

        assert len(transactions) == 1
        assert transactions[0].kind is TransactionKind.DEPOSIT

    async def test_subscribe_and_cancel(self, api_client, registered_user) -> None:
        await api_client.login(TEST_EMAIL, TEST_PASSWORD)

        receipt = await api_client.subscribe("3")
        subscriptions = await api_client.list_subscriptions()

        assert len(subscriptions) == 1
        sub = subscriptions[0]
        assert sub.subscription_id == receipt.transaction_id
        assert sub.amount == Decimal("50000")
        assert sub.fund_category is FundCategory.FIC
        assert sub.is_active

        message = await api_client.cancel_subscription(sub.subscription_id)

        assert "cancelada" in message
        assert await api_client.list_subscriptions() == []

    async def test_cancel_unknown_subscription(self, api_client, registered_user) -> None:
        await api_client.login(TEST_EMAIL, TEST_PASSWORD)

        with pytest.raises(BusinessRuleError) as exc:
            await api_client.cancel_subscription("missing")

        assert exc.value.status_code == 404


class TestPublicEndpoints:
    async def test_list_funds(self, api_client) -> None:
        funds = await api_client.list_funds()

        assert [f.fund_id for f in funds] == ["1", "2", "3", "4", "5"]
        assert funds[0].minimum_amount == Decimal("75000")
        assert funds[0].category is FundCategory.FPV

    async def test_health_check(self, api_client) -> None:
        status = await api_client.health_check()

        assert status["status"] == "healthy"

    async def test_api_info(self, api_client) -> None:
        info = await api_client.api_info()

        assert info["name"] == "Fake ledger"

    async def test_initialize_funds(self, api_client, ledger) -> None:
        ledger.funds = []

        message, funds = await api_client.initialize_funds()

        assert message == "Fondos inicializados"
        assert len(funds) == 5


class TestTransportFailures:
    async def test_network_error_becomes_transport_error(self) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with httpx.AsyncClient(
            transport=httpx.MockTransport(refuse), base_url="http://test"
        ) as c:
            api = InvierteYaAPIClient(
                "http://test", token_store=MemoryTokenStore(), client=c
            )
            with pytest.raises(TransportError):
                await api.list_funds()

    async def test_server_error_message_is_surfaced(self) -> None:
        def boom(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"message": "Fallo interno"})

        async with httpx.AsyncClient(
            transport=httpx.MockTransport(boom), base_url="http://test"
        ) as c:
            api = InvierteYaAPIClient(
                "http://test", token_store=MemoryTokenStore("t"), client=c
            )
            with pytest.raises(APIError) as exc:
                await api.list_funds()

        assert exc.value.status_code == 500
        assert exc.value.message == "Fallo interno"

    async def test_empty_body_yields_empty_list(self) -> None:
        def empty(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"")

        async with httpx.AsyncClient(
            transport=httpx.MockTransport(empty), base_url="http://test"
        ) as c:
            api = InvierteYaAPIClient(
                "http://test", token_store=MemoryTokenStore("t"), client=c
            )
            assert await api.list_funds() == []
