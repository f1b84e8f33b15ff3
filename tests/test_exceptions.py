from __future__ import annotations

from decimal import Decimal

from invierte_ya_web.exceptions import (
    APIError,
    AuthenticationError,
    BelowMinimumError,
    BusinessRuleError,
    InsufficientBalanceError,
    InvierteYaError,
    SessionExpiredError,
    ValidationError,
)


class TestHierarchy:
    def test_session_expiry_is_authentication(self) -> None:
        assert issubclass(SessionExpiredError, AuthenticationError)
        assert issubclass(AuthenticationError, InvierteYaError)

    def test_business_rule_is_api_error(self) -> None:
        error = BusinessRuleError(400, "Saldo insuficiente")

        assert isinstance(error, APIError)
        assert error.status_code == 400
        assert error.detail == "Saldo insuficiente"
        assert str(error) == "APIError(400): Saldo insuficiente"

    def test_client_side_errors_are_validation(self) -> None:
        assert issubclass(BelowMinimumError, ValidationError)
        assert issubclass(InsufficientBalanceError, ValidationError)


class TestMessages:
    def test_below_minimum_formats_amount(self) -> None:
        error = BelowMinimumError("FDO-ACCIONES", Decimal("100000"), Decimal("250000"))

        assert error.message == "El monto mínimo para FDO-ACCIONES es $250.000 COP"
        assert error.error_code == "BELOW_FUND_MINIMUM"

    def test_to_dict(self) -> None:
        error = InsufficientBalanceError(Decimal("75000"), Decimal("1000"))

        assert error.to_dict() == {
            "error": "INSUFFICIENT_BALANCE",
            "message": "No tienes suficiente saldo para esta inversión",
            "context": {"required": "75000", "available": "1000"},
        }

    def test_default_session_expiry_message(self) -> None:
        assert "expirado" in SessionExpiredError().message
