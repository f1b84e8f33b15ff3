"""Exception hierarchy for the Invierte Ya web client.

All client exceptions inherit from InvierteYaError so a screen can catch
every failure of an action with a single clause while still telling the
kinds apart: validation problems never reach the network, authentication
problems end the session, API and transport problems are shown with a
retry affordance.
"""

from decimal import Decimal
from typing import Any

from invierte_ya_web.formatting import format_cop


class InvierteYaError(Exception):
    """Base exception for all Invierte Ya client errors.

    Carries a user-facing message, a stable error_code and extra context
    for structured logging.
    """

    error_code: str = "IYW_ERROR"
    status_code: int = 500

    def __init__(
        self,
        message: str,
        *,
        error_code: str | None = None,
        status_code: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code
        if status_code:
            self.status_code = status_code
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for logging."""
        return {
            "error": self.error_code,
            "message": self.message,
            "context": self.context,
        }


# =============================================================================
# Validation Errors (client-side, never sent)
# =============================================================================


class ValidationError(InvierteYaError):
    """Base exception for client-side validation errors."""

    error_code = "VALIDATION_ERROR"
    status_code = 422


class InvalidAmountError(ValidationError):
    """Raised when a monetary amount falls outside the accepted band."""

    error_code = "INVALID_AMOUNT"

    def __init__(self, amount: Decimal | str, message: str) -> None:
        super().__init__(message, context={"amount": str(amount)})


class BelowMinimumError(ValidationError):
    """Raised when a subscription amount is below the fund minimum."""

    error_code = "BELOW_FUND_MINIMUM"

    def __init__(self, fund_name: str, amount: Decimal, minimum: Decimal) -> None:
        super().__init__(
            f"El monto mínimo para {fund_name} es ${format_cop(minimum)} COP",
            context={
                "fund_name": fund_name,
                "amount": str(amount),
                "minimum": str(minimum),
            },
        )


class InsufficientBalanceError(ValidationError):
    """Raised when an amount exceeds the last server-reported balance."""

    error_code = "INSUFFICIENT_BALANCE"

    def __init__(self, amount: Decimal, available: Decimal) -> None:
        super().__init__(
            "No tienes suficiente saldo para esta inversión",
            context={"required": str(amount), "available": str(available)},
        )


# =============================================================================
# Authentication Errors
# =============================================================================


class AuthenticationError(InvierteYaError):
    """Raised when credentials are rejected or no session exists."""

    error_code = "AUTHENTICATION_ERROR"
    status_code = 401

    def __init__(self, message: str = "Autenticación requerida") -> None:
        super().__init__(message)


class SessionExpiredError(AuthenticationError):
    """Raised when the server rejects the stored token on a protected call.

    By the time this is raised the token has already been evicted and the
    session-invalid listeners have been notified.
    """

    error_code = "SESSION_EXPIRED"

    def __init__(
        self, message: str = "Tu sesión ha expirado. Inicia sesión nuevamente."
    ) -> None:
        super().__init__(message)


# =============================================================================
# Remote API Errors
# =============================================================================


class APIError(InvierteYaError):
    """Raised when the remote service answers with a non-success status."""

    error_code = "API_ERROR"

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(
            message, status_code=status_code, context={"status_code": status_code}
        )

    @property
    def detail(self) -> str:
        return self.message

    def __str__(self) -> str:
        return f"APIError({self.status_code}): {self.message}"


class BusinessRuleError(APIError):
    """Raised when the server rejects an operation (4xx other than 401)."""

    error_code = "BUSINESS_RULE_ERROR"


class TransportError(InvierteYaError):
    """Raised on network failures or unreadable response bodies."""

    error_code = "TRANSPORT_ERROR"
    status_code = 503
