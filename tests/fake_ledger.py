"""In-memory stand-in for the remote ledger service.

Mirrors the contract the web client relies on: bearer tokens, 401 on a
missing or revoked token, business-rule 400s carrying ``detail``, and the
envelope shapes the real service answers with.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Header, HTTPException, Request
from pydantic import BaseModel

INITIAL_BALANCE = 500_000
TEST_EMAIL = "ana@example.com"
TEST_PASSWORD = "secreto123"
MIN_DEPOSIT = 10_000
MAX_DEPOSIT = 10_000_000

DEFAULT_FUNDS: list[dict[str, Any]] = [
    {"fund_id": "1", "name": "FPV_BTG_PACTUAL_RECAUDADORA", "minimum_amount": 75000, "category": "FPV"},
    {"fund_id": "2", "name": "FPV_BTG_PACTUAL_ECOPETROL", "minimum_amount": 125000, "category": "FPV"},
    {"fund_id": "3", "name": "DEUDAPRIVADA", "minimum_amount": 50000, "category": "FIC"},
    {"fund_id": "4", "name": "FDO-ACCIONES", "minimum_amount": 250000, "category": "FIC"},
    {"fund_id": "5", "name": "FPV_BTG_PACTUAL_DINAMICA", "minimum_amount": 100000, "category": "FPV"},
]


class Credentials(BaseModel):
    email: str
    password: str


class Registration(BaseModel):
    email: str
    password: str
    phone: str
    notification_preference: str = "EMAIL"


class DepositRequest(BaseModel):
    amount: int


class SubscribeRequest(BaseModel):
    fund_id: str
    amount: int | None = None


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class FakeLedger:
    users: dict[str, dict[str, Any]] = field(default_factory=dict)
    tokens: dict[str, str] = field(default_factory=dict)
    funds: list[dict[str, Any]] = field(default_factory=list)
    subscriptions: dict[str, list[dict[str, Any]]] = field(default_factory=dict)
    transactions: dict[str, list[dict[str, Any]]] = field(default_factory=dict)
    requests: list[tuple[str, str]] = field(default_factory=list)
    # when set, GET /users/me answers with this status instead of the profile
    profile_status: int | None = None

    def add_user(
        self,
        email: str,
        password: str,
        *,
        balance: int = INITIAL_BALANCE,
        phone: str = "+573001234567",
        notification_preference: str = "EMAIL",
    ) -> dict[str, Any]:
        user = {
            "user_id": f"user-{len(self.users) + 1}",
            "email": email,
            "password": password,
            "phone": phone,
            "notification_preference": notification_preference,
            "balance": balance,
            "created_at": _now(),
        }
        self.users[email] = user
        self.subscriptions[email] = []
        self.transactions[email] = []
        return user

    def issue_token(self, email: str) -> str:
        token = secrets.token_hex(16)
        self.tokens[token] = email
        return token

    def revoke_all_tokens(self) -> None:
        self.tokens.clear()

    def calls_to(self, method: str, path: str) -> int:
        return sum(1 for m, p in self.requests if m == method and p == path)

    def record(self, email: str, kind: str, amount: int, fund_id: str | None = None) -> str:
        transaction_id = f"txn-{sum(len(t) for t in self.transactions.values()) + 1}"
        self.transactions[email].insert(
            0,
            {
                "transaction_id": transaction_id,
                "user_id": self.users[email]["user_id"],
                "fund_id": fund_id,
                "transaction_type": kind,
                "amount": amount,
                "timestamp": _now(),
                "status": "completed",
            },
        )
        return transaction_id


def _public_user(user: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in user.items() if k != "password"}


def create_fake_ledger(*, seed_funds: bool = True) -> FastAPI:
    app = FastAPI(title="Fake Invierte Ya ledger")
    ledger = FakeLedger(funds=[dict(f) for f in DEFAULT_FUNDS] if seed_funds else [])
    app.state.ledger = ledger

    @app.middleware("http")
    async def record_requests(request: Request, call_next: Any) -> Any:
        ledger.requests.append((request.method, request.url.path))
        return await call_next(request)

    def current_user(authorization: str | None) -> dict[str, Any]:
        if not authorization or not authorization.startswith("Bearer "):
            raise HTTPException(status_code=401, detail="Token requerido")
        email = ledger.tokens.get(authorization.removeprefix("Bearer "))
        if email is None:
            raise HTTPException(status_code=401, detail="Token inválido o expirado")
        return ledger.users[email]

    def find_fund(fund_id: str) -> dict[str, Any]:
        for fund in ledger.funds:
            if fund["fund_id"] == fund_id:
                return fund
        raise HTTPException(status_code=404, detail="Fondo no encontrado")

    @app.get("/health")
    async def health() -> dict[str, Any]:
        return {"status": "healthy", "timestamp": _now()}

    @app.get("/info")
    async def info() -> dict[str, Any]:
        return {"name": "Fake ledger", "version": "test"}

    @app.post("/init-funds")
    async def init_funds() -> dict[str, Any]:
        ledger.funds = [dict(f) for f in DEFAULT_FUNDS]
        return {"message": "Fondos inicializados", "funds_created": ledger.funds}

    @app.post("/auth/register")
    async def register(body: Registration) -> dict[str, Any]:
        if body.email in ledger.users:
            raise HTTPException(status_code=400, detail="El email ya está registrado")
        ledger.add_user(
            body.email,
            body.password,
            phone=body.phone,
            notification_preference=body.notification_preference,
        )
        return {"access_token": ledger.issue_token(body.email), "token_type": "bearer"}

    @app.post("/auth/login")
    async def login(body: Credentials) -> dict[str, Any]:
        user = ledger.users.get(body.email)
        if user is None or user["password"] != body.password:
            raise HTTPException(status_code=401, detail="Credenciales inválidas")
        return {"access_token": ledger.issue_token(body.email), "token_type": "bearer"}

    @app.get("/users/me")
    async def me(authorization: str | None = Header(default=None)) -> dict[str, Any]:
        if ledger.profile_status is not None:
            raise HTTPException(status_code=ledger.profile_status, detail="Servicio no disponible")
        return _public_user(current_user(authorization))

    @app.post("/users/me/deposit")
    async def deposit(
        body: DepositRequest, authorization: str | None = Header(default=None)
    ) -> dict[str, Any]:
        user = current_user(authorization)
        if body.amount < MIN_DEPOSIT or body.amount > MAX_DEPOSIT:
            raise HTTPException(status_code=400, detail="Monto de depósito inválido")
        previous = user["balance"]
        user["balance"] = previous + body.amount
        transaction_id = ledger.record(user["email"], "deposit", body.amount)
        return {
            "message": "Depósito realizado exitosamente",
            "transaction_id": transaction_id,
            "amount_deposited": body.amount,
            "previous_balance": previous,
            "new_balance": user["balance"],
            "timestamp": _now(),
        }

    @app.get("/users/me/transactions")
    async def transactions(
        authorization: str | None = Header(default=None),
    ) -> dict[str, Any]:
        user = current_user(authorization)
        return {"transactions": ledger.transactions[user["email"]]}

    @app.get("/users/me/subscriptions")
    async def subscriptions(
        authorization: str | None = Header(default=None),
    ) -> dict[str, Any]:
        user = current_user(authorization)
        active = ledger.subscriptions[user["email"]]
        return {
            "user_id": user["user_id"],
            "active_subscriptions": active,
            "count": len(active),
        }

    @app.get("/funds")
    async def funds() -> list[dict[str, Any]]:
        return ledger.funds

    @app.post("/funds/subscribe")
    async def subscribe(
        body: SubscribeRequest, authorization: str | None = Header(default=None)
    ) -> dict[str, Any]:
        user = current_user(authorization)
        fund = find_fund(body.fund_id)
        amount = body.amount if body.amount is not None else fund["minimum_amount"]
        if amount < fund["minimum_amount"]:
            raise HTTPException(
                status_code=400,
                detail=f"El monto mínimo para {fund['name']} es {fund['minimum_amount']}",
            )
        if amount > user["balance"]:
            raise HTTPException(
                status_code=400,
                detail=f"No tiene saldo disponible para vincularse al fondo {fund['name']}",
            )
        user["balance"] -= amount
        transaction_id = ledger.record(user["email"], "subscription", amount, fund["fund_id"])
        ledger.subscriptions[user["email"]].append(
            {
                "fund_id": fund["fund_id"],
                "fund_name": fund["name"],
                "invested_amount": amount,
                "subscription_date": _now(),
                "transaction_id": transaction_id,
                "fund_category": fund["category"],
            }
        )
        return {
            "message": f"Suscripción exitosa al fondo {fund['name']}",
            "transaction_id": transaction_id,
        }

    @app.delete("/funds/subscriptions/{subscription_id}")
    async def cancel(
        subscription_id: str, authorization: str | None = Header(default=None)
    ) -> dict[str, Any]:
        user = current_user(authorization)
        active = ledger.subscriptions[user["email"]]
        for sub in active:
            if sub["transaction_id"] == subscription_id:
                active.remove(sub)
                user["balance"] += sub["invested_amount"]
                ledger.record(
                    user["email"], "cancellation", sub["invested_amount"], sub["fund_id"]
                )
                return {"message": f"Suscripción al fondo {sub['fund_name']} cancelada"}
        raise HTTPException(status_code=404, detail="Suscripción no encontrada")

    return app
