from __future__ import annotations

import pytest


class TestComponents:
    def test_can_import_components_when_installed(self) -> None:
        pytest.importorskip("nicegui")

        from invierte_ya_web.ui.components import feedback, forms, modals, nav, tables

        assert feedback is not None
        assert forms is not None
        assert modals is not None
        assert nav is not None
        assert tables is not None

    def test_transaction_rows(self) -> None:
        pytest.importorskip("nicegui")
        from decimal import Decimal

        from invierte_ya_web.domain.entities import Transaction
        from invierte_ya_web.domain.value_objects import TransactionKind
        from invierte_ya_web.ui.components.tables import TRANSACTION_COLUMNS, transaction_rows

        rows = transaction_rows(
            [
                Transaction("t1", TransactionKind.DEPOSIT, Decimal("50000"), "Depósito de dinero"),
                Transaction("t2", TransactionKind.SUBSCRIPTION, Decimal("75000"), "Inversión en fondo 1"),
            ]
        )

        assert [r["amount"] for r in rows] == ["+$50.000 COP", "-$75.000 COP"]
        assert {c["field"] for c in TRANSACTION_COLUMNS} <= set(rows[0])
