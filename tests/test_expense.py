"""Tests for expenses and money helpers."""

import pytest
from datetime import datetime
from decimal import Decimal

from tally_cli.expense import ExpenseKind, ExpenseLedger, Payable, Receivable
from tally_cli.utils.money import format_money, is_money, money_to_value


class TestMoney:

    @pytest.mark.parametrize("token", ["$30", "$30.00", "$0", "$1234.56"])
    def test_valid_tokens(self, token):
        assert is_money(token)

    @pytest.mark.parametrize("token", ["30", "$", "$30.5", "$30.000", "$-5", "$3,000", "£30"])
    def test_invalid_tokens(self, token):
        assert not is_money(token)

    def test_value_has_two_decimals(self):
        assert money_to_value("$30") == Decimal("30.00")
        assert str(money_to_value("$30")) == "30.00"

    def test_value_rejects_non_money(self):
        with pytest.raises(ValueError):
            money_to_value("30")

    def test_format(self):
        assert format_money(Decimal("30")) == "$30.00"
        assert format_money(Decimal("-4.5")) == "-$4.50"


class TestExpense:

    def test_payable(self):
        expense = Payable("lunch", Decimal("30"), datetime(2020, 1, 1))

        assert expense.kind == ExpenseKind.PAYABLE
        assert expense.value == Decimal("30.00")
        assert expense.signed_value == Decimal("-30.00")
        assert str(expense) == "[P] lunch $30.00 (on: 01 Jan 2020)"

    def test_receivable(self):
        expense = Receivable("refund", Decimal("12.50"), datetime(2020, 2, 15))

        assert expense.signed_value == Decimal("12.50")
        assert str(expense).startswith("[R] refund $12.50")

    def test_negative_value_rejected(self):
        with pytest.raises(ValueError):
            Payable("lunch", Decimal("-1"), datetime(2020, 1, 1))

    def test_expenses_are_frozen(self):
        expense = Payable("lunch", Decimal("30"), datetime(2020, 1, 1))

        with pytest.raises(AttributeError):
            expense.value = Decimal("1")


class TestExpenseLedger:

    def test_empty_balance(self):
        assert ExpenseLedger().balance() == Decimal("0.00")

    def test_balance(self):
        ledger = ExpenseLedger()
        ledger.add(Receivable("salary", Decimal("100"), datetime(2020, 1, 1)))
        ledger.add(Payable("lunch", Decimal("30"), datetime(2020, 1, 2)))

        assert ledger.balance() == Decimal("70.00")
        assert len(ledger) == 2
