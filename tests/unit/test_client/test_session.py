#!/usr/bin/env python3
"""
Unit tests for the actualpy-backed BudgetSession.

The actualpy query functions are patched where the session module imports
them, and ORM rows are stood in for by SimpleNamespace objects.
"""

from datetime import date
from decimal import Decimal
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from actual.budgets import BudgetCategory as ActualBudgetCategory
from actual.budgets import BudgetCategoryGroup as ActualBudgetCategoryGroup
from actual.budgets import BudgetList, EnvelopeBudget, IncomeCategory, IncomeCategoryGroup, TrackingBudget
from actual.exceptions import ActualError

from actual_cli.client.models import Account, NewTransaction, Transaction
from actual_cli.client.session import ActualBudgetSession, open_session
from actual_cli.core.config import Settings
from actual_cli.core.errors import ExternalServiceError, ValidationError

MODULE = "actual_cli.client.session"


def account_row(id, name, offbudget=0, closed=0, balance=Decimal("0")):
    return SimpleNamespace(id=id, name=name, offbudget=offbudget, closed=closed, balance=balance)


def category_row(id, name, cat_group, is_income=0):
    return SimpleNamespace(id=id, name=name, cat_group=cat_group, is_income=is_income)


def transaction_row(id, when, amount, category_id=None, payee_id=None):
    return SimpleNamespace(
        id=id,
        get_date=lambda: when,
        get_amount=lambda: Decimal(amount),
        payee_id=payee_id,
        category_id=category_id,
        notes=None,
        cleared=1,
        financial_id=None,
    )


ACCOUNTS = [
    account_row("a1", "Checking", balance=Decimal("1234.56")),
    account_row("a2", "Card", offbudget=1, closed=1),
]
CATEGORIES = [
    category_row("c1", "Rent", "g1"),
    category_row("c2", "Power", "g1"),
    category_row("c3", "Salary", "g2", is_income=1),
]
GROUPS = [SimpleNamespace(id="g1", name="Bills", is_income=0), SimpleNamespace(id="g2", name="Income", is_income=1)]
PAYEES = [SimpleNamespace(id="p1", name="Landlord", category=None, transfer_acct=None)]


@pytest.fixture
def actual():
    """Stand-in for an entered actualpy Actual instance."""
    return MagicMock()


@pytest.fixture
def session(actual):
    with patch(f"{MODULE}.get_accounts", return_value=ACCOUNTS), patch(
        f"{MODULE}.get_categories", return_value=CATEGORIES
    ), patch(f"{MODULE}.get_category_groups", return_value=GROUPS), patch(
        f"{MODULE}.get_payees", return_value=PAYEES
    ):
        yield ActualBudgetSession(actual)


class TestLookupsAndReads:
    def test_lookup_id_exact_name(self, session):
        assert session.lookup_id("accounts", "Checking") == "a1"
        assert session.lookup_id("accounts", "checking") is None
        assert session.lookup_id("categories", "Power") == "c2"
        assert session.lookup_id("payees", "Landlord") == "p1"

    def test_lookup_id_rejects_unknown_entity(self, session):
        with pytest.raises(ValueError, match="Unknown entity type"):
            session.lookup_id("budgets", "x")

    def test_get_accounts_converts_rows(self, session):
        assert session.get_accounts() == [
            Account(id="a1", name="Checking", offbudget=False, closed=False),
            Account(id="a2", name="Card", offbudget=True, closed=True),
        ]

    def test_get_account_balance_in_cents(self, session):
        assert session.get_account_balance("a1") == 123456

    def test_get_categories_keeps_group(self, session):
        assert [(c.id, c.group_id, c.is_income) for c in session.get_categories()] == [
            ("c1", "g1", False),
            ("c2", "g1", False),
            ("c3", "g2", True),
        ]

    def test_get_transactions_end_date_is_inclusive(self, session):
        rows = [transaction_row("t1", date(2024, 1, 31), "-9.99", category_id="c1", payee_id="p1")]
        with patch(f"{MODULE}.get_transactions", return_value=rows) as query:
            result = session.get_transactions("a1", date(2024, 1, 1), date(2024, 1, 31))

        kwargs = query.call_args.kwargs
        assert kwargs["start_date"] == date(2024, 1, 1)
        assert kwargs["end_date"] == date(2024, 2, 1)
        assert kwargs["account"] is ACCOUNTS[0]
        assert result == [
            Transaction(id="t1", date=date(2024, 1, 31), amount=-999, payee="p1", category="c1", cleared=True)
        ]

    def test_unknown_account_id(self, session):
        with pytest.raises(ExternalServiceError, match="Account id not found"):
            session.get_account_balance("zzz")

    def test_account_rows_are_read_once_for_balances(self, session):
        with patch(f"{MODULE}.get_accounts", return_value=ACCOUNTS) as query:
            accounts = session.get_accounts()
            balances = [session.get_account_balance(account.id) for account in accounts]

        assert balances == [123456, 0]
        assert query.call_count == 1


def budget_category(id, budgeted, spent, accumulated, carryover=0):
    budget = SimpleNamespace(get_amount=lambda: Decimal(budgeted), carryover=carryover) if budgeted else None
    return ActualBudgetCategory(
        SimpleNamespace(id=id, name=id),
        Decimal(spent),
        Decimal(accumulated),
        budget,
    )


def envelope_month(month, food, received, for_next_month="0", last_month_overspent="0", from_last_month="0"):
    """One envelope month with a Food category in Bills and a Salary category in Income."""
    return EnvelopeBudget(
        month,
        [ActualBudgetCategoryGroup(SimpleNamespace(id="g1", name="Bills"), [food])],
        [
            IncomeCategoryGroup(
                SimpleNamespace(id="g2", name="Income"),
                [IncomeCategory(SimpleNamespace(id="c3", name="Salary"), Decimal(received))],
            )
        ],
        Decimal(for_next_month),
        Decimal(last_month_overspent),
        Decimal(from_last_month),
    )


class TestBudgetMonth:
    def test_leftover_from_previous_month_carries_forward(self, session):
        # January: 100 budgeted, 30 spent. February: 50 budgeted, nothing spent.
        january = envelope_month(date(2024, 1, 1), budget_category("c1", "100", "-30", "70"), received="1000")
        february = envelope_month(
            date(2024, 2, 1),
            budget_category("c1", "50", "0", "120", carryover=1),
            received="200",
            for_next_month="25",
            from_last_month="900",
        )
        history = BudgetList([january, february])

        with patch(f"{MODULE}.get_budget_history", return_value=history) as budget_history:
            month = session.get_budget_month(date(2024, 2, 1))

        assert budget_history.call_args.args[1] == date(2024, 2, 1)
        assert month.month == "2024-02"

        bills, income = month.category_groups
        food = bills.categories[0]
        assert (food.id, food.budgeted, food.spent, food.balance, food.carryover) == ("c1", 5000, 0, 12000, True)
        assert (bills.id, bills.budgeted, bills.spent, bills.balance) == ("g1", 5000, 0, 12000)
        assert (income.id, income.spent, income.categories[0].spent) == ("g2", 20000, 20000)

    def test_envelope_summary_figures(self, session):
        february = envelope_month(
            date(2024, 2, 1),
            budget_category("c1", "50", "-80", "-30"),
            received="200",
            for_next_month="25",
            last_month_overspent="-10",
            from_last_month="900",
        )

        with patch(f"{MODULE}.get_budget_history", return_value=BudgetList([february])):
            month = session.get_budget_month(date(2024, 2, 1))

        assert month.income_available == 110000
        assert month.last_month_overspent == -1000
        assert month.for_next_month == 2500
        assert month.total_budgeted == 5000
        # 1100 available - 50 budgeted - 25 held - 10 overspent
        assert month.to_budget == 101500

    def test_tracking_budget_has_no_envelope_figures(self, session):
        march = TrackingBudget(
            date(2024, 3, 1),
            [
                ActualBudgetCategoryGroup(
                    SimpleNamespace(id="g1", name="Bills"), [budget_category("c1", "40", "-15", "25")]
                )
            ],
            [],
        )

        with patch(f"{MODULE}.get_budget_history", return_value=BudgetList([march], is_tracking_budget=True)):
            month = session.get_budget_month(date(2024, 3, 1))

        assert (month.income_available, month.last_month_overspent, month.for_next_month, month.to_budget) == (
            0,
            0,
            0,
            0,
        )
        assert month.total_budgeted == 4000
        assert month.category_groups[0].categories[0].balance == 2500

    def test_month_without_budget_data(self, session):
        with patch(f"{MODULE}.get_budget_history", return_value=BudgetList([])):
            with pytest.raises(ValidationError, match="No budget data for month: 1999-12"):
                session.get_budget_month(date(1999, 12, 1))


class TestMutations:
    def test_add_transactions(self, session):
        created = SimpleNamespace(id="new-1")
        with patch(f"{MODULE}.create_transaction_from_ids", return_value=created) as create:
            ids = session.add_transactions(
                "a1",
                [NewTransaction(date=date(2024, 1, 2), amount=-1250, payee="p1", category="c1", notes="n")],
            )

        assert ids == ["new-1"]
        args, kwargs = create.call_args
        assert args[1:5] == (date(2024, 1, 2), "a1", "p1", "n")
        assert kwargs["category_id"] == "c1"
        assert kwargs["amount"] == Decimal("-12.50")
        assert kwargs["imported_payee"] is None

    def test_add_transaction_without_payee(self, session):
        with patch(f"{MODULE}.create_transaction_from_ids", return_value=SimpleNamespace(id="x")) as create:
            session.add_transactions("a1", [NewTransaction(date=date(2024, 1, 2), amount=5)])

        args, kwargs = create.call_args
        assert args[3] is None
        assert kwargs["imported_payee"] is None

    def test_unknown_payee_is_only_the_imported_payee(self, session):
        with patch(f"{MODULE}.create_transaction_from_ids", return_value=SimpleNamespace(id="x")) as create:
            session.add_transactions("a1", [NewTransaction(date=date(2024, 1, 2), amount=5, imported_payee="Cafe")])

        args, kwargs = create.call_args
        assert args[3] is None
        assert kwargs["imported_payee"] == "Cafe"
        assert kwargs["category_id"] is None

    def test_import_classifies_added_updated_and_errors(self, session):
        existing = MagicMock(id="old-1")
        transactions = [
            NewTransaction(date=date(2024, 1, 5), amount=100, notes="rent", imported_id="bank-1"),
            NewTransaction(date=date(2024, 1, 6), amount=200),
            NewTransaction(date=date(2024, 1, 7), amount=300, imported_payee="Cafe"),
        ]

        with patch(
            f"{MODULE}.match_transaction", side_effect=[existing, ActualError("cannot match split"), None]
        ) as match, patch(f"{MODULE}.create_transaction_from_ids", return_value=SimpleNamespace(id="new-9")) as create:
            result = session.import_transactions("a1", transactions)

        assert result.added == ["new-9"]
        assert result.updated == ["old-1"]
        assert result.errors == [{"row": 2, "message": "cannot match split"}]
        assert match.call_count == 3
        assert [row.id for row in match.call_args.kwargs["already_matched"]] == ["old-1", "new-9"]

        assert existing.notes == "rent"
        assert existing.financial_id == "bank-1"
        existing.set_date.assert_called_once_with(date(2024, 1, 5))

        args, kwargs = create.call_args
        assert args[3] is None
        assert kwargs["imported_payee"] == "Cafe"
        assert kwargs["amount"] == Decimal("3.00")

    def test_import_row_without_payee(self, session):
        with patch(f"{MODULE}.match_transaction", return_value=None) as match, patch(
            f"{MODULE}.create_transaction_from_ids", return_value=SimpleNamespace(id="new-1")
        ) as create:
            session.import_transactions("a1", [NewTransaction(date=date(2024, 1, 5), amount=-400)])

        assert match.call_args.kwargs["payee"] is None
        args, kwargs = create.call_args
        assert args[3] is None
        assert kwargs["imported_payee"] is None

    def test_sync_commits(self, session, actual):
        session.sync()

        actual.commit.assert_called_once_with()


class TestOpenSession:
    def settings(self, data_dir: Path) -> Settings:
        return Settings(
            server_url="http://localhost:5006",
            password="pw",
            sync_id="budget-1",
            data_dir=data_dir,
            encryption_password="enc",
        )

    def test_downloads_and_closes(self, temp_dir):
        data_dir = temp_dir / "nested" / "data"
        with patch(f"{MODULE}.Actual") as actual_cls:
            actual_cls.return_value.__exit__.return_value = False
            with open_session(self.settings(data_dir)) as session:
                assert isinstance(session, ActualBudgetSession)
                actual_cls.return_value.__exit__.assert_not_called()

        assert data_dir.is_dir()
        actual_cls.assert_called_once_with(
            base_url="http://localhost:5006",
            password="pw",
            file="budget-1",
            encryption_password="enc",
            data_dir=str(data_dir),
        )
        actual_cls.return_value.__exit__.assert_called_once()

    def test_closes_when_command_fails(self, temp_dir):
        with patch(f"{MODULE}.Actual") as actual_cls:
            actual_cls.return_value.__exit__.return_value = False
            with pytest.raises(RuntimeError):
                with open_session(self.settings(temp_dir)):
                    raise RuntimeError("boom")

        actual_cls.return_value.__exit__.assert_called_once()

    def test_client_errors_become_external_service_errors(self, temp_dir):
        with patch(f"{MODULE}.Actual", side_effect=ActualError("Authentication failed")):
            with pytest.raises(ExternalServiceError, match="Authentication failed"):
                with open_session(self.settings(temp_dir)):
                    pass
