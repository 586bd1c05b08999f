#!/usr/bin/env python3
"""
Budget Domain Models

Plain, immutable views of the rows and budget summaries the Actual Budget
client returns. Amounts are integer cents. The ``from_actual`` constructors
read the attributes of actualpy's models, so command handlers never touch
ORM objects directly.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any

from actual.budgets import EnvelopeBudget

from ..core.currency import amount_to_integer


@dataclass(frozen=True)
class Account:
    """An account in the budget file."""

    id: str
    name: str
    offbudget: bool
    closed: bool

    @classmethod
    def from_actual(cls, row: Any) -> "Account":
        return cls(
            id=row.id,
            name=row.name,
            offbudget=bool(row.offbudget),
            closed=bool(row.closed),
        )


@dataclass(frozen=True)
class CategoryGroup:
    """A named collection of categories."""

    id: str
    name: str
    is_income: bool = False

    @classmethod
    def from_actual(cls, row: Any) -> "CategoryGroup":
        return cls(id=row.id, name=row.name, is_income=bool(row.is_income))


@dataclass(frozen=True)
class Category:
    """A budget category belonging to one group."""

    id: str
    name: str
    group_id: str | None
    is_income: bool = False

    @classmethod
    def from_actual(cls, row: Any) -> "Category":
        return cls(
            id=row.id,
            name=row.name,
            group_id=row.cat_group,
            is_income=bool(row.is_income),
        )


@dataclass(frozen=True)
class Payee:
    """
    A payee.

    Transfer payees stand in for another account and carry its id in
    ``transfer_acct``.
    """

    id: str
    name: str
    category: str | None = None
    transfer_acct: str | None = None

    @classmethod
    def from_actual(cls, row: Any) -> "Payee":
        return cls(
            id=row.id,
            name=row.name,
            category=row.category,
            transfer_acct=row.transfer_acct,
        )


@dataclass(frozen=True)
class Transaction:
    """A stored transaction; payee and category are ids."""

    id: str
    date: date
    amount: int
    payee: str | None = None
    category: str | None = None
    notes: str | None = None
    cleared: bool = False
    imported_id: str | None = None

    @classmethod
    def from_actual(cls, row: Any) -> "Transaction":
        return cls(
            id=row.id,
            date=row.get_date(),
            amount=amount_to_integer(row.get_amount()),
            payee=row.payee_id,
            category=row.category_id,
            notes=row.notes,
            cleared=bool(row.cleared),
            imported_id=row.financial_id,
        )


@dataclass(frozen=True)
class NewTransaction:
    """
    A transaction to be added or imported.

    Exactly one of ``payee`` (an existing payee id) or ``imported_payee``
    (a raw payee name) is normally set.
    """

    date: date
    amount: int
    payee: str | None = None
    imported_payee: str | None = None
    category: str | None = None
    notes: str | None = None
    imported_id: str | None = None


@dataclass(frozen=True)
class ImportResult:
    """Outcome of an import: ids added, ids matched to existing rows, row errors."""

    added: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)
    errors: list[dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class BudgetCategory:
    """
    One category's figures for a budget month.

    ``balance`` is the running balance shown in Actual, including whatever
    carried over from earlier months.
    """

    id: str
    budgeted: int
    spent: int
    balance: int
    carryover: bool = False

    @classmethod
    def from_actual(cls, category: Any) -> "BudgetCategory":
        return cls(
            id=category.id,
            budgeted=amount_to_integer(category.budgeted),
            spent=amount_to_integer(category.spent),
            balance=amount_to_integer(category.accumulated_balance),
            carryover=category.carryover,
        )

    @classmethod
    def from_income(cls, category: Any) -> "BudgetCategory":
        received = amount_to_integer(category.received)
        return cls(
            id=category.id,
            budgeted=amount_to_integer(category.budgeted),
            spent=received,
            balance=received,
        )


@dataclass(frozen=True)
class BudgetCategoryGroup:
    """A category group's figures for a budget month."""

    id: str
    budgeted: int
    spent: int
    balance: int
    categories: list[BudgetCategory] = field(default_factory=list)

    @classmethod
    def from_actual(cls, group: Any) -> "BudgetCategoryGroup":
        return cls(
            id=group.id,
            budgeted=amount_to_integer(group.budgeted),
            spent=amount_to_integer(group.spent),
            balance=amount_to_integer(group.accumulated_balance),
            categories=[BudgetCategory.from_actual(c) for c in group.categories],
        )

    @classmethod
    def from_income(cls, group: Any) -> "BudgetCategoryGroup":
        # Income groups report money received in place of spending
        received = amount_to_integer(group.received)
        return cls(
            id=group.id,
            budgeted=amount_to_integer(group.budgeted),
            spent=received,
            balance=received,
            categories=[BudgetCategory.from_income(c) for c in group.categories],
        )


@dataclass(frozen=True)
class BudgetMonth:
    """
    Summary of one budget month, expense groups first, then income groups.

    Tracking budgets have no envelope figures, so ``last_month_overspent``,
    ``for_next_month`` and ``to_budget`` are zero for them and
    ``income_available`` is the month's income.
    """

    month: str
    income_available: int
    last_month_overspent: int
    for_next_month: int
    total_budgeted: int
    to_budget: int
    category_groups: list[BudgetCategoryGroup] = field(default_factory=list)

    @classmethod
    def from_actual(cls, budget: Any) -> "BudgetMonth":
        groups = [BudgetCategoryGroup.from_actual(g) for g in budget.category_groups]
        groups.extend(BudgetCategoryGroup.from_income(g) for g in budget.income_category_groups)

        if isinstance(budget, EnvelopeBudget):
            return cls(
                month=budget.month.strftime("%Y-%m"),
                income_available=amount_to_integer(budget.available_funds),
                last_month_overspent=amount_to_integer(budget.last_month_overspent),
                for_next_month=amount_to_integer(budget.for_next_month),
                total_budgeted=amount_to_integer(budget.budgeted),
                to_budget=amount_to_integer(budget.to_budget),
                category_groups=groups,
            )

        return cls(
            month=budget.month.strftime("%Y-%m"),
            income_available=amount_to_integer(budget.received),
            last_month_overspent=0,
            for_next_month=0,
            total_budgeted=amount_to_integer(budget.budgeted),
            to_budget=0,
            category_groups=groups,
        )
