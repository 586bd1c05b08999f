"""
Budget Service Client Package

Adapter over the actualpy library that exposes the handful of operations the
CLI needs as a ``BudgetSession`` returning plain dataclass models.

Functions:
- open_session: Context manager that logs in, downloads and closes a budget
"""

from .models import (
    Account,
    BudgetCategory,
    BudgetCategoryGroup,
    BudgetMonth,
    Category,
    CategoryGroup,
    ImportResult,
    NewTransaction,
    Payee,
    Transaction,
)
from .session import ActualBudgetSession, BudgetSession, SessionFactory, open_session

__all__ = [
    "Account",
    "ActualBudgetSession",
    "BudgetCategory",
    "BudgetCategoryGroup",
    "BudgetMonth",
    "BudgetSession",
    "Category",
    "CategoryGroup",
    "ImportResult",
    "NewTransaction",
    "Payee",
    "SessionFactory",
    "Transaction",
    "open_session",
]
