#!/usr/bin/env python3
"""
Budget Commands

get-budget: the month's envelope summary (income available, overspending,
amount held, total budgeted, to budget) and budgeted, spent and balance per
category group and category.
"""

from typing import Any

from ..client import SessionFactory
from ..core.currency import integer_to_amount
from ..core.dates import parse_month
from .args import ParsedArgs, require_str


def get_budget(args: ParsedArgs, session_factory: SessionFactory) -> dict[str, Any]:
    """Fetch one budget month, naming groups and categories where known."""
    month = parse_month(require_str(args, "month", "<YYYY-MM>"))

    with session_factory() as session:
        budget = session.get_budget_month(month)
        category_names = {category.id: category.name for category in session.get_categories()}
        group_names = {group.id: group.name for group in session.get_category_groups()}

    return {
        "month": budget.month,
        "incomeAvailable": integer_to_amount(budget.income_available),
        "lastMonthOverspent": integer_to_amount(budget.last_month_overspent),
        "forNextMonth": integer_to_amount(budget.for_next_month),
        "totalBudgeted": integer_to_amount(budget.total_budgeted),
        "toBudget": integer_to_amount(budget.to_budget),
        "categoryGroups": [
            {
                "id": group.id,
                "name": group_names.get(group.id) or group.id,
                "budgeted": integer_to_amount(group.budgeted),
                "spent": integer_to_amount(group.spent),
                "balance": integer_to_amount(group.balance),
                "categories": [
                    {
                        "id": category.id,
                        "name": category_names.get(category.id) or category.id,
                        "budgeted": integer_to_amount(category.budgeted),
                        "spent": integer_to_amount(category.spent),
                        "balance": integer_to_amount(category.balance),
                        "carryover": category.carryover,
                    }
                    for category in group.categories
                ],
            }
            for group in budget.category_groups
        ],
    }
