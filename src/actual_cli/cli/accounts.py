#!/usr/bin/env python3
"""
Account Commands

list-accounts: open accounts with their current balances.
"""

from typing import Any

from ..client import SessionFactory
from ..core.currency import integer_to_amount
from .args import ParsedArgs


def list_accounts(args: ParsedArgs, session_factory: SessionFactory) -> list[dict[str, Any]]:
    """List open accounts with id, name, off-budget flag and balance."""
    with session_factory() as session:
        results = []
        for account in session.get_accounts():
            if account.closed:
                continue
            balance = session.get_account_balance(account.id)
            results.append(
                {
                    "id": account.id,
                    "name": account.name,
                    "offbudget": account.offbudget,
                    "balance": integer_to_amount(balance),
                }
            )
        return results
