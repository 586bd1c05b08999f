#!/usr/bin/env python3
"""
Payee Commands

list-payees: payees excluding the transfer payees that stand in for accounts.
"""

from typing import Any

from ..client import SessionFactory
from .args import ParsedArgs


def list_payees(args: ParsedArgs, session_factory: SessionFactory) -> list[dict[str, Any]]:
    """List non-transfer payees with their default category."""
    with session_factory() as session:
        payees = session.get_payees()

    return [
        {"id": payee.id, "name": payee.name, "category": payee.category}
        for payee in payees
        if not payee.transfer_acct
    ]
