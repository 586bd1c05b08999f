#!/usr/bin/env python3
"""
Transaction Commands

- add-transaction: add one transaction to an account
- import-transactions: import a CSV file of transactions into an account
- get-transactions: list an account's transactions over a date range

Flags are validated and import files are parsed before a session is opened,
so bad input never reaches the server. Mutating commands sync exactly once
after all changes are made.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Any

from ..client import BudgetSession, NewTransaction, SessionFactory
from ..core.csv_parser import CsvRow, parse_csv
from ..core.currency import amount_to_integer, integer_to_amount, parse_amount
from ..core.dates import EARLIEST_DATE, parse_iso_date
from ..core.errors import ValidationError
from .args import ParsedArgs, optional_str, require_str

logger = logging.getLogger(__name__)


def require_account_id(session: BudgetSession, name: str) -> str:
    """Resolve an account name to its id or fail with a validation error."""
    account_id = session.lookup_id("accounts", name)
    if not account_id:
        raise ValidationError(f"Account not found: {name}")
    return account_id


def add_transaction(args: ParsedArgs, session_factory: SessionFactory) -> dict[str, Any]:
    """
    Add one transaction.

    An existing payee is linked by id; an unknown payee name is kept as the
    imported payee. An unknown category is an error.

    Returns:
        {"created": <transaction id>}
    """
    account_name = require_str(args, "account", "<name>")
    date_str = require_str(args, "date", "<YYYY-MM-DD>")
    amount_str = require_str(args, "amount", "<number>")

    transaction_date = parse_iso_date(date_str, "date")
    amount = amount_to_integer(parse_amount(amount_str))
    payee_name = optional_str(args, "payee")
    category_name = optional_str(args, "category")
    notes = optional_str(args, "notes")

    with session_factory() as session:
        account_id = require_account_id(session, account_name)

        payee_id = None
        imported_payee = None
        if payee_name:
            payee_id = session.lookup_id("payees", payee_name)
            if not payee_id:
                imported_payee = payee_name

        category_id = None
        if category_name:
            category_id = session.lookup_id("categories", category_name)
            if not category_id:
                raise ValidationError(f"Category not found: {category_name}")

        transaction = NewTransaction(
            date=transaction_date,
            amount=amount,
            payee=payee_id,
            imported_payee=imported_payee,
            category=category_id,
            notes=notes,
        )

        ids = session.add_transactions(account_id, [transaction])
        session.sync()

    return {"created": ids[0]}


def read_import_file(file_path: str) -> list[CsvRow]:
    """Read and parse an import file, failing with a validation error if it is missing."""
    path = Path(file_path).expanduser()
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ValidationError(f"File not found: {file_path}") from None
    return parse_csv(content)


def row_to_transaction(row: CsvRow, row_number: int, category_ids: dict[str, str]) -> NewTransaction:
    """
    Convert one CSV row into a transaction.

    Args:
        row: Parsed CSV row
        row_number: 1-based data row number used in error messages
        category_ids: Lower-cased category name -> category id

    Raises:
        ValidationError: If date or amount is missing or malformed, or the
            category is unknown
    """
    for required in ("date", "amount"):
        if not row.get(required):
            raise ValidationError(f'Row {row_number}: missing required field "{required}"')

    try:
        transaction_date = parse_iso_date(row["date"], "date")
        amount = amount_to_integer(parse_amount(row["amount"]))
    except ValidationError as e:
        raise ValidationError(f"Row {row_number}: {e}") from None

    category_id = None
    if row.get("category"):
        category_id = category_ids.get(row["category"].lower())
        if not category_id:
            raise ValidationError(f"Row {row_number}: category not found: {row['category']}")

    return NewTransaction(
        date=transaction_date,
        amount=amount,
        imported_payee=row.get("payee") or None,
        category=category_id,
        notes=row.get("notes") or None,
        imported_id=row.get("imported_id") or None,
    )


def import_transactions(args: ParsedArgs, session_factory: SessionFactory) -> dict[str, Any]:
    """
    Import transactions from a CSV file.

    Recognised columns: date, amount (required); payee, category, notes,
    imported_id (optional). Category names match case-insensitively.

    Returns:
        {"added": n, "updated": n, "errors": [...]}
    """
    account_name = require_str(args, "account", "<name>")
    file_path = require_str(args, "file", "<path-to-csv>")

    rows = read_import_file(file_path)
    logger.info("Read %d rows from %s", len(rows), file_path)

    with session_factory() as session:
        account_id = require_account_id(session, account_name)

        category_ids = {category.name.lower(): category.id for category in session.get_categories()}
        transactions = [row_to_transaction(row, i, category_ids) for i, row in enumerate(rows, start=1)]

        result = session.import_transactions(account_id, transactions)
        session.sync()

    return {
        "added": len(result.added),
        "updated": len(result.updated),
        "errors": result.errors,
    }


def get_transactions(args: ParsedArgs, session_factory: SessionFactory) -> list[dict[str, Any]]:
    """
    List an account's transactions between --from and --to, inclusive.

    --from defaults to 2000-01-01 and --to to today. Payee and category ids
    are replaced by names where known.
    """
    account_name = require_str(args, "account", "<name>")
    from_str = optional_str(args, "from")
    to_str = optional_str(args, "to")

    start = parse_iso_date(from_str, "from") if from_str else EARLIEST_DATE
    end = parse_iso_date(to_str, "to") if to_str else date.today()

    with session_factory() as session:
        account_id = require_account_id(session, account_name)
        transactions = session.get_transactions(account_id, start, end)
        payee_names = {payee.id: payee.name for payee in session.get_payees()}
        category_names = {category.id: category.name for category in session.get_categories()}

    return [
        {
            "id": t.id,
            "date": t.date.isoformat(),
            "amount": integer_to_amount(t.amount),
            "payee": payee_names.get(t.payee) or t.payee or None,
            "category": category_names.get(t.category) or t.category or None,
            "notes": t.notes,
            "cleared": t.cleared,
            "imported_id": t.imported_id,
        }
        for t in transactions
    ]
