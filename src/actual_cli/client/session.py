#!/usr/bin/env python3
"""
Budget Session - Standard interface to the Actual Budget client.

Defines the ``BudgetSession`` protocol consumed by the command handlers and
its implementation over the actualpy library. A session is acquired with
``open_session(settings)``: the server login and budget download happen on
entry and the local database session is always closed on exit, whether the
command succeeded or not.

Errors raised by the client library (server, network, decryption) are
re-raised as ``ExternalServiceError`` at this boundary.
"""

import logging
from collections.abc import Callable, Iterator
from contextlib import AbstractContextManager, contextmanager
from datetime import date, timedelta
from typing import Any, Protocol

from actual import Actual
from actual.budgets import get_budget_history
from actual.exceptions import ActualError
from actual.queries import (
    create_transaction_from_ids,
    get_accounts,
    get_categories,
    get_category_groups,
    get_payees,
    get_transactions,
    match_transaction,
)
from requests import RequestException

from ..core.config import Settings
from ..core.currency import amount_to_integer, integer_to_decimal
from ..core.errors import ExternalServiceError, ValidationError
from .models import (
    Account,
    BudgetMonth,
    Category,
    CategoryGroup,
    ImportResult,
    NewTransaction,
    Payee,
    Transaction,
)

logger = logging.getLogger(__name__)

LOOKUP_ENTITIES = ("accounts", "categories", "payees")


class BudgetSession(Protocol):
    """
    Protocol for the operations the commands need from the budget service.

    All amounts are integer cents. Mutations stay local until ``sync()``.
    """

    def lookup_id(self, entity: str, name: str) -> str | None:
        """
        Find the id of an account, category or payee by exact name.

        Args:
            entity: One of "accounts", "categories", "payees"
            name: Exact name to match

        Returns:
            The id, or None if nothing has that name
        """
        ...

    def get_accounts(self) -> list[Account]: ...

    def get_account_balance(self, account_id: str) -> int: ...

    def get_categories(self) -> list[Category]: ...

    def get_category_groups(self) -> list[CategoryGroup]: ...

    def get_payees(self) -> list[Payee]: ...

    def get_transactions(self, account_id: str, start: date, end: date) -> list[Transaction]:
        """Transactions for one account between ``start`` and ``end``, both inclusive."""
        ...

    def get_budget_month(self, month: date) -> BudgetMonth:
        """Budget figures for the month starting at ``month``."""
        ...

    def add_transactions(self, account_id: str, transactions: list[NewTransaction]) -> list[str]:
        """Add transactions as given and return their new ids."""
        ...

    def import_transactions(self, account_id: str, transactions: list[NewTransaction]) -> ImportResult:
        """Add transactions, matching existing ones instead of duplicating them."""
        ...

    def sync(self) -> None:
        """Push local changes to the server."""
        ...


SessionFactory = Callable[[], AbstractContextManager[BudgetSession]]


class ActualBudgetSession:
    """BudgetSession backed by an open actualpy ``Actual`` instance."""

    def __init__(self, actual: Any):
        self._actual = actual
        self._accounts_by_id: dict[str, Any] | None = None

    @property
    def _s(self) -> Any:
        return self._actual.session

    # Row lookups by id, returning actualpy ORM objects

    def _account_rows(self) -> dict[str, Any]:
        if self._accounts_by_id is None:
            self._accounts_by_id = {row.id: row for row in get_accounts(self._s)}
        return self._accounts_by_id

    def _account_row(self, account_id: str) -> Any:
        row = self._account_rows().get(account_id)
        if row is None:
            raise ExternalServiceError(f"Account id not found: {account_id}")
        return row

    def _payee_row(self, payee_id: str) -> Any:
        for row in get_payees(self._s):
            if row.id == payee_id:
                return row
        raise ExternalServiceError(f"Payee id not found: {payee_id}")

    def _create_row(self, account: Any, transaction: NewTransaction) -> Any:
        # Built from ids so an imported payee name never becomes a payee
        return create_transaction_from_ids(
            self._s,
            transaction.date,
            account.id,
            transaction.payee,
            transaction.notes or "",
            category_id=transaction.category,
            amount=integer_to_decimal(transaction.amount),
            imported_id=transaction.imported_id,
            imported_payee=transaction.imported_payee,
        )

    # BudgetSession operations

    def lookup_id(self, entity: str, name: str) -> str | None:
        if entity == "accounts":
            rows = get_accounts(self._s)
        elif entity == "categories":
            rows = get_categories(self._s)
        elif entity == "payees":
            rows = get_payees(self._s)
        else:
            raise ValueError(f"Unknown entity type: {entity} (expected one of {LOOKUP_ENTITIES})")

        for row in rows:
            if row.name == name:
                return row.id
        return None

    def get_accounts(self) -> list[Account]:
        rows = get_accounts(self._s)
        self._accounts_by_id = {row.id: row for row in rows}
        return [Account.from_actual(row) for row in rows]

    def get_account_balance(self, account_id: str) -> int:
        return amount_to_integer(self._account_row(account_id).balance)

    def get_categories(self) -> list[Category]:
        return [Category.from_actual(row) for row in get_categories(self._s)]

    def get_category_groups(self) -> list[CategoryGroup]:
        return [CategoryGroup.from_actual(row) for row in get_category_groups(self._s)]

    def get_payees(self) -> list[Payee]:
        return [Payee.from_actual(row) for row in get_payees(self._s)]

    def get_transactions(self, account_id: str, start: date, end: date) -> list[Transaction]:
        # The client's end date is exclusive
        rows = get_transactions(
            self._s,
            start_date=start,
            end_date=end + timedelta(days=1),
            account=self._account_row(account_id),
        )
        return [Transaction.from_actual(row) for row in rows]

    def get_budget_month(self, month: date) -> BudgetMonth:
        budget = get_budget_history(self._s, month).from_month(month)
        if budget is None:
            raise ValidationError(f"No budget data for month: {month:%Y-%m}")
        return BudgetMonth.from_actual(budget)

    def add_transactions(self, account_id: str, transactions: list[NewTransaction]) -> list[str]:
        account = self._account_row(account_id)
        ids = [self._create_row(account, transaction).id for transaction in transactions]
        logger.info("Added %d transactions to %s", len(ids), account.name)
        return ids

    def import_transactions(self, account_id: str, transactions: list[NewTransaction]) -> ImportResult:
        """
        Add each transaction unless it matches one already in the account.

        Matching follows actualpy's ``match_transaction``: same imported id, or
        same amount within a week of the date. A matched row takes the new
        date, notes, category and imported id and counts as updated.
        """
        account = self._account_row(account_id)

        result = ImportResult()
        matched: list[Any] = []
        for index, transaction in enumerate(transactions, start=1):
            try:
                row = match_transaction(
                    self._s,
                    transaction.date,
                    account,
                    payee=self._payee_row(transaction.payee) if transaction.payee else None,
                    amount=integer_to_decimal(transaction.amount),
                    imported_id=transaction.imported_id,
                    already_matched=matched,
                )
                if row is None:
                    row = self._create_row(account, transaction)
                    result.added.append(row.id)
                else:
                    if transaction.notes is not None:
                        row.notes = transaction.notes
                    if transaction.category:
                        row.category_id = transaction.category
                    if transaction.imported_id:
                        row.financial_id = transaction.imported_id
                    row.set_date(transaction.date)
                    result.updated.append(row.id)
            except ActualError as e:
                logger.warning("Row %d not imported: %s", index, e)
                result.errors.append({"row": index, "message": str(e)})
                continue

            matched.append(row)

        logger.info(
            "Imported into %s: %d added, %d updated, %d errors",
            account.name,
            len(result.added),
            len(result.updated),
            len(result.errors),
        )
        return result

    def sync(self) -> None:
        self._actual.commit()


@contextmanager
def open_session(settings: Settings) -> Iterator[BudgetSession]:
    """
    Log in, download the budget file and yield a session over it.

    The local database session is closed on exit in every case.

    Args:
        settings: Resolved connection settings

    Raises:
        ExternalServiceError: If the server or client library fails
    """
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    logger.debug("Opening budget %s on %s", settings.sync_id, settings.server_url)

    try:
        with Actual(
            base_url=settings.server_url,
            password=settings.password,
            file=settings.sync_id,
            encryption_password=settings.encryption_password,
            data_dir=str(settings.data_dir),
        ) as actual:
            yield ActualBudgetSession(actual)
    except (ActualError, RequestException) as e:
        raise ExternalServiceError(str(e)) from e
    finally:
        logger.debug("Closed budget %s", settings.sync_id)
