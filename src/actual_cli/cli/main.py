#!/usr/bin/env python3
"""
Main CLI Entry Point for the Actual Budget CLI

Usage:
    actual-cli <command> [--flag [value]]...

Looks the command up in a fixed table, parses the remaining tokens as flags,
runs the handler and prints its result as indented JSON on stdout. Any
failure is printed as {"error": "..."} on stderr with exit status 1.
"""

import logging
from collections.abc import Callable, Sequence
from typing import Any

import click

from ..client import SessionFactory, open_session
from ..core.config import configure_logging, resolve_settings
from ..core.errors import ActualCliError
from ..core.json_utils import format_json, format_json_compact
from .accounts import list_accounts
from .args import ParsedArgs, parse_args
from .budget import get_budget
from .categories import list_categories
from .payees import list_payees
from .transactions import add_transaction, get_transactions, import_transactions

logger = logging.getLogger(__name__)

Handler = Callable[[ParsedArgs, SessionFactory], Any]

COMMANDS: dict[str, Handler] = {
    "add-transaction": add_transaction,
    "import-transactions": import_transactions,
    "list-accounts": list_accounts,
    "list-categories": list_categories,
    "list-payees": list_payees,
    "get-transactions": get_transactions,
    "get-budget": get_budget,
}


def default_session_factory():
    """Resolve settings and open a session; settings are only read once a handler needs them."""
    return open_session(resolve_settings())


def dispatch(argv: Sequence[str], session_factory: SessionFactory = default_session_factory) -> int:
    """
    Run one command and write its output.

    Args:
        argv: Command name followed by its flag tokens
        session_factory: Opens a budget session for the handler

    Returns:
        Process exit status: 0 on success, 1 on any failure
    """
    command = argv[0] if argv else None
    if command not in COMMANDS:
        click.echo(
            format_json_compact(
                {
                    "error": f"Unknown command: {command or '(none)'}",
                    "available": list(COMMANDS),
                }
            ),
            err=True,
        )
        return 1

    args = parse_args(list(argv[1:]))
    logger.debug("Running %s with flags %s", command, sorted(args))

    try:
        result = COMMANDS[command](args, session_factory)
    except ActualCliError as e:
        logger.debug("%s failed: %s", command, e)
        click.echo(format_json_compact({"error": str(e)}), err=True)
        return 1
    except Exception as e:
        logger.debug("Unexpected error in %s", command, exc_info=True)
        click.echo(format_json_compact({"error": str(e) or type(e).__name__}), err=True)
        return 1

    click.echo(format_json(result))
    return 0


@click.command(
    context_settings={"ignore_unknown_options": True, "help_option_names": []},
)
@click.argument("argv", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def main(ctx: click.Context, argv: tuple[str, ...]) -> None:
    """
    Actual Budget CLI - JSON access to an Actual Budget server.

    Commands: add-transaction, import-transactions, list-accounts,
    list-categories, list-payees, get-transactions, get-budget.
    """
    configure_logging()
    ctx.exit(dispatch(argv))


if __name__ == "__main__":
    main()
