"""
Command Line Interface Package

Entry point and command handlers for the actual-cli tool.

Command Structure:
- add-transaction, import-transactions, get-transactions: transactions.py
- list-accounts: accounts.py
- list-categories: categories.py
- list-payees: payees.py
- get-budget: budget.py

Every handler takes the parsed flags and a session factory, validates its
flags first and only then opens a budget session.
"""
