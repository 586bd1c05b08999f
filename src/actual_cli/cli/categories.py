#!/usr/bin/env python3
"""
Category Commands

list-categories: categories grouped under their category group.
"""

from typing import Any

from ..client import SessionFactory
from .args import ParsedArgs


def list_categories(args: ParsedArgs, session_factory: SessionFactory) -> list[dict[str, Any]]:
    """
    List categories grouped by category group.

    Groups appear in the order their first category is seen. A group whose
    name is unknown is labelled with its id.
    """
    with session_factory() as session:
        categories = session.get_categories()
        group_names = {group.id: group.name for group in session.get_category_groups()}

    grouped: dict[str | None, dict[str, Any]] = {}
    for category in categories:
        group_id = category.group_id
        if group_id not in grouped:
            grouped[group_id] = {
                "group": group_names.get(group_id) or group_id,
                "id": group_id,
                "categories": [],
            }
        grouped[group_id]["categories"].append(
            {
                "id": category.id,
                "name": category.name,
                "is_income": category.is_income,
            }
        )

    return list(grouped.values())
