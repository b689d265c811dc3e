# rpc_console/plugins/builtin/entrypoint.py
from __future__ import annotations

from typing import Optional

from rpc_console.methods import REGISTRY, build_usage, method
from rpc_console.ui import format_table


def _categories_table() -> str:
    categories = REGISTRY.categories()
    if not categories:
        return "No methods loaded."
    rows = []
    for category_name in sorted(categories):
        count = len(categories[category_name])
        rows.append([
            category_name,
            f"{count} method{'s' if count != 1 else ''}",
            REGISTRY.get_category_description(category_name),
        ])
    return format_table(rows, headers=["Category", "Methods", "Description"])


def _category_table(category: str) -> str:
    rows = []
    for method_obj in REGISTRY.categories()[category]:
        aliases = ", ".join(method_obj.aliases) or "-"
        rows.append([method_obj.name, aliases, method_obj.description])
    return format_table(rows, headers=["Method", "Aliases", "Description"])


# ---------- help ----------
@method(
    name="help",
    description="Show method categories, a category's methods, or one method's details.",
    example='help "echo"',
)
def help_(name: Optional[str] = None) -> str:
    if name is None:
        return _categories_table()

    method_obj = REGISTRY.get(name)
    if method_obj is None:
        if name in REGISTRY.categories():
            return _category_table(name)
        return f"No such method or category: {name}"

    lines = [
        f"Name:        {method_obj.name}",
        f"Aliases:     {', '.join(method_obj.aliases) or '(none)'}",
        f"Category:    {method_obj.category}",
        f"Description: {method_obj.description or '(none)'}",
        f"Example:     {method_obj.example or '(none)'}",
        f"Usage:       {build_usage(method_obj.name, method_obj.callback)}",
    ]
    return "\n".join(lines)


# ---------- methods ----------
@method(
    name="methods",
    description="List every method name the dispatcher knows, in registration order.",
    example="methods",
)
def list_methods() -> list[str]:
    return REGISTRY.names()
