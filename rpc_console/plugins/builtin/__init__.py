# rpc_console/plugins/builtin/__init__.py
from __future__ import annotations

"""
Console introspection methods (help, methods).
"""

CATEGORY_DESCRIPTION = "Console introspection (help, method listing)."
