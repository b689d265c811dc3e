# rpc_console/plugins/demo/__init__.py
from __future__ import annotations

CATEGORY_DESCRIPTION = "Small methods for trying the console out."
