# rpc_console/plugins/__init__.py
"""Methods bundled with the console, discovered by rpc_console.interface.loader."""
