#!/usr/bin/env python3
# rpc_console/interface/loader.py
from __future__ import annotations

"""
Dynamic method loader.

Features:
- Imports all modules under a given package (default: 'rpc_console.plugins').
- Supports 'entrypoint.py' inside a subpackage exporting METHOD/METHODS.
- Derives categories from module paths if not explicitly set.
- Collects category descriptions from CATEGORY_DESCRIPTION or the package docstring.
"""

import importlib
import pkgutil
from pathlib import Path
from types import ModuleType
from typing import Iterable

from rpc_console.methods import REGISTRY, Method, MethodRegistry

DEFAULT_METHODS_PACKAGE = "rpc_console.plugins"


def _register_from_entry_module(module: ModuleType, registry: MethodRegistry) -> int:
    """Register METHOD/METHODS exported by an entry module, if present."""
    registered = 0
    obj = getattr(module, "METHOD", None)
    if isinstance(obj, Method) and registry.get(obj.name) is None:
        registry.register(obj)
        registered += 1
    objs = getattr(module, "METHODS", None)
    if isinstance(objs, Iterable):
        for item in objs:
            if isinstance(item, Method) and registry.get(item.name) is None:
                registry.register(item)
                registered += 1
    return registered


def load_methods(
    methods_package: str = DEFAULT_METHODS_PACKAGE,
    registry: MethodRegistry = REGISTRY,
) -> int:
    """
    Import all modules under `methods_package` and return how many were loaded.

    Supported layouts:
      1) Plain modules: pkg/foo.py            -> import pkg.foo
      2) Packages with an entrypoint:
         pkg/bar/entrypoint.py               -> import pkg.bar.entrypoint
            and register METHOD/METHODS if present.
    """
    package = importlib.import_module(methods_package)
    package_paths = [str(p) for p in getattr(package, "__path__", [])]
    if not package_paths:
        raise RuntimeError(f"'{methods_package}' must be a package (folder) with modules.")

    loaded_count = 0
    discovered_subpackages: set[str] = set()

    for base_path in package_paths:
        for modinfo in pkgutil.iter_modules([base_path]):
            module_name = modinfo.name
            if module_name.startswith("_"):
                continue

            if modinfo.ispkg:
                discovered_subpackages.add(module_name)
                if (Path(base_path) / module_name / "entrypoint.py").exists():
                    module = importlib.import_module(
                        f"{methods_package}.{module_name}.entrypoint")
                    _register_from_entry_module(module, registry)
                else:
                    importlib.import_module(f"{methods_package}.{module_name}")
            else:
                importlib.import_module(f"{methods_package}.{module_name}")
            loaded_count += 1

    _assign_categories_from_modules(methods_package, registry)
    _collect_category_descriptions(methods_package, discovered_subpackages, registry)
    return loaded_count


def _assign_categories_from_modules(methods_package: str, registry: MethodRegistry) -> None:
    """Category = first subpackage segment ('pkg.demo.entrypoint' -> 'demo') unless set."""
    prefix = f"{methods_package}."
    for method_obj in registry.all():
        if method_obj.category != "general" or not method_obj.module.startswith(prefix):
            continue
        segments = method_obj.module[len(prefix):].split(".")
        if len(segments) >= 2:
            method_obj.category = segments[0]


def _collect_category_descriptions(
    methods_package: str,
    subpackages: set[str],
    registry: MethodRegistry,
) -> None:
    for category in subpackages:
        module = importlib.import_module(f"{methods_package}.{category}")
        value = getattr(module, "CATEGORY_DESCRIPTION", None)
        if isinstance(value, str):
            description = value
        else:
            description = module.__doc__ or ""
        registry.set_category_description(category, description)
