#!/usr/bin/env python3
# rpc_console/methods/methods.py
from __future__ import annotations

"""
Method registry, decorator utilities and the in-process dispatcher.

This module provides:
- MethodRegistry: ordered in-memory registry of methods and aliases.
- method: decorator to register functions as console methods with metadata.
- register_method: explicit API to register pre-built Method objects.
- build_usage: compact usage line rendered from a callback signature.
- LocalDispatcher: executes registry methods for a console.
"""

import difflib
import inspect
import logging
from typing import Any, Callable, Dict, Optional, Sequence

from rpc_console.errors import DispatchError
from rpc_console.methods.method_types import Method

logger = logging.getLogger(__name__)


class MethodRegistry:
    """Holds all method definitions and provides lookup utilities."""

    def __init__(self) -> None:
        # Primary name -> Method, in registration order
        self._methods_by_name: Dict[str, Method] = {}
        # Alias name -> primary name
        self._alias_to_primary: Dict[str, str] = {}
        # Category -> description text
        self._category_descriptions: Dict[str, str] = {}

    # ---------------- Registration ----------------

    def register(self, method_obj: Method) -> None:
        """Register a method and its aliases, ensuring no collisions."""
        name = method_obj.name
        if name in self._methods_by_name or name in self._alias_to_primary:
            raise ValueError(f"Method '{name}' already registered.")

        for alias in method_obj.aliases:
            if alias in self._methods_by_name or alias in self._alias_to_primary or alias == name:
                raise ValueError(
                    f"Alias '{alias}' for '{name}' collides with an existing name."
                )

        self._methods_by_name[name] = method_obj
        for alias in method_obj.aliases:
            self._alias_to_primary[alias] = name

    # ---------------- Lookup ----------------

    def get(self, name: str) -> Optional[Method]:
        """Return the method by primary name or alias, or None if not found."""
        if name in self._methods_by_name:
            return self._methods_by_name[name]
        if name in self._alias_to_primary:
            return self._methods_by_name[self._alias_to_primary[name]]
        return None

    def all(self) -> list[Method]:
        """Return only primary methods (avoid duplicates in listings)."""
        return list(self._methods_by_name.values())

    def names(self) -> list[str]:
        """Primary names then aliases, in registration order."""
        return [*self._methods_by_name.keys(), *self._alias_to_primary.keys()]

    # ---------------- Categories ----------------

    def categories(self) -> dict[str, list[Method]]:
        """Group methods by category for help output."""
        grouped: dict[str, list[Method]] = {}
        for meth in self._methods_by_name.values():
            grouped.setdefault(meth.category, []).append(meth)
        return grouped

    def set_category_description(self, category: str, description: str) -> None:
        self._category_descriptions[category] = description.strip()

    def get_category_description(self, category: str) -> str:
        return self._category_descriptions.get(category, "")


# Global registry the bundled plugins register into
REGISTRY = MethodRegistry()


def method(
    *,
    name: str | None = None,
    description: str | None = None,
    example: str | None = None,
    category: str | None = None,
    aliases: list[str] | None = None,
    registry: MethodRegistry | None = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Decorator to register a function as a console method.

    - The function name is used as `name` if not provided (underscores kept,
      since console lines use the name verbatim).
    - `param_names` is captured from the function signature for help output.
    """

    def wrapper(func: Callable[..., Any]) -> Callable[..., Any]:
        signature = inspect.signature(func)
        method_obj = Method(
            name=name or func.__name__,
            description=(description or (func.__doc__ or "")).strip(),
            example=example or "",
            callback=func,
            category=category or "general",
            aliases=aliases or [],
            param_names=[p.name for p in signature.parameters.values()],
        )
        method_obj.module = func.__module__
        (registry or REGISTRY).register(method_obj)
        return func

    return wrapper


def register_method(method_obj: Method, registry: MethodRegistry | None = None) -> None:
    """Explicit API for modules that construct Method objects directly."""
    (registry or REGISTRY).register(method_obj)


def build_usage(method_name: str, func: Any) -> str:
    """
    Render a compact usage string based on `func` signature.

    Example:
        'transfer <from> <to> [amount] [args...]'
    """
    usage_parts: list[str] = []
    for parameter in inspect.signature(func).parameters.values():
        if parameter.kind is parameter.VAR_POSITIONAL:
            usage_parts.append(f"[{parameter.name}...]")
        elif parameter.kind in (parameter.KEYWORD_ONLY, parameter.VAR_KEYWORD):
            # not reachable from a console line
            continue
        elif parameter.default is inspect.Parameter.empty:
            usage_parts.append(f"<{parameter.name}>")
        else:
            usage_parts.append(f"[{parameter.name}]")
    return f"{method_name} " + " ".join(usage_parts) if usage_parts else method_name


class LocalDispatcher:
    """Dispatcher over a MethodRegistry living in this process."""

    def __init__(self, registry: MethodRegistry | None = None) -> None:
        self.registry = registry if registry is not None else REGISTRY

    def method_names(self, session_id: int) -> list[str]:
        return self.registry.names()

    def _suggest_similar_names(self, name: str) -> str:
        matches = difflib.get_close_matches(name, self.registry.names(), n=3, cutoff=0.6)
        return f" Did you mean: {', '.join(matches)}?" if matches else ""

    def invoke(self, session_id: int, method: str, args: Sequence[Any]) -> Any:
        method_obj = self.registry.get(method)
        if method_obj is None:
            raise DispatchError(
                f"Unknown method: {method}.{self._suggest_similar_names(method)}")

        try:
            inspect.signature(method_obj.callback).bind(*args)
        except TypeError as exc:
            usage = build_usage(method_obj.name, method_obj.callback)
            raise DispatchError(f"{exc}\nUsage: {usage}") from exc

        logger.debug("session %s: invoking %s with %d argument(s)",
                     session_id, method_obj.name, len(args))
        try:
            return method_obj.invoke(*args)
        except DispatchError:
            raise
        except Exception as exc:
            raise DispatchError(f"{type(exc).__name__}: {exc}") from exc
