"""Helper utilities for naming and introspecting controllers."""

from __future__ import annotations

import difflib
import inspect
import pkgutil
import typing as typ


def qualified_name(obj: object) -> str:
    """Return ``module.QualName`` for a class or function."""
    if not isinstance(obj, type) and not inspect.isroutine(obj):
        obj = type(obj)
    module = getattr(obj, "__module__", None)
    qualname = getattr(obj, "__qualname__", None) or getattr(obj, "__name__", "")
    if not module or module == "builtins":
        return qualname
    return f"{module}.{qualname}"


def import_object(path: str) -> object:
    """Import the object named by the dotted or ``module:attr`` ``path``.

    Raises ``ImportError`` when no module or attribute matches.
    """
    try:
        return pkgutil.resolve_name(path)
    except (AttributeError, ValueError) as exc:
        msg = f"cannot import {path!r}"
        raise ImportError(msg) from exc


def public_methods(obj: object) -> tuple[str, ...]:
    """Return the sorted public callable attribute names of ``obj``."""
    cls = obj if isinstance(obj, type) else type(obj)
    names = [
        name
        for name in dir(cls)
        if not name.startswith("_") and callable(getattr(cls, name, None))
    ]
    return tuple(sorted(names))


def closest_match(name: str, candidates: typ.Iterable[str]) -> str | None:
    """Return the candidate most similar to ``name``, if any is close enough."""
    matches = difflib.get_close_matches(name, list(candidates), n=1, cutoff=0.6)
    return matches[0] if matches else None


def requires_arguments(cls: type) -> bool:
    """Return ``True`` if ``cls()`` cannot be called without arguments."""
    try:
        signature = inspect.signature(cls)
    except (TypeError, ValueError):  # pragma: no cover - builtins without metadata
        return False
    try:
        signature.bind()
    except TypeError:
        return True
    return False
