"""Protocol definitions used across the package."""

from __future__ import annotations

import typing as typ


class ContainerLike(typ.Protocol):
    """Minimal read interface shared by containers and service locators."""

    def has(self, name: str) -> bool:
        """Return ``True`` if ``name`` can be fetched."""
        ...

    def get(self, name: str) -> object:
        """Return the service registered as ``name``."""
        ...


class RequestLike(typ.Protocol):
    """The parts of a Falcon request the resolver reads."""

    path: str
    context: typ.Any
