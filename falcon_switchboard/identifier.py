"""Parsing of string controller identifiers."""

from __future__ import annotations

import dataclasses as dc

from .exceptions import ControllerNotFoundError

DEFAULT_SEPARATOR = "::"


@dc.dataclass(frozen=True, slots=True)
class ControllerIdentifier:
    """A ``target[::method]`` reference to a controller.

    ``target`` is a service id or an importable dotted path. ``method`` is
    ``None`` when the target itself is expected to be callable.
    """

    target: str
    method: str | None = None

    @classmethod
    def parse(
        cls, value: str, *, separator: str = DEFAULT_SEPARATOR
    ) -> ControllerIdentifier:
        """Split ``value`` on the first ``separator``."""
        text = value.strip()
        if separator not in text:
            if not text:
                raise ControllerNotFoundError(value, "Controller identifier is empty.")
            return cls(text)

        target, method = (part.strip() for part in text.split(separator, 1))
        if not target:
            msg = f'Controller identifier "{value}" has no class or service.'
            raise ControllerNotFoundError(value, msg)
        if not method:
            msg = f'Controller identifier "{value}" has no method name.'
            raise ControllerNotFoundError(value, msg)
        return cls(target, method)

    def format(self, *, separator: str = DEFAULT_SEPARATOR) -> str:
        """Return the identifier in its string form."""
        if self.method is None:
            return self.target
        return f"{self.target}{separator}{self.method}"

    def __str__(self) -> str:
        return self.format()
