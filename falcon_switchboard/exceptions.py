"""Custom exceptions raised while resolving controllers."""

from __future__ import annotations


class ControllerResolutionError(ValueError):
    """Base class for failures turning an identifier into a callable."""

    identifier: str

    def __init__(self, identifier: str, message: str) -> None:
        self.identifier = identifier
        super().__init__(message)


class ControllerNotFoundError(ControllerResolutionError):
    """Raised when an identifier maps to neither a service nor a class."""

    def __init__(self, identifier: str, message: str | None = None) -> None:
        if message is None:
            message = (
                f'Controller "{identifier}" does neither exist as service nor '
                "as class."
            )
        super().__init__(identifier, message)


class MethodNotFoundError(ControllerResolutionError):
    """Raised when the resolved controller lacks the requested method."""

    method: str
    suggestion: str | None

    def __init__(
        self,
        identifier: str,
        method: str,
        *,
        suggestion: str | None = None,
        available: tuple[str, ...] = (),
        class_name: str | None = None,
    ) -> None:
        self.method = method
        self.suggestion = suggestion
        owner = class_name or identifier
        message = f'Expected method "{method}" on class "{owner}"'
        if suggestion is not None:
            message += f', did you mean "{suggestion}"?'
        elif available:
            joined = '", "'.join(available)
            message += f'. Available methods: "{joined}".'
        else:
            message += "."
        super().__init__(identifier, message)


class ControllerNotCallableError(ControllerResolutionError):
    """Raised when the resolved controller cannot be invoked."""


class ContainerNotSetLogicError(RuntimeError):
    """Raised when a service subscriber reaches dispatch without a container."""

    identifier: str

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(
            f'"{identifier}" has no container set, did you forget to define it '
            "as a service subscriber?"
        )
