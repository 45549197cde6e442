"""Controller resolution.

This module implements :class:`ControllerResolver`, which reads the
``_controller`` attribute a router stored on ``req.context`` and turns it into
something the dispatcher can call. String identifiers take one of these
forms::

    package.module.ClassName::method    # class plus method
    package.module:ClassName::method    # entry-point style path
    service.id::method                  # container service plus method
    package.module.ClassName            # invokable class
    package.module.function             # plain function
    service.id                          # invokable container service

Container services win over importable classes. A resolved instance is
returned as an ``(instance, "method")`` tuple, or unchanged when it is
invokable. :func:`as_callable` turns either shape into a callable.
"""

from __future__ import annotations

import collections.abc as cabc
import inspect
import logging
import typing as typ

from .controller import ContainerAware, ServiceSubscriber
from .exceptions import (
    ContainerNotSetLogicError,
    ControllerNotCallableError,
    ControllerNotFoundError,
    MethodNotFoundError,
)
from .identifier import DEFAULT_SEPARATOR, ControllerIdentifier
from .utils import (
    closest_match,
    import_object,
    public_methods,
    qualified_name,
    requires_arguments,
)

if typ.TYPE_CHECKING:
    from .protocols import ContainerLike, RequestLike

__all__ = [
    "CONTROLLER_ATTRIBUTE",
    "BaseControllerResolver",
    "ControllerResolver",
    "ResolvedController",
    "as_callable",
]

CONTROLLER_ATTRIBUTE = "_controller"

ResolvedController = typ.Union[tuple[object, str], cabc.Callable[..., typ.Any]]


def as_callable(controller: ResolvedController) -> cabc.Callable[..., typ.Any]:
    """Return a callable for an ``(instance, method)`` pair or a callable."""
    if isinstance(controller, tuple):
        instance, method = controller
        return getattr(instance, method)
    return controller


class BaseControllerResolver:
    """Resolve controllers by importing and instantiating them.

    Subclasses customise lookup through :meth:`fetch_controller`,
    :meth:`fetch_class` and :meth:`configure_controller`.
    """

    def __init__(
        self,
        *,
        logger: logging.Logger | None = None,
        attribute: str = CONTROLLER_ATTRIBUTE,
        separator: str = DEFAULT_SEPARATOR,
    ) -> None:
        if not separator:
            msg = "separator must be a non-empty string"
            raise ValueError(msg)
        self._logger = logger if logger is not None else logging.getLogger(__name__)
        self.attribute = attribute
        self.separator = separator

    def resolve(self, req: RequestLike) -> ResolvedController | None:
        """Return the controller for ``req`` or ``None`` when none is declared."""
        controller = getattr(req.context, self.attribute, None)
        if controller is None or controller == "":
            self._logger.warning(
                'Unable to look for the controller as the "%s" attribute is '
                "missing.",
                self.attribute,
            )
            return None

        if isinstance(controller, str):
            identifier = ControllerIdentifier.parse(
                controller, separator=self.separator
            )
            return self.create_controller(identifier)

        if isinstance(controller, (tuple, list)) and len(controller) == 2:
            target, method = controller
            if isinstance(method, str):
                return self._resolve_pair(target, method)

        if callable(controller):
            if isinstance(controller, type):
                return self._ensure_invokable(
                    qualified_name(controller), self._load_class(controller)
                )
            return typ.cast(
                "ResolvedController",
                self.configure_controller(qualified_name(controller), controller),
            )

        name = qualified_name(controller)
        msg = (
            f'Controller "{name}" is neither a callable nor a controller '
            "identifier."
        )
        raise ControllerNotCallableError(name, msg)

    def create_controller(
        self, identifier: ControllerIdentifier
    ) -> ResolvedController:
        """Turn a parsed ``identifier`` into a resolved controller."""
        if identifier.method is None:
            controller = self.load_controller(identifier.target)
            return self._ensure_invokable(identifier.target, controller)

        try:
            instance = self.load_controller(identifier.target)
        except ControllerNotFoundError:
            static = self._static_method(identifier.target, identifier.method)
            if static is None:
                raise
            return static
        return self._bind_method(identifier.target, instance, identifier.method)

    def load_controller(self, target: str) -> object:
        """Return the configured controller object named by ``target``."""
        return self.configure_controller(target, self.fetch_controller(target))

    def fetch_controller(self, target: str) -> object:
        """Import ``target``, handing classes to :meth:`fetch_class`."""
        try:
            obj = import_object(target)
        except ImportError as exc:
            raise ControllerNotFoundError(target) from exc
        if isinstance(obj, type):
            return self.fetch_class(obj)
        return obj

    def fetch_class(self, cls: type) -> object:
        """Return an instance of ``cls``."""
        return self.instantiate_controller(cls, qualified_name(cls))

    def instantiate_controller(self, cls: type, target: str) -> object:
        """Create ``cls`` with no arguments."""
        if inspect.isabstract(cls):
            msg = (
                f'Controller "{target}" is abstract and cannot be instantiated. '
                "Did you mean to reference one of its concrete subclasses?"
            )
            raise ControllerNotFoundError(target, msg)
        if requires_arguments(cls):
            msg = (
                f'Controller "{target}" has required constructor arguments and '
                "does not exist in the container. Did you forget to define the "
                "controller as a service?"
            )
            raise ControllerNotFoundError(target, msg)
        self._logger.debug("Instantiating controller %s", target)
        return cls()

    def configure_controller(self, target: str, controller: object) -> object:
        """Hook run on every resolved controller object."""
        return controller

    def _load_class(self, cls: type) -> object:
        name = qualified_name(cls)
        return self.configure_controller(name, self.fetch_class(cls))

    def _resolve_pair(self, target: object, method: str) -> ResolvedController:
        if isinstance(target, str):
            identifier = ControllerIdentifier(target.strip(), method)
            return self.create_controller(identifier)
        if isinstance(target, type):
            name = qualified_name(target)
            try:
                instance = self._load_class(target)
            except ControllerNotFoundError:
                static = self._static_method(target, method)
                if static is None:
                    raise
                return static
            return self._bind_method(name, instance, method)
        name = qualified_name(target)
        instance = self.configure_controller(name, target)
        return self._bind_method(name, instance, method)

    def _bind_method(
        self, target: str, instance: object, method: str
    ) -> tuple[object, str]:
        if callable(getattr(instance, method, None)):
            return instance, method
        available = public_methods(instance)
        raise MethodNotFoundError(
            target,
            method,
            suggestion=closest_match(method, available),
            available=available,
            class_name=qualified_name(instance),
        )

    def _ensure_invokable(
        self, target: str, controller: object
    ) -> cabc.Callable[..., typ.Any]:
        if callable(controller):
            return controller
        methods = public_methods(controller)
        msg = (
            f'Controller class "{qualified_name(controller)}" cannot be called '
            'without a method name. You need to implement "__call__"'
        )
        if methods:
            joined = '", "'.join(methods)
            msg += f' or use one of the available methods: "{joined}".'
        else:
            msg += "."
        raise ControllerNotCallableError(target, msg)

    def _static_method(
        self, target: str | type, method: str
    ) -> cabc.Callable[..., typ.Any] | None:
        """Return ``target.method`` when it is a static or class method."""
        if isinstance(target, str):
            try:
                cls = import_object(target)
            except ImportError:
                return None
        else:
            cls = target
        if not isinstance(cls, type):
            return None
        attr = inspect.getattr_static(cls, method, None)
        if isinstance(attr, (staticmethod, classmethod)):
            return getattr(cls, method)
        return None


class ControllerResolver(BaseControllerResolver):
    """Resolve controllers through a dependency injection container.

    Identifiers are looked up in ``container`` before falling back to import
    and instantiation. Resolved objects that are
    :class:`~falcon_switchboard.controller.ContainerAware` receive
    ``container`` unless one was already set. Service subscribers must already
    hold a container; otherwise :class:`ContainerNotSetLogicError` is raised.
    """

    def __init__(
        self,
        container: ContainerLike,
        *,
        logger: logging.Logger | None = None,
        attribute: str = CONTROLLER_ATTRIBUTE,
        separator: str = DEFAULT_SEPARATOR,
    ) -> None:
        super().__init__(logger=logger, attribute=attribute, separator=separator)
        self._container = container

    @property
    def container(self) -> ContainerLike:
        """The container controllers are looked up in and wired to."""
        return self._container

    def fetch_controller(self, target: str) -> object:
        """Return the service ``target`` or import and instantiate it."""
        if self._container.has(target):
            self._logger.debug("Controller %s resolved from the container", target)
            return self._container.get(target)
        try:
            return super().fetch_controller(target)
        except ControllerNotFoundError as exc:
            if target in getattr(self._container, "private_ids", ()):
                msg = (
                    f'Controller "{target}" cannot be fetched from the container '
                    "because it is private. Did you forget to register it as a "
                    "public service?"
                )
                raise ControllerNotFoundError(target, msg) from exc
            raise

    def fetch_class(self, cls: type) -> object:
        """Return the service registered for ``cls`` or a new instance."""
        name = qualified_name(cls)
        if self._container.has(name):
            self._logger.debug("Controller %s resolved from the container", name)
            return self._container.get(name)
        return super().fetch_class(cls)

    def configure_controller(self, target: str, controller: object) -> object:
        """Inject the container or enforce the subscriber contract."""
        if (
            isinstance(controller, ContainerAware)
            and controller.get_container() is None
        ):
            self._logger.debug("Injecting the container into controller %s", target)
            controller.set_container(self._container)
        if (
            isinstance(controller, ServiceSubscriber)
            and not controller.has_container()
        ):
            raise ContainerNotSetLogicError(target)
        return controller
