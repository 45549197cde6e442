"""falcon-switchboard package."""

from __future__ import annotations

from .container import ServiceContainer, ServiceLocator, ServiceNotFoundError
from .controller import (
    AbstractController,
    ContainerAware,
    ContainerAwareMixin,
    ServiceSubscriber,
)
from .exceptions import (
    ContainerNotSetLogicError,
    ControllerNotCallableError,
    ControllerNotFoundError,
    ControllerResolutionError,
    MethodNotFoundError,
)
from .identifier import ControllerIdentifier
from .protocols import ContainerLike, RequestLike
from .resolver import (
    CONTROLLER_ATTRIBUTE,
    BaseControllerResolver,
    ControllerResolver,
    ResolvedController,
    as_callable,
)
from .routing import ControllerRouter, RouteMatch
from .sink import ControllerSink, install

__all__ = (
    "CONTROLLER_ATTRIBUTE",
    "AbstractController",
    "BaseControllerResolver",
    "ContainerAware",
    "ContainerAwareMixin",
    "ContainerLike",
    "ContainerNotSetLogicError",
    "ControllerIdentifier",
    "ControllerNotCallableError",
    "ControllerNotFoundError",
    "ControllerResolutionError",
    "ControllerResolver",
    "ControllerRouter",
    "ControllerSink",
    "MethodNotFoundError",
    "RequestLike",
    "ResolvedController",
    "RouteMatch",
    "ServiceContainer",
    "ServiceLocator",
    "ServiceNotFoundError",
    "ServiceSubscriber",
    "as_callable",
    "install",
)
