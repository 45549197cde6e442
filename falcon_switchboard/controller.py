"""Base classes for controllers that cooperate with the service container.

Two capabilities are recognised by :class:`~falcon_switchboard.ControllerResolver`:

``ContainerAware``
    The controller accepts the application container after construction. The
    resolver hands over its container when none has been set yet.

``ServiceSubscriber``
    The controller declares the services it needs and expects to be given a
    :class:`~falcon_switchboard.container.ServiceLocator` when registered with
    :meth:`ServiceContainer.register_subscriber`. The resolver never injects
    into a subscriber; reaching dispatch without a container is an error.

Both are nominal base classes. Implementing ``get_container`` on a subscriber
does not make it container aware.
"""

from __future__ import annotations

import abc
import typing as typ

import falcon
import msgspec.json as msjson

from .exceptions import ContainerNotSetLogicError
from .utils import qualified_name

if typ.TYPE_CHECKING:  # pragma: no cover - imported for type hints
    import collections.abc as cabc

    from .protocols import ContainerLike


class ContainerAware(abc.ABC):
    """Controller that receives the container after construction."""

    @abc.abstractmethod
    def set_container(self, container: ContainerLike | None) -> None:
        """Store ``container`` for later service lookups."""

    @abc.abstractmethod
    def get_container(self) -> ContainerLike | None:
        """Return the stored container, if any."""


class ContainerAwareMixin(ContainerAware):
    """Default :class:`ContainerAware` implementation."""

    _container: ContainerLike | None = None

    def set_container(self, container: ContainerLike | None) -> None:
        """Store ``container`` for later service lookups."""
        self._container = container

    def get_container(self) -> ContainerLike | None:
        """Return the stored container, if any."""
        return self._container


class ServiceSubscriber(abc.ABC):
    """Controller wired to a locator of the services it subscribes to."""

    @classmethod
    @abc.abstractmethod
    def get_subscribed_services(cls) -> cabc.Mapping[str, str]:
        """Return the ``alias -> service id`` mapping this class needs."""

    @abc.abstractmethod
    def set_container(self, container: ContainerLike) -> ContainerLike | None:
        """Store ``container`` and return the previously set one."""

    @abc.abstractmethod
    def has_container(self) -> bool:
        """Return ``True`` once a container has been provided."""


class AbstractController(ServiceSubscriber):
    """Convenience base for HTTP controllers.

    Subclasses usually extend :meth:`get_subscribed_services` and are
    registered with :meth:`ServiceContainer.register_subscriber` so that the
    helpers below can reach the router and any other subscribed service.
    """

    container: ContainerLike | None = None

    @classmethod
    def get_subscribed_services(cls) -> cabc.Mapping[str, str]:
        """Return the services available through :meth:`get`."""
        return {"router": "router"}

    def set_container(self, container: ContainerLike) -> ContainerLike | None:
        """Store ``container`` and return the previously set one."""
        previous = self.container
        self.container = container
        return previous

    def has_container(self) -> bool:
        """Return ``True`` once a container has been provided."""
        return self.container is not None

    def _require_container(self) -> ContainerLike:
        if self.container is None:
            raise ContainerNotSetLogicError(qualified_name(type(self)))
        return self.container

    def has(self, name: str) -> bool:
        """Return ``True`` if the subscribed service ``name`` is available."""
        return self._require_container().has(name)

    def get(self, name: str) -> object:
        """Return the subscribed service ``name``."""
        return self._require_container().get(name)

    def url_for(self, route_name: str, /, **params: object) -> str:
        """Return the path of the named route formatted with ``params``."""
        router = typ.cast("typ.Any", self.get("router"))
        return router.url_for(route_name, **params)

    def redirect_to_route(self, route_name: str, /, **params: object) -> typ.NoReturn:
        """Redirect the client to the named route."""
        raise falcon.HTTPFound(self.url_for(route_name, **params))

    def json(
        self,
        resp: falcon.Response,
        data: object,
        *,
        status: str = falcon.HTTP_200,
    ) -> None:
        """Write ``data`` to ``resp`` as a JSON document."""
        resp.status = status
        resp.content_type = falcon.MEDIA_JSON
        resp.data = msjson.encode(data)
