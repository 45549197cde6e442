"""Dependency injection container backing controller resolution."""

from __future__ import annotations

import collections.abc as cabc
import inspect
import logging
import threading
import typing as typ

from .utils import closest_match, qualified_name

if typ.TYPE_CHECKING:  # pragma: no cover - used only for static analysis
    from .controller import ServiceSubscriber

__all__ = [
    "ServiceContainer",
    "ServiceLocator",
    "ServiceNotFoundError",
    "service_id",
]

logger = logging.getLogger(__name__)

T = typ.TypeVar("T")

ServiceKey = typ.Union[str, type]


def service_id(key: ServiceKey) -> str:
    """Normalise ``key`` to a string id; classes map to their qualified name."""
    if isinstance(key, type):
        return qualified_name(key)
    return key


class ServiceNotFoundError(LookupError):
    """Raised when a requested dependency is not registered."""

    name: str

    def __init__(self, name: str, *, suggestion: str | None = None) -> None:
        self.name = name
        message = f"service {name!r} is not registered"
        if suggestion is not None:
            message += f"; did you mean {suggestion!r}?"
        super().__init__(message)


class _Definition:
    """Lazily built shared service."""

    __slots__ = ("factory", "instance", "built")

    def __init__(self, factory: cabc.Callable[..., object]) -> None:
        self.factory = factory
        self.instance: object = None
        self.built = False


class ServiceContainer:
    """Registry mapping service ids to shared service instances.

    Services are stored either as ready values via :meth:`set` or as factories
    via :meth:`register_factory`. Factories are invoked at most once; the
    first successful :meth:`get` stores the instance for later lookups.
    """

    SELF_ID = "service_container"

    def __init__(self) -> None:
        self._services: dict[str, object] = {}
        self._definitions: dict[str, _Definition] = {}
        self._private: set[str] = set()
        self._signature_cache: dict[
            cabc.Callable[..., object], inspect.Signature
        ] = {}
        self._lock = threading.RLock()
        self._services[self.SELF_ID] = self

    @property
    def private_ids(self) -> frozenset[str]:
        """Ids registered as private; they exist but cannot be fetched."""
        return frozenset(self._private)

    def set(self, key: ServiceKey, service: object, *, public: bool = True) -> None:
        """Expose ``service`` under ``key``."""
        name = service_id(key)
        with self._lock:
            self._definitions.pop(name, None)
            self._services[name] = service
            self._set_visibility(name, public=public)

    def register_factory(
        self,
        key: ServiceKey,
        factory: cabc.Callable[..., object],
        *,
        public: bool = True,
    ) -> None:
        """Build the service for ``key`` from ``factory`` on first use."""
        if not callable(factory):
            msg = "factory must be callable"
            raise TypeError(msg)
        name = service_id(key)
        with self._lock:
            self._services.pop(name, None)
            self._definitions[name] = _Definition(factory)
            self._set_visibility(name, public=public)

    def register_subscriber(
        self,
        key: ServiceKey,
        cls: type[ServiceSubscriber] | None = None,
    ) -> None:
        """Register a service subscriber wired to a locator of its services.

        ``cls`` defaults to ``key`` when ``key`` is a class.
        """
        if cls is None:
            if not isinstance(key, type):
                msg = "cls is required when registering a subscriber by id"
                raise TypeError(msg)
            cls = typ.cast("type[ServiceSubscriber]", key)
        subscriber_cls = cls

        def build() -> object:
            instance = self.create_instance(subscriber_cls)
            instance.set_container(
                self.locator(subscriber_cls.get_subscribed_services())
            )
            return instance

        self.register_factory(key, build)

    def has(self, key: ServiceKey) -> bool:
        """Return ``True`` if ``key`` names a public service."""
        name = service_id(key)
        if name in self._private:
            return False
        return name in self._services or name in self._definitions

    def get(self, key: ServiceKey) -> object:
        """Return the registered dependency named ``key``."""
        name = service_id(key)
        if not self.has(name):
            raise ServiceNotFoundError(name, suggestion=self._suggest(name))
        try:
            return self._services[name]
        except KeyError:
            return self._build(name)

    def locator(
        self, services: cabc.Mapping[str, str] | cabc.Iterable[str]
    ) -> ServiceLocator:
        """Return a :class:`ServiceLocator` restricted to ``services``."""
        return ServiceLocator(self, services)

    def create_instance(self, factory: cabc.Callable[..., T]) -> T:
        """Call ``factory`` injecting registered dependencies by parameter name."""
        target = typ.cast(
            "cabc.Callable[..., T]",
            getattr(factory, "func", factory),
        )
        args = getattr(factory, "args", ())
        kwargs = dict(getattr(factory, "keywords", {}) or {})

        signature = self._signature_cache.get(target)
        if signature is None:
            signature = inspect.signature(target)
            self._signature_cache[target] = signature

        for parameter in signature.parameters.values():
            if parameter.name == "self":
                continue
            if parameter.kind in (
                inspect.Parameter.POSITIONAL_ONLY,
                inspect.Parameter.VAR_POSITIONAL,
                inspect.Parameter.VAR_KEYWORD,
            ):
                continue
            if parameter.name in kwargs:
                continue
            if self.has(parameter.name):
                kwargs[parameter.name] = self.get(parameter.name)

        return target(*args, **kwargs)

    def _build(self, name: str) -> object:
        with self._lock:
            if name in self._services:
                return self._services[name]
            definition = self._definitions[name]
            if not definition.built:
                logger.debug("Instantiating service %r", name)
                definition.instance = self.create_instance(definition.factory)
                definition.built = True
            return definition.instance

    def _set_visibility(self, name: str, *, public: bool) -> None:
        if public:
            self._private.discard(name)
        else:
            self._private.add(name)

    def _suggest(self, name: str) -> str | None:
        public = [
            known
            for known in (*self._services, *self._definitions)
            if known not in self._private
        ]
        return closest_match(name, public)


class ServiceLocator:
    """Read-only view over a subset of a container's services.

    ``services`` maps the names a consumer asks for to container ids. A plain
    iterable of ids exposes each id under its own name.
    """

    def __init__(
        self,
        container: ServiceContainer,
        services: cabc.Mapping[str, str] | cabc.Iterable[str],
    ) -> None:
        if isinstance(services, cabc.Mapping):
            aliases = {
                str(alias): service_id(target) for alias, target in services.items()
            }
        else:
            aliases = {service_id(name): service_id(name) for name in services}
        self._container = container
        self._aliases = aliases

    def has(self, name: str) -> bool:
        """Return ``True`` if ``name`` is subscribed and available."""
        target = self._aliases.get(name)
        return target is not None and self._container.has(target)

    def get(self, name: str) -> object:
        """Return the subscribed service ``name``."""
        target = self._aliases.get(name)
        if target is None:
            raise ServiceNotFoundError(
                name, suggestion=closest_match(name, self._aliases)
            )
        return self._container.get(target)

    def provided_services(self) -> dict[str, str]:
        """Return the alias to service id mapping."""
        return dict(self._aliases)
