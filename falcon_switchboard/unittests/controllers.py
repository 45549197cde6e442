"""Controllers shared by the resolver and sink tests.

They live in an importable module so identifiers can reference them by
dotted path.
"""

from __future__ import annotations

import abc
import typing as typ

from falcon_switchboard import AbstractController, ContainerAwareMixin

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    import falcon

    from falcon_switchboard.protocols import ContainerLike


class ContainerAwareController(ContainerAwareMixin):
    """Container-aware controller that is also invokable."""

    def index(self, req: object, resp: object) -> dict[str, str]:
        """Return a fixed payload."""
        return {"page": "index"}

    def __call__(self, req: object, resp: object) -> dict[str, str]:
        return {"page": "invoked"}


class SubscriberController(AbstractController):
    """Service subscriber with a single action."""

    def foo_action(self, req: object, resp: object) -> None:
        """Do nothing."""


class DummyController(AbstractController):
    """Service subscriber that also exposes its container."""

    def get_container(self) -> ContainerLike | None:
        """Return the container set on this controller."""
        return self.container

    def foo_action(self, req: object, resp: object) -> None:
        """Do nothing."""


class GreetingController:
    """Plain controller with a greeting action."""

    def hello(self, req: object, resp: object, name: str = "world") -> dict[str, str]:
        """Greet ``name``."""
        return {"greeting": f"hello {name}"}

    def goodbye(self, req: object, resp: object) -> dict[str, str]:
        """Say goodbye."""
        return {"greeting": "goodbye"}


class NotInvokableController:
    """Controller with actions but no ``__call__``."""

    def list_action(self, req: object, resp: object) -> None:
        """Do nothing."""

    def show_action(self, req: object, resp: object) -> None:
        """Do nothing."""


class RequiredArgumentsController:
    """Controller that cannot be built without a repository."""

    def __init__(self, repository: object) -> None:
        self.repository = repository

    @staticmethod
    def static_action(req: object, resp: object) -> dict[str, str]:
        """Answer without an instance."""
        return {"kind": "static"}

    @classmethod
    def class_action(cls, req: object, resp: object) -> dict[str, str]:
        """Answer with the class only."""
        return {"kind": cls.__name__}

    def instance_action(self, req: object, resp: object) -> object:
        """Return the injected repository."""
        return self.repository


class AbstractGreetingController(abc.ABC):
    """Controller base that only concrete subclasses can serve."""

    @abc.abstractmethod
    def hello(self, req: object, resp: object) -> dict[str, str]:
        """Greet the caller."""

    @staticmethod
    def ping(req: object, resp: object) -> dict[str, str]:
        """Answer without an instance."""
        return {"ping": "pong"}


GreetingAlias = GreetingController


class AsyncController:
    """Controller with a coroutine action."""

    async def show(self, req: object, resp: object, item_id: str) -> dict[str, str]:
        """Echo ``item_id``."""
        return {"item": item_id}


class ProfileController(AbstractController):
    """Subscriber that uses the router and a greeting service."""

    @classmethod
    def get_subscribed_services(cls) -> cabc.Mapping[str, str]:
        """Add the greeting service to the defaults."""
        return {**super().get_subscribed_services(), "greeter": "app.greeter"}

    def show(self, req: falcon.Request, resp: falcon.Response, user: str) -> None:
        """Write a greeting for ``user`` as JSON."""
        greeter = typ.cast("typ.Callable[[str], str]", self.get("greeter"))
        payload = {
            "message": greeter(user),
            "self": self.url_for("profile", user=user),
        }
        self.json(resp, payload)

    def go_home(self, req: falcon.Request, resp: falcon.Response) -> None:
        """Redirect to the greeting route."""
        self.redirect_to_route("greet", name="home")


def home(req: object, resp: object) -> dict[str, str]:
    """Function controller."""
    return {"page": "home"}


NOT_A_CONTROLLER = 42
