"""Tests for AbstractController helpers and subscriber registration."""

from __future__ import annotations

import falcon
import falcon.testing
import msgspec.json as msjson
import pytest

from falcon_switchboard import (
    CONTROLLER_ATTRIBUTE,
    ContainerNotSetLogicError,
    ControllerResolver,
    ControllerRouter,
    ServiceContainer,
    ServiceLocator,
    ServiceNotFoundError,
)
from falcon_switchboard.unittests.controllers import (
    ProfileController,
    SubscriberController,
)
from falcon_switchboard.utils import qualified_name


@pytest.fixture
def container() -> ServiceContainer:
    """Return a container with a router and greeting service."""
    container = ServiceContainer()
    router = ControllerRouter()
    router.add_route("/profiles/{user}", "profiles::show", name="profile")
    router.add_route("/greet/{name}", "greetings::hello", name="greet")
    container.set("router", router)
    container.set("app.greeter", lambda user: f"hi {user}")
    return container


def test_register_subscriber_sets_locator(container: ServiceContainer) -> None:
    """Registered subscribers receive a locator of their services."""
    container.register_subscriber(ProfileController)

    controller = container.get(ProfileController)

    assert isinstance(controller, ProfileController)
    assert isinstance(controller.container, ServiceLocator)
    assert controller.has("greeter")
    assert controller.get("router") is container.get("router")


def test_register_subscriber_by_id_requires_class(container: ServiceContainer) -> None:
    """A string id needs the subscriber class alongside it."""
    with pytest.raises(TypeError, match="cls is required"):
        container.register_subscriber("profiles")


def test_subscriber_cannot_reach_unsubscribed_services(
    container: ServiceContainer,
) -> None:
    """The locator hides services the controller did not ask for."""
    container.register_subscriber(SubscriberController)
    controller = container.get(SubscriberController)
    assert isinstance(controller, SubscriberController)

    with pytest.raises(ServiceNotFoundError) as excinfo:
        controller.get("app.greeter")

    assert excinfo.value.name == "app.greeter"
    assert controller.has("app.greeter") is False


def test_registered_subscriber_resolves(container: ServiceContainer) -> None:
    """A subscriber registered properly passes the resolver's guard."""
    container.register_subscriber("profiles", ProfileController)
    resolver = ControllerResolver(container)
    req = falcon.testing.create_req(path="/profiles/ada")
    setattr(req.context, CONTROLLER_ATTRIBUTE, "profiles::show")

    controller = resolver.resolve(req)

    assert controller == (container.get("profiles"), "show")


def test_helpers_without_container_raise() -> None:
    """Service helpers need a container."""
    controller = SubscriberController()

    with pytest.raises(
        ContainerNotSetLogicError, match="has no container set"
    ) as excinfo:
        controller.get("router")

    assert excinfo.value.identifier == qualified_name(SubscriberController)


def test_set_container_returns_previous() -> None:
    """``set_container`` hands back what it replaced."""
    controller = SubscriberController()
    first = ServiceContainer()
    second = ServiceContainer()

    assert controller.set_container(first) is None
    assert controller.set_container(second) is first
    assert controller.has_container()


def test_url_for_and_json(container: ServiceContainer) -> None:
    """``url_for`` uses the router; ``json`` writes an encoded body."""
    container.register_subscriber(ProfileController)
    controller = container.get(ProfileController)
    assert isinstance(controller, ProfileController)
    resp = falcon.Response()

    controller.show(falcon.testing.create_req(), resp, user="ada")

    assert resp.content_type == falcon.MEDIA_JSON
    assert msjson.decode(resp.data) == {
        "message": "hi ada",
        "self": "/profiles/ada",
    }


def test_redirect_to_route(container: ServiceContainer) -> None:
    """``redirect_to_route`` raises a 302 pointing at the route."""
    container.register_subscriber(ProfileController)
    controller = container.get(ProfileController)
    assert isinstance(controller, ProfileController)

    with pytest.raises(falcon.HTTPFound) as excinfo:
        controller.go_home(falcon.testing.create_req(), falcon.Response())

    headers = {key.lower(): value for key, value in excinfo.value.headers.items()}
    assert headers["location"] == "/greet/home"


def test_url_for_accepts_route_name_placeholder(container: ServiceContainer) -> None:
    """Route parameters may share the helper's own argument names."""
    router = container.get("router")
    assert isinstance(router, ControllerRouter)
    router.add_route("/routes/{route_name}", "app.routes::show", name="route")
    container.register_subscriber(ProfileController)
    controller = container.get(ProfileController)
    assert isinstance(controller, ProfileController)

    assert controller.url_for("greet", name="ada") == "/greet/ada"
    assert controller.url_for("route", route_name="home") == "/routes/home"
