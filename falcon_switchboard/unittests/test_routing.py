"""Tests for the ControllerRouter class."""

from __future__ import annotations

import pytest

from falcon_switchboard import ControllerRouter
from falcon_switchboard.routing import compile_uri_template


def test_parameterized_route_and_url_for() -> None:
    """Verify parameter matching and URL reversal."""
    router = ControllerRouter()
    router.add_route("/rooms/{room}", "app.rooms::show", name="room")

    assert router.url_for("room", room="abc") == "/rooms/abc"
    match = router.match("/rooms/42")
    assert match is not None
    assert match.controller == "app.rooms::show"
    assert match.params == {"room": "42"}
    assert match.name == "room"

    with pytest.raises(KeyError) as excinfo:
        router.url_for("room")
    assert "room" in str(excinfo.value)


def test_trailing_and_nontrailing_slash_routes() -> None:
    """Test route matching and url_for with trailing and non-trailing slashes."""
    router = ControllerRouter()
    router.add_route("/rooms/{room}/", "app.rooms::show", name="room_trailing")
    router.add_route("/rooms2/{room}", "app.rooms::list", name="room_nontrailing")

    assert router.url_for("room_trailing", room="xyz") == "/rooms/xyz/"
    assert router.url_for("room_nontrailing", room="uvw") == "/rooms2/uvw"

    trailing = router.match("/rooms/123")
    non_trailing = router.match("/rooms2/456/")
    assert trailing is not None
    assert trailing.params == {"room": "123"}
    assert non_trailing is not None
    assert non_trailing.params == {"room": "456"}


def test_unknown_name_raises() -> None:
    """Reversing an unknown route name raises ``KeyError``."""
    router = ControllerRouter()

    with pytest.raises(KeyError, match="no route registered"):
        router.url_for("missing")


def test_no_match_returns_none() -> None:
    """Unmatched paths yield ``None``."""
    router = ControllerRouter()
    router.add_route("/ok", "app.ok")

    assert router.match("/missing") is None
    assert router.match("/ok/extra") is None


def test_first_registered_route_wins() -> None:
    """Overlapping templates resolve in registration order."""
    router = ControllerRouter()
    router.add_route("/users/me", "app.users::me")
    router.add_route("/users/{user}", "app.users::show")

    me = router.match("/users/me")
    other = router.match("/users/ada")

    assert me is not None
    assert me.controller == "app.users::me"
    assert other is not None
    assert other.controller == "app.users::show"


def test_root_route() -> None:
    """The root template matches only the root path."""
    router = ControllerRouter()
    router.add_route("/", "app.home")

    assert router.match("/") is not None
    assert router.match("") is not None
    assert router.match("/other") is None


def test_add_route_duplicate_name_and_path() -> None:
    """Duplicate names or paths should raise ``ValueError``."""
    router = ControllerRouter()
    router.add_route("/a", "app.a", name="dup")
    with pytest.raises(ValueError, match="already registered"):
        router.add_route("/b", "app.b", name="dup")

    with pytest.raises(ValueError, match="already registered"):
        router.add_route("/a/", "app.c")


def test_add_route_requires_controller() -> None:
    """Empty controller references are rejected."""
    router = ControllerRouter()

    with pytest.raises(TypeError):
        router.add_route("/x", "")


@pytest.mark.parametrize("template", ["/rooms/{}", "/rooms/{bad-name}"])
def test_invalid_parameter_names(template: str) -> None:
    """Template parameters must be valid identifiers."""
    with pytest.raises(ValueError, match="parameter name"):
        compile_uri_template(template)


def test_routes_preserve_registration_order() -> None:
    """The ``routes`` view lists templates in precedence order."""
    router = ControllerRouter()
    router.add_route("b", "app.b")
    router.add_route("/a", "app.a")

    assert router.routes == (("/b", "app.b"), ("/a", "app.a"))


def test_url_for_accepts_name_placeholder() -> None:
    """A ``{name}`` placeholder does not clash with the route name argument."""
    router = ControllerRouter()
    router.add_route("/greet/{name}", "app.greeting::hello", name="greet")

    assert router.url_for("greet", name="ada") == "/greet/ada"
