"""Tests for parsing controller identifiers."""

from __future__ import annotations

import pytest

from falcon_switchboard import ControllerIdentifier, ControllerNotFoundError


@pytest.mark.parametrize(
    ("value", "target", "method"),
    [
        ("app.controllers.Blog::show", "app.controllers.Blog", "show"),
        ("app.controllers:Blog::show", "app.controllers:Blog", "show"),
        ("blog.controller::show", "blog.controller", "show"),
        ("app.controllers.Blog", "app.controllers.Blog", None),
        ("  blog.controller :: show ", "blog.controller", "show"),
        ("a::b::c", "a", "b::c"),
    ],
)
def test_parse(value: str, target: str, method: str | None) -> None:
    """Identifiers split on the first separator only."""
    identifier = ControllerIdentifier.parse(value)

    assert identifier.target == target
    assert identifier.method == method


@pytest.mark.parametrize("value", ["", "   ", "::show", "blog.controller::"])
def test_parse_rejects_incomplete_identifiers(value: str) -> None:
    """Empty targets or methods cannot be resolved."""
    with pytest.raises(ControllerNotFoundError):
        ControllerIdentifier.parse(value)


def test_custom_separator() -> None:
    """Another separator can be used instead of ``::``."""
    identifier = ControllerIdentifier.parse("blog#show", separator="#")

    assert identifier == ControllerIdentifier("blog", "show")
    assert identifier.format(separator="#") == "blog#show"


def test_str_round_trips_default_form() -> None:
    """``str`` renders the canonical identifier."""
    assert str(ControllerIdentifier("blog", "show")) == "blog::show"
    assert str(ControllerIdentifier("blog")) == "blog"
