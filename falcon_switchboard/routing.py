"""Path routing to controller identifiers.

This module implements :class:`ControllerRouter`, which maps URI templates to
controller references. Helper functions handle template compilation and path
normalization so that trailing and non-trailing slashes match equally. The
router only decides *which* controller a path refers to; turning that
reference into a callable is the job of
:class:`~falcon_switchboard.resolver.ControllerResolver`.
"""

from __future__ import annotations

import dataclasses as dc
import functools
import re
import threading
import typing as typ


def _replace_param_in_template(match: re.Match[str], template: str) -> str:
    """Return a regex group for ``match`` ensuring the param is non-empty."""
    param_name = match.group(1)
    if not param_name:
        msg = f"Empty parameter name in template: {template}"
        raise ValueError(msg)
    if not param_name.isidentifier():
        msg = f"Invalid parameter name {param_name!r} in template: {template}"
        raise ValueError(msg)
    return f"(?P<{param_name}>[^/]+)"


def compile_uri_template(template: str) -> re.Pattern[str]:
    """Compile a simple URI template into a regex pattern."""
    pattern = re.sub(
        r"{([^}]*)}",
        functools.partial(_replace_param_in_template, template=template),
        template.rstrip("/"),
    )
    return re.compile(f"^{pattern}/?$")


def _normalize_path(path: str) -> str:
    """Ensure the path has a leading slash."""
    if not path.startswith("/"):
        path = f"/{path}"
    return path


def _canonical_path(path: str) -> str:
    """Return the normalized path without a trailing slash."""
    path = _normalize_path(path)
    if path != "/":
        path = path.rstrip("/")
    return path


@dc.dataclass(frozen=True, slots=True)
class RouteMatch:
    """Outcome of matching a request path."""

    controller: object
    params: dict[str, str]
    name: str | None = None


class ControllerRouter:
    """Route request paths to controller references.

    Routes are evaluated in the order they were added. If multiple patterns
    overlap, the first match wins. Register more specific paths before more
    general ones to control precedence. A template ``"/foo"`` matches ``"/foo"``
    and ``"/foo/"`` equally; if a trailing slash is included in the template,
    generated URLs preserve it.

    ``controller`` may be anything the resolver accepts: a
    ``"target::method"`` string, a ``(target, method)`` pair or a callable.
    """

    @dc.dataclass
    class _Route:
        template: str
        canonical: str
        pattern: re.Pattern[str]
        controller: object
        name: str | None

    def __init__(self) -> None:
        self._routes: list[ControllerRouter._Route] = []
        self._names: dict[str, str] = {}
        self._lock = threading.Lock()

    def add_route(
        self, path: str, controller: object, *, name: str | None = None
    ) -> None:
        """Register ``controller`` to handle ``path``."""
        if controller is None or controller == "":
            msg = "controller must not be empty"
            raise TypeError(msg)

        normalized = _normalize_path(path)
        canonical = _canonical_path(normalized)
        pattern = compile_uri_template(canonical)

        with self._lock:
            self._check_route_conflicts(canonical, name, normalized)
            route = ControllerRouter._Route(
                normalized, canonical, pattern, controller, name
            )
            self._routes.append(route)
            if name:
                self._names[name] = normalized

    def _check_route_conflicts(
        self, canonical: str, name: str | None, path: str
    ) -> None:
        """Raise if ``canonical`` or ``name`` already exists.

        Callers must hold :attr:`_lock` while invoking this helper.
        """
        if any(r.canonical == canonical for r in self._routes):
            msg = f"route path {path!r} already registered"
            raise ValueError(msg)
        if name and name in self._names:
            msg = f"route name {name!r} already registered"
            raise ValueError(msg)

    def match(self, path: str) -> RouteMatch | None:
        """Return the first route matching ``path``, if any."""
        path = _normalize_path(path)
        for route in self._routes:
            if found := route.pattern.match(path):
                return RouteMatch(route.controller, found.groupdict(), route.name)
        return None

    def url_for(self, name: str, /, **params: object) -> str:
        """Return the URL path associated with ``name`` formatted with ``params``."""
        try:
            template = self._names[name]
        except KeyError as exc:
            msg = f"no route registered with name {name!r}"
            raise KeyError(msg) from exc

        return _normalize_path(template.format(**params))

    @property
    def routes(self) -> tuple[tuple[str, typ.Any], ...]:
        """Registered ``(template, controller)`` pairs in precedence order."""
        return tuple((route.template, route.controller) for route in self._routes)
