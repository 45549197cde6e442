"""Falcon integration dispatching requests to resolved controllers."""

from __future__ import annotations

import inspect
import logging
import re
import typing as typ

import falcon
import msgspec.json as msjson

from .resolver import as_callable

if typ.TYPE_CHECKING:
    import falcon.asgi

    from .resolver import BaseControllerResolver
    from .routing import ControllerRouter

logger = logging.getLogger(__name__)

ROUTE_ATTRIBUTE = "_route"
ROUTE_PARAMS_ATTRIBUTE = "_route_params"
ROUTER_SERVICE_ID = "router"


class ControllerSink:
    """ASGI sink that routes, resolves and invokes controllers.

    Controllers are called as ``controller(req, resp, **params)`` and may be
    plain functions or coroutines. A return value other than ``None`` is
    encoded as JSON into ``resp.data``.
    """

    def __init__(
        self, router: ControllerRouter, resolver: BaseControllerResolver
    ) -> None:
        self.router = router
        self.resolver = resolver
        self._encoder = msjson.Encoder()

    async def __call__(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, **kwargs: object
    ) -> None:
        """Handle ``req`` with the controller its path routes to."""
        match = self.router.match(req.path)
        if match is None:
            raise falcon.HTTPNotFound

        setattr(req.context, self.resolver.attribute, match.controller)
        setattr(req.context, ROUTE_ATTRIBUTE, match.name)
        setattr(req.context, ROUTE_PARAMS_ATTRIBUTE, dict(match.params))

        controller = self.resolver.resolve(req)
        if controller is None:
            raise falcon.HTTPNotFound

        logger.debug("Dispatching %s to %r", req.path, controller)
        result = as_callable(controller)(req, resp, **match.params)
        if inspect.isawaitable(result):
            result = await result
        if result is not None:
            resp.content_type = falcon.MEDIA_JSON
            resp.data = self._encoder.encode(result)


def install(
    app: falcon.asgi.App,
    router: ControllerRouter,
    resolver: BaseControllerResolver,
    *,
    prefix: str = "/",
) -> ControllerSink:
    """Mount a :class:`ControllerSink` for ``router`` on ``app``.

    ``prefix`` is matched literally at the start of the request path. When
    ``resolver`` is backed by a container without a ``"router"`` service,
    ``router`` is registered there so controllers can build URLs.
    """
    container = getattr(resolver, "container", None)
    if container is not None and not container.has(ROUTER_SERVICE_ID):
        container.set(ROUTER_SERVICE_ID, router)

    sink = ControllerSink(router, resolver)
    app.add_sink(sink, re.compile(re.escape(prefix)))
    return sink
