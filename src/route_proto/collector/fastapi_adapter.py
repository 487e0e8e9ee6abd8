from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable, Sequence
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from route_proto.collector.openapi import routes_from_openapi
from route_proto.core.document import generate
from route_proto.core.errors import MissingCallbackError
from route_proto.models import CompilerOptions, RouteDescriptor

logger = logging.getLogger(__name__)


class FastAPIRouteCollector:
    """Collect route descriptors from a FastAPI application's OpenAPI document.

    Implements the ``RouteCollector`` protocol. Routes excluded from the schema
    (``include_in_schema=False``) are not collected.
    """

    def __init__(self, app: FastAPI) -> None:
        self._app = app
        self._document: dict[str, Any] | None = None

    def _openapi(self) -> dict[str, Any]:
        if self._document is None:
            self._document = self._app.openapi()
        return self._document

    def routes(self) -> Sequence[RouteDescriptor]:
        return routes_from_openapi(self._openapi())

    def title(self) -> str | None:
        info = self._openapi().get("info") or {}
        return info.get("title")


def register_proto_generation(
    app: FastAPI,
    callback: Callable[[str], object],
    service_name: str | None = None,
    **options: Any,
) -> None:
    """Generate the proto document for ``app`` once its lifespan starts.

    By then every route has been registered. ``callback`` receives the document
    text exactly once; a compilation error aborts application startup.
    """
    if not callable(callback):
        raise MissingCallbackError(callback)
    compiler_options = CompilerOptions(service_name=service_name, **options)

    original_lifespan = app.router.lifespan_context

    @asynccontextmanager
    async def _lifespan(lifespan_app: Any) -> AsyncIterator[Any]:
        async with original_lifespan(lifespan_app) as state:
            logger.info("Route registration complete, generating proto for %s", app.title)
            generate(FastAPIRouteCollector(app), callback, compiler_options)
            yield state

    app.router.lifespan_context = _lifespan
