"""Assembly of messages and the service block into one proto document."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from route_proto.core.errors import DuplicateRpcNameError, MissingServiceNameError
from route_proto.core.messages import INDENT, MessageCompiler
from route_proto.core.naming import generate_rpc_name
from route_proto.core.ports.collector import RouteCollector
from route_proto.core.rpc import render_rpc
from route_proto.core.schema import SchemaKind, build_param_bag, classify, select_response_schema
from route_proto.models import CompilerOptions, RouteDescriptor, RouteSchema, SchemaNode

logger = logging.getLogger(__name__)

SERVICE_BLOCK_NAME = "Service"
RESPONSE_WRAPPER_FIELD = "data"


def resolve_service_name(explicit: str | None, title: str | None) -> str:
    """Return the explicit service name, else the schema document title."""
    service_name = explicit or title
    if not service_name:
        raise MissingServiceNameError()
    return service_name


def render_service(service_name: str, rpcs: Sequence[str]) -> str:
    body = "\n\n".join("\n".join(f"{INDENT}{line}" for line in rpc.split("\n")) for rpc in rpcs)
    header = f'service {SERVICE_BLOCK_NAME} {{\n{INDENT}option (msp.net).alias = "{service_name}";'
    if body:
        return f"{header}\n\n{body}\n}}"
    return f"{header}\n}}"


def _response_schema(route_schema: RouteSchema, status: str) -> SchemaNode:
    schema = select_response_schema(route_schema, status)
    if schema is None:
        return {"type": "object", "properties": {}}
    if classify(schema) is SchemaKind.OBJECT:
        return schema
    return {"type": "object", "properties": {RESPONSE_WRAPPER_FIELD: schema}}


def compile_document(
    routes: Sequence[RouteDescriptor],
    service_name: str,
    options: CompilerOptions | None = None,
    log: logging.Logger | None = None,
) -> str:
    """Compile the routes into a single proto document.

    Any error aborts the whole pass; nothing is returned for a partial set of routes.
    """
    options = options or CompilerOptions()
    log = log or logger
    compiler = MessageCompiler(presence=options.presence, log=log)

    messages: list[str] = []
    rpcs: list[str] = []
    seen: set[str] = set()

    for route in routes:
        rpc_name = generate_rpc_name(route.method, route.url)
        if rpc_name in seen:
            if options.duplicate_names == "reject":
                raise DuplicateRpcNameError(rpc_name)
            log.warning("Duplicate RPC name %s for %s %s", rpc_name, route.method, route.url)
        seen.add(rpc_name)

        params = build_param_bag(route.route_schema)
        log.debug("Route %s %s -> %s, params: %s", route.method, route.url, rpc_name, list(params.properties))
        try:
            rpcs.append(
                render_rpc(route, rpc_name, service_name, not params.is_empty(), options.default_visibility)
            )
            if not params.is_empty():
                messages.append(compiler.render_message(f"{rpc_name}Request", params.as_schema()))
            if route.route_schema is not None:
                schema = _response_schema(route.route_schema, options.response_status)
                messages.append(compiler.render_message(f"{rpc_name}Response", schema))
        except Exception:
            log.error("Failed to compile route %s %s", route.method, route.url)
            raise

    log.info("Compiled %d rpc(s) and %d message(s) for service %s", len(rpcs), len(messages), service_name)
    return "\n\n".join([*messages, render_service(service_name, rpcs)])


def generate(
    collector: RouteCollector,
    callback: Callable[[str], object],
    options: CompilerOptions | None = None,
    log: logging.Logger | None = None,
) -> str:
    """Run one pass over a collector's routes and hand the document to ``callback`` once."""
    options = options or CompilerOptions()
    service_name = resolve_service_name(options.service_name, collector.title())
    text = compile_document(collector.routes(), service_name, options, log)
    callback(text)
    return text
