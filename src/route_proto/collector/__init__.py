from route_proto.collector.fastapi_adapter import FastAPIRouteCollector, register_proto_generation
from route_proto.collector.openapi import SchemaNormalizer, routes_from_openapi

__all__ = [
    "FastAPIRouteCollector",
    "SchemaNormalizer",
    "register_proto_generation",
    "routes_from_openapi",
]
