"""Turn an OpenAPI document into route descriptors.

Component ``$ref`` pointers are inlined and the pydantic-specific union
encodings (``anyOf`` with ``null``, single-item ``allOf``) are reduced to
the plain object/array/``oneOf``/primitive shapes the compiler understands.
"""

from __future__ import annotations

from typing import Any

from route_proto.core.naming import normalize_url_template
from route_proto.models import RouteDescriptor, RouteSchema, SchemaNode

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")
JSON_MEDIA_TYPE = "application/json"
VISIBILITY_EXTENSION = "x-visibility"

_ANNOTATION_KEYS = frozenset({"title", "description", "default", "examples", "example", "discriminator"})
_REF_PREFIX = "#/components/schemas/"


class SchemaNormalizer:
    """Inline component references and strip annotation-only keys."""

    def __init__(self, components: dict[str, Any] | None = None) -> None:
        self._components = components or {}

    def normalize(self, schema: Any, _resolving: frozenset[str] = frozenset()) -> Any:
        if isinstance(schema, list):
            return [self.normalize(item, _resolving) for item in schema]
        if not isinstance(schema, dict):
            return schema

        ref = schema.get("$ref")
        if isinstance(ref, str) and ref.startswith(_REF_PREFIX):
            name = ref[len(_REF_PREFIX) :]
            # recursive models cannot be inlined, degrade to "any"
            if name in _resolving or name not in self._components:
                return {}
            return self.normalize(self._components[name], _resolving | {name})

        node = {
            key: self.normalize(value, _resolving)
            for key, value in schema.items()
            if key not in _ANNOTATION_KEYS and key != "properties"
        }
        if "properties" in schema:
            node["properties"] = {
                name: self.normalize(value, _resolving) for name, value in schema["properties"].items()
            }

        if "anyOf" in node:
            variants = [v for v in node.pop("anyOf") if v != {"type": "null"}]
            if len(variants) == 1:
                node.update(variants[0])
            elif variants:
                node["oneOf"] = variants
        all_of = node.pop("allOf", None)
        if all_of and len(all_of) == 1:
            node.update(all_of[0])
        elif all_of:
            node["allOf"] = all_of
        return node


def _parameters_schema(
    parameters: list[dict[str, Any]], location: str, normalizer: SchemaNormalizer
) -> SchemaNode | None:
    selected = [p for p in parameters if p.get("in") == location]
    if not selected:
        return None
    return {
        "type": "object",
        "properties": {p["name"]: normalizer.normalize(p.get("schema", {})) for p in selected},
        "required": [p["name"] for p in selected if p.get("required")],
    }


def _json_content_schema(container: dict[str, Any], normalizer: SchemaNormalizer) -> SchemaNode | None:
    content = container.get("content") or {}
    media = content.get(JSON_MEDIA_TYPE)
    if media is None:
        return None
    return normalizer.normalize(media.get("schema", {}))


def operation_schema(operation: dict[str, Any], normalizer: SchemaNormalizer) -> RouteSchema:
    parameters = operation.get("parameters") or []
    body = None
    if "requestBody" in operation:
        body = _json_content_schema(operation["requestBody"], normalizer)

    responses: dict[str, SchemaNode] = {}
    for status, response in (operation.get("responses") or {}).items():
        schema = _json_content_schema(response, normalizer)
        if schema is not None:
            responses[str(status)] = schema

    return RouteSchema(
        body=body,
        params=_parameters_schema(parameters, "path", normalizer),
        querystring=_parameters_schema(parameters, "query", normalizer),
        response=responses or None,
    )


def routes_from_openapi(document: dict[str, Any]) -> list[RouteDescriptor]:
    """Return one descriptor per (path, method) in document order."""
    normalizer = SchemaNormalizer((document.get("components") or {}).get("schemas"))
    routes: list[RouteDescriptor] = []
    for path, item in (document.get("paths") or {}).items():
        for method in HTTP_METHODS:
            operation = item.get(method)
            if operation is None:
                continue
            routes.append(
                RouteDescriptor(
                    method=method,
                    url=normalize_url_template(path),
                    schema=operation_schema(operation, normalizer),
                    visibility=operation.get(VISIBILITY_EXTENSION),
                )
            )
    return routes
