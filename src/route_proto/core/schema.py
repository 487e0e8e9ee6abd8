from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from route_proto.core.types import is_primitive
from route_proto.models import RouteSchema, SchemaNode


class SchemaKind(str, Enum):
    OBJECT = "object"
    ARRAY = "array"
    UNION = "union"
    ANY = "any"
    PRIMITIVE = "primitive"


def classify(schema: Any) -> SchemaKind | None:
    """Return the shape of a schema node, or ``None`` if it is not recognized."""
    if not isinstance(schema, dict):
        return None
    kind = schema.get("type")
    if kind == "object":
        return SchemaKind.OBJECT
    if kind == "array":
        return SchemaKind.ARRAY
    if isinstance(schema.get("oneOf"), list):
        return SchemaKind.UNION
    if not schema:
        return SchemaKind.ANY
    if is_primitive(kind):
        return SchemaKind.PRIMITIVE
    return None


@dataclass
class ParamBag:
    """Merged input fields of one route's request message."""

    properties: dict[str, SchemaNode] = field(default_factory=dict)
    required: set[str] = field(default_factory=set)

    def add(self, schema: SchemaNode | None) -> None:
        # dict.update keeps the first position of a repeated key
        if not schema:
            return
        self.properties.update(schema.get("properties") or {})
        self.required.update(schema.get("required") or [])

    def is_empty(self) -> bool:
        return not self.properties

    def as_schema(self) -> SchemaNode:
        return {
            "type": "object",
            "properties": self.properties,
            "required": sorted(self.required),
        }


def build_param_bag(route_schema: RouteSchema | None) -> ParamBag:
    """Merge body, path and query-string properties in that order."""
    bag = ParamBag()
    if route_schema is not None:
        bag.add(route_schema.body)
        bag.add(route_schema.params)
        bag.add(route_schema.querystring)
    return bag


def select_response_schema(route_schema: RouteSchema, status: str = "200") -> SchemaNode | None:
    """Pick the success response schema: ``status``, else the first 2xx key, else ``default``."""
    responses = route_schema.response or {}
    if status in responses:
        return responses[status]
    for key, schema in responses.items():
        if key.startswith("2"):
            return schema
    return responses.get("default")
