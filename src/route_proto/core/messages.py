"""Recursive rendering of schema nodes into proto ``message`` declarations.

Every nested object, array-of-object and union property gets its own nested
message named after the owning field (``<field>Object`` / ``<field>OneOf``).
Field numbers are the 0-based position of the property within its enclosing
ordered property set.
"""

from __future__ import annotations

import logging
from typing import Any

from route_proto.core.errors import InvalidPropertyTypeError
from route_proto.core.schema import SchemaKind, classify
from route_proto.core.types import ANY_TYPE, map_primitive
from route_proto.models import PresenceStyle, SchemaNode

logger = logging.getLogger(__name__)

INDENT = "  "
REQUIRED_FIELD_OPTION = "[(msp.field).required = true]"


def _pad(depth: int) -> str:
    return INDENT * depth


class MessageCompiler:
    """Render schema nodes as nested proto messages and fields."""

    def __init__(self, presence: PresenceStyle = "label", log: logging.Logger | None = None) -> None:
        self._presence = presence
        self._log = log or logger

    def render_message(self, name: str, schema: SchemaNode, depth: int = 0) -> str:
        properties: dict[str, Any] = schema.get("properties") or {}
        required = set(schema.get("required") or [])
        self._log.debug("Rendering message %s with %d field(s)", name, len(properties))

        lines = [f"{_pad(depth)}message {name} {{"]
        for index, (key, value) in enumerate(properties.items()):
            lines.append(self.render_property(key, value, index, key in required, depth + 1))
        lines.append(f"{_pad(depth)}}}")
        return "\n".join(lines)

    def render_property(self, name: str, schema: Any, index: int, required: bool, depth: int) -> str:
        self._log.debug("Rendering property %s #%d (required=%s): %r", name, index, required, schema)
        kind = classify(schema)

        if kind is SchemaKind.OBJECT:
            nested = self.render_message(f"{name}Object", schema, depth)
            return f"{nested}\n{self._field(f'{name}Object {name} = {index}', required, depth)}"

        if kind is SchemaKind.ARRAY:
            return self._render_array(name, schema, index, required, depth)

        if kind is SchemaKind.UNION:
            wrapper = self._render_one_of(name, schema["oneOf"], depth)
            return f"{wrapper}\n{self._field(f'{name} {name} = {index}', required, depth)}"

        if kind is SchemaKind.ANY:
            return f"{_pad(depth)}{ANY_TYPE} {name} = {index};"

        if kind is SchemaKind.PRIMITIVE:
            return self._field(f"{map_primitive(schema['type'])} {name} = {index}", required, depth)

        self._log.error("Invalid type for property %s: %r", name, schema)
        raise InvalidPropertyTypeError(name, schema)

    def _render_array(self, name: str, schema: SchemaNode, index: int, required: bool, depth: int) -> str:
        items = schema.get("items")
        kind = classify(items)

        if kind is SchemaKind.OBJECT:
            nested = self.render_message(f"{name}Object", items, depth)
            return f"{nested}\n{self._field(f'repeated {name}Object {name} = {index}', required, depth)}"
        if kind is SchemaKind.ANY:
            return self._field(f"repeated {ANY_TYPE} {name} = {index}", required, depth)
        if kind is SchemaKind.PRIMITIVE:
            item_type = map_primitive(items["type"])
            return self._field(f"repeated {item_type} {name} = {index}", required, depth)

        # nested arrays and unions of items are not representable
        self._log.error("Invalid item type for array property %s: %r", name, schema)
        raise InvalidPropertyTypeError(name, schema)

    def _render_one_of(self, name: str, variants: list[Any], depth: int) -> str:
        pad = _pad(depth)
        lines = [f"{pad}message {name}OneOf {{", f"{pad}{INDENT}oneof types {{"]
        for index, variant in enumerate(variants):
            variant_name = variant.get("type") if isinstance(variant, dict) else None
            if not isinstance(variant_name, str):
                variant_name = f"option{index}"
            lines.append(self.render_property(variant_name, variant, index, False, depth + 2))
        lines.extend(
            [
                f"{pad}{INDENT}}}",
                "",
                f"{pad}{INDENT}message {name} {{",
                f"{pad}{INDENT}{INDENT}repeated {name}OneOf {name} = 0;",
                f"{pad}{INDENT}}}",
                f"{pad}}}",
            ]
        )
        return "\n".join(lines)

    def _field(self, declaration: str, required: bool, depth: int) -> str:
        pad = _pad(depth)
        if not required:
            return f"{pad}{declaration};"
        if self._presence == "option":
            return f"{pad}{declaration} {REQUIRED_FIELD_OPTION};"
        if self._presence == "comment":
            return f"{pad}{declaration}; // required"
        return f"{pad}required {declaration};"
