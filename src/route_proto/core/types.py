_PROTO_TYPE_MAP = {
    "number": "uint32",
    "integer": "uint32",
    "string": "string",
    "boolean": "bool",
}

ANY_TYPE = "google.protobuf.Any"
EMPTY_TYPE = "google.protobuf.Empty"
TEXT_PLACEHOLDER_TYPE = "string"


def is_primitive(kind: object) -> bool:
    return isinstance(kind, str) and kind in _PROTO_TYPE_MAP


def map_primitive(kind: str) -> str:
    """Return the proto scalar for a JSON-schema primitive kind.

    Raises ``KeyError`` for kinds outside the table.
    """
    return _PROTO_TYPE_MAP[kind]
