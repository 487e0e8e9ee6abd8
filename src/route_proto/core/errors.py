from typing import Any


class ProtoGenerationError(Exception):
    """Base class for every error raised while generating a proto document."""


class MissingServiceNameError(ProtoGenerationError):
    """Raised when neither an explicit service name nor a document title is available."""

    def __init__(self) -> None:
        super().__init__("No service name configured and the schema document has no title.")


class MissingCallbackError(ProtoGenerationError, TypeError):
    """Raised at configuration time when the completion callback is absent or not callable."""

    def __init__(self, callback: Any = None) -> None:
        super().__init__(f"A callable 'callback' is required, got {callback!r}")


class InvalidPropertyTypeError(ProtoGenerationError):
    """Raised when a schema node matches none of the supported shapes."""

    def __init__(self, field_name: str, schema: Any) -> None:
        self.field_name = field_name
        self.schema = schema
        super().__init__(f"Invalid type for property '{field_name}': {schema!r}")


class DuplicateRpcNameError(ProtoGenerationError):
    """Raised when two routes normalize to the same RPC name and duplicates are rejected."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Duplicate RPC name '{name}'")
