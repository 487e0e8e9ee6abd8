from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

SchemaNode = dict[str, Any]

PresenceStyle = Literal["label", "option", "comment"]
DuplicatePolicy = Literal["accept", "reject"]


class RouteSchema(BaseModel):
    model_config = ConfigDict(frozen=True)

    body: SchemaNode | None = None
    params: SchemaNode | None = None
    querystring: SchemaNode | None = None
    response: dict[str, SchemaNode] | None = None

    @field_validator("response", mode="before")
    @classmethod
    def _status_keys_as_str(cls, value: Any) -> Any:
        # status codes are often written as ints, e.g. {200: {...}}
        if isinstance(value, dict):
            return {str(key): schema for key, schema in value.items()}
        return value


class RouteDescriptor(BaseModel):
    """One registered HTTP endpoint."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    method: str
    url: str
    route_schema: RouteSchema | None = Field(default=None, alias="schema")
    visibility: str | None = None

    @field_validator("method")
    @classmethod
    def _upper_method(cls, value: str) -> str:
        return value.upper()


class CompilerOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    service_name: str | None = None
    default_visibility: str = "internal"
    presence: PresenceStyle = "label"
    duplicate_names: DuplicatePolicy = "accept"
    response_status: str = "200"
