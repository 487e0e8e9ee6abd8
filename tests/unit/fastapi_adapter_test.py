"""Tests for collecting routes from a FastAPI application."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel

from route_proto.collector.fastapi_adapter import FastAPIRouteCollector, register_proto_generation
from route_proto.core.errors import InvalidPropertyTypeError, MissingCallbackError


class User(BaseModel):
    name: str
    age: int


class Grid(BaseModel):
    matrix: list[list[int]]


def _create_app(**kwargs: object) -> FastAPI:
    app = FastAPI(title="accounts", **kwargs)  # type: ignore[arg-type]

    @app.get("/users/{user_id}", response_model=User)
    async def get_user(user_id: int) -> User:
        return User(name="ada", age=36)

    @app.post("/users", response_model=User)
    async def create_user(user: User) -> User:
        return user

    @app.get("/internal", include_in_schema=False)
    async def internal() -> dict[str, str]:
        return {}

    return app


class TestFastAPIRouteCollector:
    def test_title_comes_from_openapi_info(self) -> None:
        assert FastAPIRouteCollector(_create_app()).title() == "accounts"

    def test_routes_in_registration_order(self) -> None:
        routes = FastAPIRouteCollector(_create_app()).routes()
        assert [(r.method, r.url) for r in routes] == [("GET", "/users/:user_id"), ("POST", "/users")]

    def test_path_parameter_schema(self) -> None:
        route = FastAPIRouteCollector(_create_app()).routes()[0]
        assert route.route_schema is not None
        assert route.route_schema.params == {
            "type": "object",
            "properties": {"user_id": {"type": "integer"}},
            "required": ["user_id"],
        }


class TestRegisterProtoGeneration:
    def test_requires_callable_callback(self) -> None:
        with pytest.raises(MissingCallbackError):
            register_proto_generation(_create_app(), None)  # type: ignore[arg-type]

    def test_missing_callback_is_a_type_error(self) -> None:
        with pytest.raises(TypeError):
            register_proto_generation(_create_app(), "not callable")  # type: ignore[arg-type]

    def test_document_generated_once_on_startup(self) -> None:
        app = _create_app()
        received: list[str] = []
        register_proto_generation(app, received.append)

        assert received == []
        with TestClient(app) as client:
            assert client.get("/users/1").status_code == 200
        assert len(received) == 1

        text = received[0]
        assert "message GetUsersByUser_idRequest {\n  required uint32 user_id = 0;\n}" in text
        assert "message PostUsersRequest {\n  required string name = 0;\n  required uint32 age = 1;\n}" in text
        assert "rpc PostUsers( PostUsersRequest ) returns( PostUsersResponse ) {" in text
        assert 'option (msp.net).alias = "accounts";' in text
        assert "Internal" not in text

    def test_service_name_and_options_are_applied(self) -> None:
        app = _create_app()
        received: list[str] = []
        register_proto_generation(app, received.append, service_name="users", default_visibility="public")
        with TestClient(app):
            pass
        assert 'option (msp.net).alias = "users";' in received[0]
        assert 'templatedUrl = "/users/users/:user_id";' in received[0]
        assert '(msp.http).visibility = "public";' in received[0]

    def test_existing_lifespan_still_runs(self) -> None:
        events: list[str] = []

        @asynccontextmanager
        async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
            events.append("startup")
            yield
            events.append("shutdown")

        app = _create_app(lifespan=lifespan)
        register_proto_generation(app, lambda _: events.append("proto"))
        with TestClient(app):
            pass
        assert events == ["startup", "proto", "shutdown"]

    def test_invalid_schema_aborts_startup(self) -> None:
        app = _create_app()

        @app.post("/grids")
        async def create_grid(grid: Grid) -> None:
            return None

        received: list[str] = []
        register_proto_generation(app, received.append)
        with pytest.raises(InvalidPropertyTypeError), TestClient(app):
            pass
        assert received == []
