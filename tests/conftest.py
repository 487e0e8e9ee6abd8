"""Shared fixtures and helpers for tests."""

from pathlib import Path
from typing import Any

import pytest

from route_proto.models import RouteDescriptor

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: every test under tests/unit is a unit test
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(item.path)
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        if rel.parts and rel.parts[0] == "unit":
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def user_schema() -> dict[str, Any]:
    """Return an object schema for a user record."""
    return {
        "type": "object",
        "properties": {
            "name": {"type": "string"},
            "email": {"type": "string"},
            "age": {"type": "number"},
        },
        "required": ["name", "age"],
    }


@pytest.fixture
def get_user_route() -> RouteDescriptor:
    """Return a GET route with no schema at all."""
    return RouteDescriptor(method="GET", url="/users/:id")


@pytest.fixture
def create_user_route(user_schema: dict[str, Any]) -> RouteDescriptor:
    """Return a POST route with a body and a 201 response."""
    return RouteDescriptor.model_validate(
        {
            "method": "POST",
            "url": "/users",
            "schema": {
                "body": user_schema,
                "response": {"201": {"type": "object", "properties": {"id": {"type": "string"}}}},
            },
        }
    )
