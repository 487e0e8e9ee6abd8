import importlib
import json
import sys
from collections.abc import Sequence
from enum import Enum
from pathlib import Path
from typing import Annotated, Any

import typer
from pydantic import TypeAdapter, ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from route_proto.core.document import compile_document, generate, resolve_service_name
from route_proto.core.errors import ProtoGenerationError
from route_proto.core.naming import generate_rpc_name
from route_proto.models import CompilerOptions, RouteDescriptor

console = Console()
err_console = Console(stderr=True)

_routes_adapter = TypeAdapter(list[RouteDescriptor])


class Presence(str, Enum):
    label = "label"
    option = "option"
    comment = "comment"


ServiceNameOption = Annotated[
    str | None,
    typer.Option("--service-name", envvar="ROUTE_PROTO_SERVICE_NAME", help="Service alias (overrides the title)."),
]
OutputOption = Annotated[Path | None, typer.Option("--output", "-o", help="Write the document to this file.")]
PresenceOption = Annotated[Presence, typer.Option(help="How required fields are marked.")]
VisibilityOption = Annotated[str, typer.Option(help="Default rpc visibility.")]
RejectDuplicatesOption = Annotated[
    bool, typer.Option("--reject-duplicates", help="Fail when two routes share an rpc name.")
]


def _build_options(
    service_name: str | None, presence: Presence, visibility: str, reject_duplicates: bool
) -> CompilerOptions:
    return CompilerOptions.model_validate(
        {
            "service_name": service_name,
            "presence": presence.value,
            "default_visibility": visibility,
            "duplicate_names": "reject" if reject_duplicates else "accept",
        }
    )


def _emit(text: str, output: Path | None) -> None:
    if output is None:
        console.print(text, markup=False, emoji=False, highlight=False, soft_wrap=True)
        return
    output.write_text(text + "\n", encoding="utf-8")
    console.print(f"[green]Wrote[/green] {output}")


def _fail(exc: Exception) -> typer.Exit:
    err_console.print(f"[red]Error:[/red] {escape(str(exc))}", highlight=False)
    return typer.Exit(code=1)


def _load_app(target: str) -> Any:
    module_name, _, attr = target.partition(":")
    if not module_name or not attr:
        raise typer.BadParameter(f"Expected 'module:attribute', got '{target}'", param_hint="TARGET")
    cwd = str(Path.cwd())
    if cwd not in sys.path:
        sys.path.insert(0, cwd)
    module = importlib.import_module(module_name)
    try:
        return getattr(module, attr)
    except AttributeError:
        raise typer.BadParameter(f"Module '{module_name}' has no attribute '{attr}'", param_hint="TARGET") from None


def load_routes_file(path: Path) -> list[RouteDescriptor]:
    """Read a JSON array of route descriptors."""
    return _routes_adapter.validate_python(json.loads(path.read_text(encoding="utf-8")))


def compile_routes(
    routes_file: Annotated[Path, typer.Argument(help="JSON file holding an array of route descriptors.")],
    service_name: ServiceNameOption = None,
    output: OutputOption = None,
    presence: PresenceOption = Presence.label,
    visibility: VisibilityOption = "internal",
    reject_duplicates: RejectDuplicatesOption = False,
) -> None:
    """Compile a JSON route list into a proto document."""
    options = _build_options(service_name, presence, visibility, reject_duplicates)
    try:
        routes = load_routes_file(routes_file)
        text = compile_document(routes, resolve_service_name(options.service_name, None), options)
    except (ProtoGenerationError, ValidationError, ValueError, OSError) as exc:
        raise _fail(exc) from exc
    _emit(text, output)


def compile_app(
    target: Annotated[str, typer.Argument(help="FastAPI application as 'module:attribute'.")],
    service_name: ServiceNameOption = None,
    output: OutputOption = None,
    presence: PresenceOption = Presence.label,
    visibility: VisibilityOption = "internal",
    reject_duplicates: RejectDuplicatesOption = False,
) -> None:
    """Collect the routes of a FastAPI application and compile them."""
    from route_proto.collector.fastapi_adapter import FastAPIRouteCollector

    options = _build_options(service_name, presence, visibility, reject_duplicates)
    result: list[str] = []
    try:
        generate(FastAPIRouteCollector(_load_app(target)), result.append, options)
    except (ProtoGenerationError, ValidationError, ImportError) as exc:
        raise _fail(exc) from exc
    _emit(result[0], output)


def _render_table(headers: Sequence[str], rows: Sequence[tuple[Any, ...]]) -> None:
    table = Table(show_lines=False)
    for h in headers:
        table.add_column(h)
    for row in rows:
        table.add_row(*(str(v) for v in row))
    console.print(table)
    console.print(f"({len(rows)} routes)")


def list_routes(
    target: Annotated[str, typer.Argument(help="FastAPI application as 'module:attribute'.")],
) -> None:
    """List the routes a FastAPI application exposes, with their rpc names."""
    from route_proto.collector.fastapi_adapter import FastAPIRouteCollector

    try:
        routes = FastAPIRouteCollector(_load_app(target)).routes()
    except (ValidationError, ImportError) as exc:
        raise _fail(exc) from exc
    rows = [
        (
            generate_rpc_name(route.method, route.url),
            route.method,
            route.url,
            "yes" if route.route_schema is not None else "no",
        )
        for route in routes
    ]
    _render_table(["rpc", "method", "url", "schema"], rows)
