import typer

from route_proto.cli.generate import compile_app, compile_routes, list_routes

app = typer.Typer(
    name="route-proto",
    help="Derive a proto service contract from HTTP route declarations.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("compile")(compile_routes)
app.command("app")(compile_app)
app.command("routes")(list_routes)


def main() -> None:
    app()
