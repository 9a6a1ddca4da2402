"""Command-line interface using Typer."""

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from advidly import __version__
from advidly.config import get_settings

app = typer.Typer(
    name="advidly",
    help="AdVidly - advertiser and creator marketplace server",
    add_completion=False,
)

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"AdVidly v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """AdVidly - connect advertising companies with video creators."""
    pass


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", "-h", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Bind port"),
    reload: Optional[bool] = typer.Option(None, "--reload/--no-reload", help="Auto-reload"),
) -> None:
    """Run the API server."""
    import uvicorn

    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port
    reload = settings.api_reload if reload is None else reload

    console.print(f"[bold blue]Starting AdVidly on {host}:{port}[/bold blue]")
    uvicorn.run("advidly.main:app", host=host, port=port, reload=reload)


@app.command("config")
def show_config() -> None:
    """Show the effective configuration."""
    settings = get_settings()

    table = Table(title="AdVidly Settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    for name, value in settings.model_dump().items():
        if isinstance(value, list):
            value = ", ".join(str(v) for v in value)
        table.add_row(name, str(value))

    console.print(table)


if __name__ == "__main__":
    app()
