"""
FPL Edge Command Line Interface.

Start commands for the JSON API and the Streamlit dashboard.
"""

import subprocess
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from .config import configure_logging, get_settings

app = typer.Typer(
    name="fpl-edge",
    help="FPL Edge - Fantasy Premier League transfer dashboard",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port"),
) -> None:
    """
    Run the JSON API server.

    Serves /api/fpl and /api/analyze-picks.
    """
    import uvicorn

    from .web import create_app

    settings = get_settings()
    configure_logging(settings.app.log_level)

    host = host or settings.app.api_host
    port = port or settings.app.api_port

    console.print(Panel(f"[bold purple]FPL Edge API[/bold purple] on http://{host}:{port}", style="purple"))
    uvicorn.run(create_app(), host=host, port=port, log_level=settings.app.log_level.lower())


@app.command()
def dashboard(
    port: int | None = typer.Option(None, "--port", "-p", help="Streamlit port"),
) -> None:
    """Launch the Streamlit dashboard."""
    settings = get_settings()
    port = port or settings.app.streamlit_port
    app_path = Path(__file__).parent / "app.py"

    console.print(Panel(f"[bold purple]FPL Edge Dashboard[/bold purple] on port {port}", style="purple"))
    result = subprocess.run(
        [sys.executable, "-m", "streamlit", "run", str(app_path), "--server.port", str(port)],
        check=False,
    )
    raise typer.Exit(result.returncode)


if __name__ == "__main__":
    app()
