"""``repomirror serve`` — run the ``POST /analyze`` service."""

import logging
from pathlib import Path
from typing import Optional

import typer

from ..exceptions import ConfigurationError
from ..logging_config import setup_logging
from . import app
from ._common import console, resolve_config

logger = logging.getLogger(__name__)


@app.command()
def serve(
    port: Optional[int] = typer.Option(None, help="Port to listen on (default: 5000)"),
    host: Optional[str] = typer.Option(None, help="Host to bind to (default: 127.0.0.1)"),
    config: Optional[Path] = typer.Option(None, "-c", "--config", help="Config file"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging"),
) -> None:
    """Serve quality reports over HTTP."""
    try:
        from ..server import _check_deps

        _check_deps()
    except ImportError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)

    import uvicorn

    from ..server.app import create_app

    try:
        settings = resolve_config(config=config, host=host, port=port, verbose=verbose)
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    verbose = settings.verbosity == "verbose"
    setup_logging(verbose=verbose, quiet=settings.verbosity == "quiet")

    url = f"http://{settings.host}:{settings.port}"
    console.print(f"[bold]RepoMirror backend[/bold] → [link={url}]{url}[/link]  (POST /analyze)")
    console.print("[dim]Press Ctrl+C to stop[/dim]")

    asgi_app = create_app(config=settings)
    try:
        uvicorn.run(
            asgi_app,
            host=settings.host,
            port=settings.port,
            log_level="warning" if not verbose else "info",
        )
    except KeyboardInterrupt:
        pass
    finally:
        logger.debug("Server on %s stopped", url)
        console.print("\n[dim]Stopped.[/dim]")
