"""``repomirror analyze`` — run one analysis session in the terminal."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.live import Live

from ..exceptions import ConfigurationError
from ..logging_config import setup_logging
from ..session import (
    AnalysisSession,
    AnalysisSessionController,
    HttpTransport,
    LocalTransport,
    SessionState,
)
from . import app
from ._common import EXAMPLE_REPOS, console, resolve_config
from ._render import render_phases, render_report

logger = logging.getLogger(__name__)

EXIT_FAILED = 1
EXIT_INVALID_INPUT = 2


@app.command()
def analyze(
    url: str = typer.Argument(
        ...,
        help="GitHub repository URL, e.g. https://github.com/facebook/react",
    ),
    local: bool = typer.Option(
        True,
        "--local/--remote",
        help="Run the engine in-process, or call the /analyze service",
    ),
    api_url: Optional[str] = typer.Option(
        None,
        "--api-url",
        help="Base URL of the analysis service (with --remote)",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Also write the JSON report to this file",
        dir_okay=False,
    ),
    instant: bool = typer.Option(
        False,
        "--instant",
        help="Skip the progress timeline and minimum display time",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file path (TOML format)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose (DEBUG) logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress all but ERROR logging"),
) -> None:
    """
    Analyze a GitHub repository and show its quality report.

    [bold cyan]Examples:[/bold cyan]

      repomirror analyze https://github.com/facebook/react

      repomirror analyze https://github.com/vercel/next.js --json --instant

      repomirror analyze github.com/tailwindlabs/tailwindcss --remote
    """
    try:
        settings = resolve_config(
            config=config, api_url=api_url, instant=instant, verbose=verbose, quiet=quiet
        )
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_INVALID_INPUT)

    setup_logging(verbose=settings.verbosity == "verbose", quiet=settings.verbosity == "quiet")

    if local:
        transport = LocalTransport()
    else:
        transport = HttpTransport(settings.analyze_url, timeout=settings.request_timeout_seconds)
    controller = AnalysisSessionController(transport, settings)

    try:
        if json_output:
            session = asyncio.run(controller.submit(url))
        else:
            session = _run_live(controller, url)
    except KeyboardInterrupt:
        logger.info("Analysis interrupted by user")
        console.print("\n[yellow]Analysis interrupted[/yellow]")
        raise typer.Exit(130)

    if session.state is SessionState.IDLE and session.error is not None:
        console.print(f"[red]{session.error_message}[/red]")
        console.print(f"[dim]Try one of: {', '.join(EXAMPLE_REPOS)}[/dim]")
        raise typer.Exit(EXIT_INVALID_INPUT)

    if session.state is SessionState.FAILED:
        logger.error("%s: %s", session.error.__class__.__name__, session.error)
        console.print(f"[red]{session.error_message}[/red]")
        raise typer.Exit(EXIT_FAILED)

    result = session.result
    payload = result.to_dict()
    if output is not None:
        output.write_text(json.dumps(payload, indent=2))
        logger.info("Wrote report to %s", output)

    if json_output:
        # Plain print keeps rich markup out of machine-readable output
        print(json.dumps(payload, indent=2))
    else:
        console.print(render_report(result))
        if output is not None:
            console.print(f"[green]Report written to {output}[/green]")


def _run_live(controller: AnalysisSessionController, url: str) -> AnalysisSession:
    """Run the session while redrawing the phase panel on every change."""
    title = f"Analyzing {url}"
    with Live(
        render_phases(controller.session.phases, title=title),
        console=console,
        refresh_per_second=10,
        transient=True,
    ) as live:

        def _redraw(session: AnalysisSession) -> None:
            live.update(render_phases(session.phases, title=title))

        controller.add_listener(_redraw)
        try:
            return asyncio.run(controller.submit(url))
        finally:
            controller.remove_listener(_redraw)
