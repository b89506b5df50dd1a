"""Rich renderables for the phase timeline and the finished report."""

from __future__ import annotations

from typing import Sequence

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..models import AnalysisResult
from ..session.phases import LoadingPhase, PhaseStatus, completed_count

PHASE_ICONS = {
    "folder": "\U0001f4c1",
    "code": "\U0001f4bb",
    "file": "\U0001f4c4",
    "test": "\U0001f9ea",
    "git": "\U0001f33f",
    "sparkles": "✨",
}

ROADMAP_ICONS = {
    "readme": "\U0001f4d6",
    "linting": "\U0001f9f9",
    "package": "\U0001f4e6",
    "gitignore": "\U0001f500",
    "license": "⚙",
}

METRIC_LABELS = (
    ("codeQuality", "Code Quality"),
    ("projectStructure", "Project Structure"),
    ("documentation", "Documentation"),
    ("testCoverage", "Test Coverage"),
    ("commitHistory", "Commit History"),
    ("techStack", "Tech Stack"),
)

_BAR_WIDTH = 20


def score_color(score: int) -> str:
    if score >= 80:
        return "green"
    if score >= 60:
        return "yellow"
    return "dark_orange"


def rating_color(rating: str) -> str:
    if rating == "Excellent":
        return "green"
    if rating == "Good":
        return "cyan"
    return "yellow"


def priority_color(priority: str) -> str:
    if priority == "High Priority":
        return "red"
    if priority == "Medium Priority":
        return "yellow"
    return "green"


def score_bar(value: int, width: int = _BAR_WIDTH) -> str:
    """Horizontal bar for a 0-100 value; out-of-range values are pinned."""
    filled = round(max(0, min(100, value)) / 100 * width)
    return "█" * filled + "░" * (width - filled)


def render_phases(phases: Sequence[LoadingPhase], title: str = "Analyzing repository") -> Panel:
    table = Table(show_header=False, show_edge=False, box=None, padding=(0, 1))
    table.add_column("mark", width=2)
    table.add_column("label")

    for phase in phases:
        if phase.status is PhaseStatus.COMPLETE:
            table.add_row("[green]✔[/green]", f"[green]{phase.label}[/green]")
        elif phase.status is PhaseStatus.ACTIVE:
            table.add_row("[cyan]●[/cyan]", f"[bold cyan]{phase.label}[/bold cyan]")
        else:
            icon = PHASE_ICONS.get(phase.icon, "·")
            table.add_row(icon, f"[dim]{phase.label}[/dim]")

    done = completed_count(phases)
    progress = Text(f"\n{score_bar(done * 100 // len(phases))}  {done} / {len(phases)}")
    return Panel(Group(table, progress), title=f"[bold]{title}[/bold]", border_style="cyan")


def render_report(result: AnalysisResult) -> Group:
    """Full report: header, stats, metrics, tech stack and roadmap."""
    report = result.report
    color = score_color(report.overall_score)

    header = Table(show_header=False, show_edge=False, box=None, padding=(0, 1))
    header.add_column("key", style="bold", width=12)
    header.add_column("value")
    header.add_row("Repository:", f"[link={result.repo_url}]{result.repo_full_name}[/link]")
    header.add_row("Score:", f"[bold {color}]{report.overall_score}[/bold {color}] / 100")
    rating = rating_color(report.rating)
    header.add_row("Rating:", f"[{rating}]{report.rating}[/{rating}]")
    header.add_row("", "")
    header.add_row("Summary:", report.summary)

    stats = Table(title="Repository Stats", show_edge=False)
    for column in ("Files", "Commits", "Branches", "Languages"):
        stats.add_column(column, justify="right")
    stats.add_row(
        str(report.stats.files),
        str(report.stats.commits),
        str(report.stats.branches),
        str(report.stats.languages),
    )

    metrics = Table(title="Quality Metrics", show_edge=False)
    metrics.add_column("Metric")
    metrics.add_column("Score", justify="right")
    metrics.add_column("")
    metric_values = report.metrics.to_dict()
    for key, label in METRIC_LABELS:
        value = metric_values[key]
        metrics.add_row(label, str(value), f"[{score_color(value)}]{score_bar(value)}[/]")

    roadmap = Table(title="Improvement Roadmap", show_edge=False)
    roadmap.add_column("#", justify="right")
    roadmap.add_column("")
    roadmap.add_column("Task")
    roadmap.add_column("Priority")
    for index, item in enumerate(report.roadmap, 1):
        color_name = priority_color(item.priority)
        roadmap.add_row(
            str(index),
            ROADMAP_ICONS.get(item.icon, ""),
            f"[bold]{item.title}[/bold]\n[dim]{item.description}[/dim]",
            f"[{color_name}]{item.priority}[/{color_name}]",
        )

    stack = Text("Tech Stack: ", style="bold")
    stack.append(", ".join(report.tech_stack), style="magenta")

    return Group(
        Panel(header, title="[bold]RepoMirror Report[/bold]", border_style=color),
        stats,
        metrics,
        stack,
        roadmap,
    )
