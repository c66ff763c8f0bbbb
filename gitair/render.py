"""
Rendering functions for gitair output.

This module handles the startup banner and the repository table.
Per-event status lines are plain text echoed by the CLI.
"""

from typing import Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from .config import SyncConfig
from .domain import RepositoryRecord
from .services import RepositoryClassifier

console = Console()


def render_banner(settings: SyncConfig) -> None:
    """Print the startup banner describing the active settings."""
    console.print("🚀 [bold]Git Air[/bold] - Auto sync all Git repos", highlight=False)
    console.print("📡 Inter-project communication via Git synchronization", highlight=False)
    console.print("📚 Supports monorepos and multi-repos", highlight=False)
    console.print(f"⏱️  Check interval: {settings.check_interval_minutes:.1f} minutes", highlight=False)
    if settings.force_composite:
        console.print("🔧 Monorepo mode: [yellow]FORCED[/yellow]", highlight=False)
    else:
        console.print("🔧 Monorepo mode: AUTO-DETECT", highlight=False)
    if settings.use_ai:
        console.print(
            f"🤖 AI Commits: [green]ENABLED[/green] (via {settings.provider_command} CLI)",
            highlight=False
        )
    else:
        console.print("🤖 AI Commits: DISABLED (using timestamp)", highlight=False)
    console.print()


def render_repositories(
    repos: Sequence[RepositoryRecord],
    classifier: RepositoryClassifier
) -> None:
    """
    Render discovered repositories with their current classification.

    Args:
        repos: Repositories found at startup
        classifier: Classifier used to label each repository
    """
    console.print(f"Found {len(repos)} Git repositories", highlight=False)

    table = Table(
        box=box.ROUNDED,
        show_header=True,
        header_style="bold magenta"
    )
    table.add_column("Repository")
    table.add_column("Type")
    table.add_column("Path", overflow="fold")

    for repo in repos:
        classification = classifier.classify(repo.path)
        style = "cyan" if classification.is_composite else None
        table.add_row(repo.name, classification.label, repo.path, style=style)

    console.print(table)
    console.print()
