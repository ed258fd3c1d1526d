"""Main CLI application."""

from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ojt_tracker import __version__
from ojt_tracker.cli.api_commands import api
from ojt_tracker.cli.config_commands import config
from ojt_tracker.cli.context import load_repositories
from ojt_tracker.core.codec import encode_date, encode_time
from ojt_tracker.core.timeutil import entry_total_hours, summarize

console = Console()


def format_hours(hours: float) -> str:
    """Format decimal hours, e.g. 7.5 -> '7.50 h'."""
    return f"{hours:.2f} h"


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    help="Path to config file (default: ~/.ojt-tracker/config.yml)",
)
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[str], no_color: bool) -> None:
    """OJT Tracker - log daily shift times and track required hours.

    Run the API with 'ojt-tracker api serve'; inspect stored data with
    'entries' and 'summary'.
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path

    if no_color:
        console.no_color = True


cli.add_command(api)
cli.add_command(config)


@cli.command()
@click.option("-u", "--user-id", required=True, help="Owner whose entries to show")
@click.option("-n", "--count", default=20, help="Number of entries to show")
@click.pass_context
def entries(ctx: click.Context, user_id: str, count: int) -> None:
    """Show an owner's entries, most recent first.

    Example:
        ojt-tracker entries -u alice -n 5
    """
    repository, _ = load_repositories(ctx)
    rows = repository.list_by_owner(user_id)[:count]

    if not rows:
        console.print(f"[yellow]No entries for {user_id}[/yellow]")
        return

    table = Table(title=f"Entries for {user_id}")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Date", style="cyan")
    table.add_column("Morning")
    table.add_column("Afternoon")
    table.add_column("Evening")
    table.add_column("Hours", justify="right", style="green")

    for entry in rows:
        shifts = [
            f"{encode_time(start)}-{encode_time(end)}" if start or end else "-"
            for start, end in entry.shifts
        ]
        table.add_row(
            str(entry.id),
            encode_date(entry.date),
            *shifts,
            format_hours(entry_total_hours(entry)),
        )

    console.print(table)


@cli.command()
@click.option("-u", "--user-id", required=True, help="Owner whose progress to show")
@click.pass_context
def summary(ctx: click.Context, user_id: str) -> None:
    """Show completed hours against the required hours.

    Example:
        ojt-tracker summary -u alice
    """
    repository, preferences = load_repositories(ctx)
    required = preferences.get(user_id).required_hours
    progress = summarize(repository.list_by_owner(user_id), required)

    content = f"""[bold]{progress.completion_percentage}% complete[/bold]

[dim]Completed:[/dim] {format_hours(progress.completed_hours)}
[dim]Required:[/dim] {format_hours(progress.required_hours)}
[dim]Remaining:[/dim] {format_hours(progress.remaining_hours)}
[dim]Entries:[/dim] {progress.entry_count}"""

    console.print(Panel(content, title=f"Progress for {user_id}", border_style="green"))


def main() -> None:
    """Console script entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
