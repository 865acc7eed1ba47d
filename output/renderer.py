"""
Terminal rendering of an edition using rich.

Supports the generation summary table and per-style story cards.
"""

from datetime import datetime
from typing import Optional

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from config.styles import NewsStyle, get_style_description
from briefing.models import Dataset, Story


def format_timestamp(timestamp_ms: int) -> str:
    """Human-readable local time for a capture timestamp."""
    return datetime.fromtimestamp(timestamp_ms / 1000).strftime("%Y-%m-%d at %H:%M:%S")


def story_card(story: Story, style: NewsStyle, index: int) -> Panel:
    """Render one story as a card."""
    headline_style = "bold italic" if style is NewsStyle.SATIRE else "bold"
    body_style = "italic" if style is NewsStyle.FICTION else ""

    footer = Text(style.value.upper(), style="dim")
    if story.source_url:
        footer.append("  |  Read Original Source: ", style="dim")
        footer.append(story.source_url, style="link " + story.source_url)

    body = Group(
        Text(story.headline, style=headline_style),
        Text(""),
        Text(story.content, style=body_style),
        Text(""),
        footer,
    )

    subtitle = story.original_source
    if story.published_time:
        subtitle = f"{subtitle} - {story.published_time}"

    return Panel(
        body,
        title=f"Column {index + 1}",
        title_align="left",
        subtitle=subtitle,
        subtitle_align="right",
    )


def print_edition(dataset: Dataset, style: NewsStyle, console: Optional[Console] = None) -> None:
    """Print every story of one style, baseline when the style is missing."""
    console = console or Console()

    console.print(Panel(
        f"[bold]PERSPECTIVE NEWS[/bold]\n"
        f"[italic]{style.value}: {get_style_description(style)}[/italic]",
        expand=False,
    ))

    if style.value not in dataset.stories:
        console.print(f"[yellow]{style.value} not in this edition, showing baseline.[/yellow]")
    elif style.value in dataset.degraded_styles:
        console.print(f"[yellow]{style.value} rewrite failed, showing baseline text.[/yellow]")

    for index, story in enumerate(dataset.get_style(style)):
        console.print(story_card(story, style, index))

    console.print(f"[dim]Last Updated: {format_timestamp(dataset.timestamp)}[/dim]")


def print_read_error(message: str, console: Optional[Console] = None) -> None:
    """Render the dataset read failure notice."""
    console = console or Console()
    console.print(Panel(
        f"[bold red]{message}[/bold red]",
        title="Notice: Print Error",
        expand=False,
    ))


def summary_table(dataset: Dataset) -> Table:
    """Table of styles with story counts and first headline."""
    table = Table(title=f"Edition captured {format_timestamp(dataset.timestamp)}")
    table.add_column("Style", style="cyan")
    table.add_column("Stories", justify="right", width=7)
    table.add_column("First headline")

    for label, stories in dataset.stories.items():
        first = stories[0].headline if stories else ""
        marker = " [yellow](baseline text)[/yellow]" if label in dataset.degraded_styles else ""
        table.add_row(f"{label}{marker}", str(len(stories)), first)

    return table
