#!/usr/bin/env python3
"""
Perspective News - Main Entry Point

Fetches today's top stories, rewrites them through several lenses, and writes
the edition to a static JSON file for the front end.

Usage:
    # Generate today's edition
    python main.py

    # Only some styles (Neutral is always included)
    python main.py --styles satire,"Micro Fiction"

    # Keep going if a style fails (that style keeps the neutral text)
    python main.py --relaxed

    # Check the API key works
    python main.py --check-connection

    # Read the saved edition in the terminal
    python main.py --show Satire
"""

import argparse
import asyncio
import sys
from pathlib import Path
from datetime import datetime
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from config.settings import ConfigurationError, get_settings
from config.styles import NewsStyle, BASELINE_STYLE
from briefing.errors import PipelineError
from briefing.pipeline import BriefingPipeline
from briefing.prompts import CONNECTION_CHECK_PROMPT
from llm.base import LLMError
from llm.factory import get_llm_provider
from output.dataset_store import DatasetReader
from output.renderer import print_edition, print_read_error, summary_table
from utils.logging import setup_logging, get_logger


console = Console()
logger = get_logger("main")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Generate a multi-perspective news edition",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python main.py                          # Generate all styles
    python main.py --styles satire,left     # Neutral + selected styles
    python main.py --relaxed                # Persist even if a style fails
    python main.py --check-connection       # Verify the API key
    python main.py --show "Micro Fiction"   # Render the saved edition
        """,
    )

    mode_group = parser.add_mutually_exclusive_group()
    mode_group.add_argument(
        "--check-connection",
        action="store_true",
        help="Make one plain generation call to verify the credential",
    )
    mode_group.add_argument(
        "--show",
        nargs="?",
        const=BASELINE_STYLE.value,
        metavar="STYLE",
        help=f"Render the saved edition in the terminal (default style: {BASELINE_STYLE.value})",
    )

    parser.add_argument(
        "--styles", "-s",
        type=str,
        help="Comma-separated styles to generate (labels or names, e.g. satire,\"Right Wing\")",
    )
    parser.add_argument(
        "--relaxed",
        action="store_true",
        help="Write the edition even if a style rewrite fails",
    )
    parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Dataset file path (default: public/news-data.json)",
    )

    # Logging
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress non-essential output",
    )

    return parser.parse_args(argv)


def get_styles_from_args(args: argparse.Namespace) -> Optional[List[NewsStyle]]:
    """Get list of styles from arguments (None means all)."""
    if args.styles:
        return [NewsStyle.from_label(s) for s in args.styles.split(",") if s.strip()]
    return None


async def run_generation(args: argparse.Namespace) -> int:
    """Run the generation pipeline."""
    settings = get_settings()
    settings.validate_provider_config()

    styles = get_styles_from_args(args)
    llm = get_llm_provider(settings)

    pipeline = BriefingPipeline(
        llm,
        settings,
        styles=styles,
        output_path=args.output,
        strict=False if args.relaxed else None,
    )

    console.print(Panel(
        "[bold blue]Perspective News[/bold blue]\n\n"
        f"Stories: {settings.story_count}\n"
        f"Styles: {', '.join(s.value for s in pipeline.styles)}\n"
        f"Output: {pipeline.output_path}",
        expand=False,
    ))

    start_time = datetime.now()
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
        disable=args.quiet,
    ) as progress:
        progress.add_task("[cyan]Generating edition...", total=None)
        dataset = await pipeline.run()

    duration = (datetime.now() - start_time).total_seconds()

    console.print()
    console.print(summary_table(dataset))
    if dataset.degraded_styles:
        console.print(
            f"[yellow]Styles kept at baseline text: {', '.join(dataset.degraded_styles)}[/yellow]"
        )
    console.print(f"Execution time: {duration:.1f}s")
    console.print(f"[green]Saved:[/green] {pipeline.output_path}")
    return 0


async def check_connection() -> int:
    """Verify the credential with a single plain call."""
    settings = get_settings()
    settings.validate_provider_config()

    key = settings.gemini_api_key or ""
    console.print(f"Using key starting with: {key[:4]}...")

    llm = get_llm_provider(settings)
    response = await llm.generate(CONNECTION_CHECK_PROMPT, model=settings.get_model("search"))
    console.print(f"[green]Success![/green] Response: {response.content.strip()}")
    return 0


def show_edition(args: argparse.Namespace) -> int:
    """Render the persisted dataset for one style."""
    settings = get_settings()
    style = NewsStyle.from_label(args.show)

    reader = DatasetReader(args.output or settings.output_path)
    dataset = reader.load()
    if dataset is None:
        print_read_error(reader.error, console)
        return 1

    print_edition(dataset, style, console)
    return 0


async def main_async(args: argparse.Namespace) -> int:
    """Async main function."""
    try:
        if args.check_connection:
            try:
                return await check_connection()
            except LLMError as e:
                console.print(f"[red]Failed: {e}[/red]")
                logger.error(f"Connection check failed: {e}")
                return 1
        return await run_generation(args)

    except KeyboardInterrupt:
        console.print("\n[yellow]Generation interrupted by user[/yellow]")
        return 130

    except ConfigurationError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    except (PipelineError, LLMError) as e:
        console.print(f"\n[red]Failed to generate news: {e}[/red]")
        logger.exception("Generation failed")
        return 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    log_level = "DEBUG" if args.verbose else ("WARNING" if args.quiet else "INFO")
    setup_logging(level=log_level)

    try:
        if args.show is not None:
            return show_edition(args)
        return asyncio.run(main_async(args))
    except ValueError as e:
        # Unknown style labels
        console.print(f"[red]Error: {e}[/red]")
        return 2


if __name__ == "__main__":
    sys.exit(main())
