"""CLI entry point for card_proxy_pdf."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn, TimeElapsedColumn
from rich.panel import Panel
from rich.table import Table
from rich import box

from card_proxy_pdf.config import AppConfig
from card_proxy_pdf.errors import CardProxyError
from card_proxy_pdf.layout import BuildResult, build_proxy_pdf
from card_proxy_pdf.pdf_generator import get_file_size_str

console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="card-proxy-pdf",
        description="Card Proxy PDF – Turn an OCTGN deck into printable card sheets with 3x3 layout",
    )
    parser.add_argument("input", type=str, help="Path to the .o8d deck file.")
    parser.add_argument("output", type=str, help="Path to the output PDF file.")
    parser.add_argument(
        "--cache-dir",
        type=str,
        default=None,
        help="Path to the cache directory (default: per-user cache folder).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug log messages.",
    )
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )
    # Per-request chatter from urllib3 is only useful when debugging
    logging.getLogger("urllib3").setLevel(logging.DEBUG if verbose else logging.WARNING)


def print_summary(result: BuildResult) -> None:
    """Print a summary table of a finished build."""
    table = Table(box=box.ROUNDED, border_style="green")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("🃏 Cards placed", f"[bold]{result.card_count}[/bold]")
    table.add_row("📄 Pages created", f"[bold]{result.page_count}[/bold]")
    table.add_row("⬇️  Images fetched", f"[bold]{len(result.fetched)}[/bold]")
    table.add_row("💾 Output file", f"[bold]{result.output_path}[/bold]")
    table.add_row("📊 File size", f"[bold]{get_file_size_str(result.output_path)}[/bold]")

    console.print(table)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    config = AppConfig.default(
        cache_dir=Path(args.cache_dir).resolve() if args.cache_dir is not None else None
    )
    deck_path = Path(args.input).resolve()
    output_path = Path(args.output).resolve()

    console.print()
    console.print(Panel.fit(
        "[bold magenta]📋 Card Proxy PDF[/bold magenta]\n"
        f"[dim]Creating printable card sheets for {deck_path.name}[/dim]",
        border_style="magenta",
    ))
    console.print()

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TimeElapsedColumn(),
            console=console,
        ) as progress:
            result = build_proxy_pdf(
                deck_path=deck_path,
                output_path=output_path,
                config=config,
                progress=progress,
            )
    except CardProxyError as e:
        console.print(f"[red]✘[/red] [bold red]error:[/bold red] {e}")
        return 1

    console.print()
    print_summary(result)
    console.print()
    console.print("[green]✔[/green] [bold green]Done![/bold green] Your card sheets are ready to print.")
    console.print()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
