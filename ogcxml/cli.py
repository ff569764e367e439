"""Command-line interface for ogcxml."""

import logging
from pathlib import Path

import requests
import typer
from rich.console import Console

from ogcxml import __version__
from ogcxml.errors import XMLParserError
from ogcxml.logging_config import setup_logging
from ogcxml.ogc.wms import WMSCapabilities
from ogcxml.parsing.notifications import ParserNotification
from ogcxml.storage.yaml_writer import save_yaml

app = typer.Typer(
    name="ogcxml",
    help="Parse OGC capabilities documents.",
)
console = Console()


@app.command()
def parse(
    source: str = typer.Argument(
        ...,
        help="File path or http(s) URL of a WMS capabilities document",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Save the parsed document as YAML to this path",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Trace every parsed element",
    ),
) -> None:
    """Parse a WMS capabilities document and summarize it."""
    if verbose:
        setup_logging(logging.DEBUG)

    notifications: list[ParserNotification] = []

    console.print(f"[bold]Parsing {source}[/bold]")
    console.print()

    try:
        capabilities = WMSCapabilities(source, notifications.append).parse()
    except (XMLParserError, requests.RequestException) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1) from e

    if capabilities is None:
        console.print("[bold red]Error:[/bold red] no WMS capabilities root element found")
        raise typer.Exit(1)

    console.print(f"  Version: [green]{capabilities.version or 'unknown'}[/green]")
    if capabilities.update_sequence:
        console.print(f"  Update sequence: {capabilities.update_sequence}")

    service = capabilities.service_information
    if service is not None:
        console.print(f"  Title: [green]{service.title or 'none'}[/green]")

    capability = capabilities.capability_information
    if capability is not None:
        console.print(f"  Requests: {', '.join(capability.request_names) or 'none'}")

    if notifications:
        console.print()
        console.print(f"[yellow]{len(notifications)} diagnostic(s):[/yellow]")
        for notification in notifications:
            console.print(f"  [dim]{notification.describe()}[/dim]")

    if output is not None:
        output_path = save_yaml(capabilities, output)
        console.print()
        console.print(f"[bold green]Saved to:[/bold green] {output_path}")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"ogcxml {__version__}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
