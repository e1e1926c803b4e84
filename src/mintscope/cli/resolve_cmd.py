"""CLI command resolving the token a page is about."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel

from mintscope.exceptions import MintscopeError

console = Console()


def resolve_command(
    url: str = typer.Argument(..., help="URL of the trading-site page."),
    html: Optional[Path] = typer.Option(
        None, "--html", help="Resolve against a saved HTML snapshot instead of loading the live page."
    ),
    fallback: Optional[bool] = typer.Option(
        None,
        "--fallback/--no-fallback",
        help="Apply URL heuristics for hosts without a strategy (default: scan.url_fallback).",
    ),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output the result as JSON."),
) -> None:
    """Resolve the token mint and chain for a page.

    Exits with code 1 when no token is found and 2 when the page or snapshot
    cannot be loaded.
    """
    from mintscope.scan import scan_document, scan_live
    from mintscope.settings import get_settings

    settings = get_settings()
    use_fallback = settings.scan.url_fallback if fallback is None else fallback

    try:
        if html is not None:
            from mintscope.dom.soup import SoupDocument

            result = scan_document(url, SoupDocument.from_file(html), use_fallback=use_fallback)
        else:
            result = scan_live(url, settings, use_fallback=use_fallback)
    except MintscopeError as exc:
        console.print(f"[red]✗[/red] {exc}")
        raise typer.Exit(code=2)

    if json_output:
        console.print_json(json.dumps(result.to_dict()))
    elif result.found:
        console.print(
            Panel(
                f"[bold]Address:[/bold] {result.address}\n[bold]Chain:[/bold]   {result.chain.value}",
                title="Resolved",
                border_style="green",
            )
        )
    else:
        hint = " (no strategy for this host)" if result.needs_fallback else ""
        console.print(f"[yellow]No token found[/yellow] on {url}{hint}")

    if not result.found:
        raise typer.Exit(code=1)
