"""CLI commands for address validation, text scanning and chain classification."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from mintscope.models.chain import ChainFamily

address_app = typer.Typer(help="Address tools — validate addresses, scan text, classify chains.")
console = Console()


# ---------------------------------------------------------------------------
# mintscope address validate <address>
# ---------------------------------------------------------------------------


@address_app.command("validate")
def validate_address(
    address: str = typer.Argument(..., help="Token or wallet address to validate."),
    family: Optional[ChainFamily] = typer.Option(None, "--family", "-f", help="Expected chain family."),
) -> None:
    """Validate an address and report whether it is a known base asset."""
    from mintscope.address import detect_family, is_excluded, is_valid_address

    if family is not None:
        detected = family if is_valid_address(address, family) else None
    else:
        detected = detect_family(address)

    if detected is None:
        console.print("[red]✗[/red] Not a valid address" + (f" for {family.value}" if family else ""))
        raise typer.Exit(code=1)

    console.print(f"[green]✓[/green] Valid {detected.value} address")
    if is_excluded(address, detected):
        console.print("  [yellow]Excluded:[/yellow] well-known base asset or program account")


# ---------------------------------------------------------------------------
# mintscope address scan <file-or-text>
# ---------------------------------------------------------------------------


@address_app.command("scan")
def scan_text(
    source: str = typer.Argument(..., help="Text string, or path to a text/HTML file, to scan."),
    limit: int = typer.Option(20, "--limit", "-n", help="Maximum addresses to report."),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output results as JSON."),
) -> None:
    """Scan text or a file for Solana token addresses."""
    from mintscope.fallback import detect_addresses_in_text

    path = Path(source)
    try:
        is_file = path.is_file()
    except OSError:
        # Long inline text can exceed the filesystem name limit.
        is_file = False
    if is_file:
        if path.suffix.lower() in (".html", ".htm"):
            from mintscope.dom.soup import SoupDocument

            text = SoupDocument.from_file(path).text()
        else:
            text = path.read_text(encoding="utf-8", errors="replace")
        label = str(path)
    else:
        text = source
        label = "<text>"

    addresses = detect_addresses_in_text(text, limit=limit)

    if json_output:
        console.print_json(json.dumps(addresses))
        return

    if not addresses:
        console.print(f"No token addresses found in {label}")
        return

    table = Table(title=f"Token Addresses Found in {label}")
    table.add_column("#", style="dim", width=4)
    table.add_column("Address")
    for i, addr in enumerate(addresses, 1):
        table.add_row(str(i), addr)
    console.print(table)


# ---------------------------------------------------------------------------
# mintscope address chain <url>
# ---------------------------------------------------------------------------


@address_app.command("chain")
def classify_url(
    url: str = typer.Argument(..., help="Aggregator page URL."),
) -> None:
    """Print the chain an aggregator URL refers to."""
    from mintscope.resolution.chain import classify_chain

    chain = classify_chain(url)
    console.print(f"{chain.value} ({chain.family.value})")
