"""CLI commands for inspecting and validating mintscope settings."""

from __future__ import annotations

import json
from enum import Enum
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

settings_app = typer.Typer(help="Inspect and validate mintscope configuration.")
console = Console()


class SettingsSection(str, Enum):
    """Configuration sections that can be shown on their own."""

    LOGGING = "logging"
    BROWSER = "browser"
    SCAN = "scan"


def _config_layers(env: str) -> list[tuple[str, bool]]:
    """Return each TOML layer file name with whether it exists, lowest precedence first."""
    from mintscope.settings.config import CONFIG_DIR

    names = ["settings.default.toml", f"settings.{env}.toml", "settings.local.toml"]
    return [(name, (CONFIG_DIR / name).is_file()) for name in names]


@settings_app.command("show")
def show_settings(
    section: Optional[SettingsSection] = typer.Option(None, "--section", "-s", help="Only show one section."),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output settings as JSON."),
) -> None:
    """Display the currently resolved settings."""
    from mintscope.settings import get_settings

    data = get_settings().model_dump(mode="json")
    sections = [section.value] if section else [s.value for s in SettingsSection]

    if json_output:
        payload = data[section.value] if section else data
        console.print_json(json.dumps(payload, default=str))
        return

    for name in sections:
        table = Table(title=name, title_justify="left")
        table.add_column("Key", style="cyan")
        table.add_column("Value")
        for key, value in data[name].items():
            table.add_row(key, repr(value) if value == "" else str(value))
        console.print(table)


@settings_app.command("validate")
def validate_settings() -> None:
    """Load every configuration layer and report the effective scan and browser behaviour."""
    from mintscope.settings.config import Settings

    try:
        settings = Settings()
    except ValidationError as e:
        console.print(f"[red]✗[/red] Settings validation failed ({e.error_count()} error(s)):")
        for err in e.errors():
            location = ".".join(str(part) for part in err["loc"])
            console.print(f"  {location}: {err['msg']}")
        raise typer.Exit(code=1)

    console.print("[green]✓[/green] Settings are valid.")
    console.print(f"  Environment: {settings.env}")
    for name, present in _config_layers(settings.env):
        console.print(f"  {name}: {'loaded' if present else '[dim]absent[/dim]'}")

    browser = "headless" if settings.browser.headless else "headed"
    console.print(
        f"  Live pages: {browser} Chromium, wait for {settings.browser.wait_until}, "
        f"timeout {settings.browser.timeout_ms}ms"
    )
    console.print(
        f"  Scan: up to {settings.scan.max_attempts} attempt(s), "
        f"backoff {settings.scan.retry_backoff_ms}ms x attempt, "
        f"URL fallback {'on' if settings.scan.url_fallback else 'off'}"
    )
