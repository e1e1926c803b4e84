"""Unified CLI entry point for mintscope.

Config precedence: settings.default.toml -> settings.local.toml -> env vars (MINTSCOPE_* with double underscores) -> CLI flags.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Optional

import typer
from pydantic import ValidationError

from mintscope.cli.address_cmd import address_app
from mintscope.cli.resolve_cmd import resolve_command
from mintscope.cli.settings_cmd import settings_app

try:
    from importlib.metadata import version

    VERSION = version("mintscope")
except Exception:
    VERSION = "unknown"

APP_HELP = (
    "mintscope — resolve which token (mint) and chain a trading-site page is about. "
    "Config precedence: settings.default.toml -> settings.local.toml -> env vars (MINTSCOPE_* with __) -> CLI flags."
)

app = typer.Typer(add_completion=True, help=APP_HELP)

app.command("resolve")(resolve_command)
app.add_typer(address_app, name="address")
app.add_typer(settings_app, name="settings")


class JsonLogFormatter(logging.Formatter):
    """One JSON object per log line, for log shippers that parse severity."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "severity": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
        }
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def configure_logging(level: str = "INFO", json_format: bool = False) -> None:
    """Configure the root logger for CLI runs.

    Plain-text lines on stderr by default; JSON lines when *json_format* is set.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    if json_format:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(JsonLogFormatter())
        logging.root.handlers.clear()
        logging.root.addHandler(handler)
        logging.root.setLevel(log_level)
    else:
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
            stream=sys.stderr,
        )

    # Playwright's driver chatter is not useful at INFO.
    logging.getLogger("asyncio").setLevel(logging.WARNING)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override logging.level (DEBUG, INFO, ...)."),
) -> None:
    """Show help when no subcommand is provided."""
    if version:
        typer.echo(f"mintscope {VERSION}")
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    from mintscope.settings import get_settings

    try:
        settings = get_settings()
    except ValidationError:
        # Leave the report to `settings validate`; log with defaults meanwhile.
        configure_logging(log_level or "INFO")
        return
    configure_logging(log_level or settings.logging.level, settings.logging.json_format)


if __name__ == "__main__":
    app()
