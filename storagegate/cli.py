"""storagegate CLI"""

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

app = typer.Typer(name="storagegate", help="Gate an application behind storage access")
console = Console()

LOG_FILE = Path.home() / ".local" / "share" / "storagegate" / "storagegate.log"


def _setup_logging(level: str, to_file: bool = False):
    log_level = getattr(logging, level.upper(), logging.INFO)
    if to_file:
        # The TUI owns the terminal
        LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(LOG_FILE)
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    else:
        handler = RichHandler(console=Console(stderr=True), show_path=False)
    logging.basicConfig(level=log_level, handlers=[handler], force=True)


def _load(config_path: Optional[Path]):
    from storagegate.audit import AuditLog
    from storagegate.config import ConfigError, load_config

    try:
        config = load_config(config_path)
    except ConfigError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=2)

    AuditLog.configure(log_path=config.audit.file, enabled=config.audit.enabled)
    return config


@app.command("run")
def run(
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to config.json"),
    log_level: str = typer.Option("INFO", "--log-level", help="DEBUG, INFO, WARNING, ERROR"),
):
    """Start the application shell behind the storage gate"""
    from storagegate.tui.app import GatedApp

    _setup_logging(log_level, to_file=True)
    config = _load(config_path)
    gated = GatedApp(config)
    gated.run()
    raise typer.Exit(code=gated.return_code or 0)


@app.command("status")
def status(
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to config.json"),
    log_level: str = typer.Option("WARNING", "--log-level", help="DEBUG, INFO, WARNING, ERROR"),
):
    """Show platform tier, grant flow and current grant"""
    from storagegate.gate.flows import FlowKind, runtime_permissions, select_flow, settings_target
    from storagegate.platform.oracle import PathAccessOracle
    from storagegate.platform.tier import detect_tier

    _setup_logging(log_level)
    config = _load(config_path)
    tier = detect_tier(config.platform.tier)
    flow = select_flow(tier)
    granted = PathAccessOracle(config.storage.root).is_access_granted()

    table = Table(title="Storage Gate")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("Package", config.platform.package_name)
    table.add_row("Platform tier", str(tier))
    table.add_row("Grant flow", flow.value)
    if flow == FlowKind.SETTINGS_SCREEN:
        table.add_row("Settings target", settings_target(config.platform.package_name))
    else:
        table.add_row("Permissions", ", ".join(runtime_permissions(tier)))
    table.add_row("Storage root", str(config.storage.root))
    table.add_row("Access", "[green]granted[/green]" if granted else "[red]not granted[/red]")
    console.print(table)


@app.command("check")
def check(
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to config.json"),
):
    """Exit 0 if storage access is held, 1 otherwise"""
    from storagegate.platform.oracle import PathAccessOracle

    config = _load(config_path)
    if PathAccessOracle(config.storage.root).is_access_granted():
        console.print("[green]GRANTED[/green]")
        return
    console.print("[red]NOT GRANTED[/red]")
    raise typer.Exit(code=1)


@app.command("audit")
def audit(
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to config.json"),
    limit: int = typer.Option(20, "--limit", "-n", help="Number of entries to show"),
):
    """Show recent gate decisions"""
    from storagegate.audit import get_audit_log

    _load(config_path)
    entries = get_audit_log().read_file(limit)
    if not entries:
        console.print("[yellow]No gate events recorded.[/yellow]")
        return

    table = Table(title="Gate Events")
    table.add_column("Time", style="dim")
    table.add_column("Action")
    table.add_column("Flow")
    table.add_column("Granted")
    for entry in entries:
        granted = "" if entry.granted is None else ("yes" if entry.granted else "no")
        table.add_row(
            entry.timestamp.split("T")[-1].split(".")[0],
            entry.action,
            entry.flow or "",
            granted,
        )
    console.print(table)


@app.command("validate")
def validate(
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to config.json"),
):
    """Validate a configuration file"""
    from storagegate.config import CONFIG_FILE, ConfigValidator

    path = config_path or CONFIG_FILE
    data = {}
    if path.exists():
        try:
            data = json.loads(path.read_text())
        except json.JSONDecodeError as e:
            console.print(f"[red]Invalid JSON in {path}: {e}[/red]")
            raise typer.Exit(code=2)

    results = ConfigValidator.test_configuration(data)
    for name, outcome in results["tests"].items():
        mark = "[green]ok[/green]" if outcome["valid"] else "[red]fail[/red]"
        console.print(f"{mark} {name}")
        for line in outcome.get("errors", []) + outcome.get("warnings_errors", []):
            console.print(f"    {line}")
        if outcome.get("message"):
            console.print(f"    {outcome['message']}")

    if not results["overall_valid"]:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
