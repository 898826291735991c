import json
import logging
from datetime import datetime
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from .snapshot import SNAPSHOT_ENVELOPES

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".staffr"
CONFIG_FILE = CONFIG_DIR / "config.json"

DEFAULT_CONFIG = {
    "data_dir": str(CONFIG_DIR / "snapshot"),
    "forecast_months": 3,
    "upcoming_limit": 10,
    "top_skills": 5,
    "date_format": "%Y-%m-%d"
}

COUNT_SETTINGS = ("forecast_months", "upcoming_limit", "top_skills")

DATE_FORMATS = {
    "1": ("%Y-%m-%d", "ISO standard"),
    "2": ("%d/%m/%Y", "EU/India"),
    "3": ("%m/%d/%Y", "US"),
}

def load_config(config_file: Path = CONFIG_FILE) -> dict:
    """Stored settings merged over the defaults. Unreadable files and bad counts fall back to defaults."""
    if not config_file.exists():
        return DEFAULT_CONFIG.copy()
    try:
        with config_file.open("r") as f:
            stored = json.load(f)
    except json.JSONDecodeError as exc:
        logger.warning("Config file %s is not valid JSON (%s); using defaults", config_file, exc)
        return DEFAULT_CONFIG.copy()
    if not isinstance(stored, dict):
        logger.warning("Config file %s does not hold an object; using defaults", config_file)
        return DEFAULT_CONFIG.copy()

    config = {**DEFAULT_CONFIG, **stored}
    for key in COUNT_SETTINGS:
        value = config[key]
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            logger.warning("Config value %s=%r is not a non-negative whole number; using %r", key, value, DEFAULT_CONFIG[key])
            config[key] = DEFAULT_CONFIG[key]
    return config

def save_config(config_data: dict, config_file: Path = CONFIG_FILE):
    config_file.parent.mkdir(parents=True, exist_ok=True)
    with config_file.open("w") as f:
        json.dump(config_data, f, indent=2)

def snapshot_layout_table(data_dir: Path) -> Table:
    """The files a snapshot directory should hold, and which of them are present."""
    table = Table(title=f"Snapshot layout in {data_dir}", header_style="bold magenta")
    table.add_column("File", style="cyan"); table.add_column("Accepted shape"); table.add_column("Present", justify="center")
    for filename, envelope in SNAPSHOT_ENVELOPES.items():
        present = "[green]✅[/]" if (data_dir / filename).is_file() else "[red]❌[/]"
        table.add_row(filename, f'[...] or {{"{envelope}": [...]}}', present)
    return table

def _prompt_count(label: str, default: int) -> int:
    while True:
        value = typer.prompt(label, default=default, type=int)
        if value >= 0:
            return value
        typer.secho("⚠️ Please enter zero or a positive number.", fg="yellow")

def run_setup_wizard(config_file: Path = CONFIG_FILE):
    console = Console()
    console.print("\n[bold cyan]🛠️  Welcome to Staffr Setup![/bold cyan]")
    console.print("Staffr reads a point-in-time export of the staffing backend: one JSON file each for engineers, "
                  "projects and assignments, kept together in a single directory.\n")

    config = load_config(config_file)

    data_dir = Path(typer.prompt("Snapshot directory", default=config["data_dir"])).expanduser()
    config["data_dir"] = str(data_dir)
    if data_dir.is_dir():
        console.print(snapshot_layout_table(data_dir))
    else:
        console.print(f"[yellow]⚠️ {data_dir} does not exist yet. Create it and export "
                      f"{', '.join(SNAPSHOT_ENVELOPES)} into it before running reports.[/yellow]")

    console.print("\n[bold]Report Defaults:[/bold]")
    config["forecast_months"] = _prompt_count("Utilization forecast horizon (months)", config["forecast_months"])
    config["upcoming_limit"] = _prompt_count("Upcoming assignments to list", config["upcoming_limit"])
    config["top_skills"] = _prompt_count("Top in-demand skills to show", config["top_skills"])

    console.print("\n[bold]Date Format Preference:[/bold]")
    sample = datetime(2025, 12, 31)
    for key, (fmt, label) in DATE_FORMATS.items():
        console.print(f"{key}: {sample.strftime(fmt)} ({label})")

    current_choice = next((k for k, (fmt, _) in DATE_FORMATS.items() if fmt == config["date_format"]), "1")
    date_choice = typer.prompt("Choose date display format", default=current_choice, type=str)
    if date_choice not in DATE_FORMATS:
        typer.secho(f"⚠️ Unknown choice '{date_choice}', keeping ISO dates.", fg="yellow")
    config["date_format"] = DATE_FORMATS.get(date_choice, DATE_FORMATS["1"])[0]

    save_config(config, config_file)
    console.print(f"\n[bold green]✅ Configuration saved to {config_file}[/bold green]")
