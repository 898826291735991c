from pathlib import Path
from typing import Optional

import typer

from .config import load_config, run_setup_wizard
from .people import people_app
from .project import project_app
from .report import report_app
from .utils import SessionOptions, configure_logging

# Initialize the Main App and attach the Sub-Apps
app = typer.Typer(help="Staffr: Engineering capacity and allocation reports", add_completion=False)
app.add_typer(people_app, name="people")
app.add_typer(project_app, name="project")
app.add_typer(report_app, name="report")

@app.callback()
def main(
    ctx: typer.Context,
    data_dir: Optional[Path] = typer.Option(None, "--data-dir", "-d", help="Directory holding the JSON snapshot"),
    now: Optional[str] = typer.Option(None, "--now", help="Evaluate as of this date (YYYY-MM-DD) instead of today"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging")
):
    configure_logging(verbose)
    cfg = load_config()
    if ctx.invoked_subcommand == "setup":
        return

    ctx.obj = SessionOptions(data_dir or Path(cfg["data_dir"]).expanduser(), now, cfg)

@app.command(name="setup")
def setup():
    """Configure the snapshot location and report defaults."""
    run_setup_wizard()

if __name__ == "__main__":
    app()
