import typer
from typing import Optional
from rich.table import Table

from .intervals import duration_days, progress_fraction
from .matching import filter_projects, find_suitable_engineers
from .models import ProjectStatus
from .utils import console, get_session, get_utilization_color

project_app = typer.Typer(help="Inspect projects and find suitable engineers")

@project_app.command(name="list")
def list_projects(
    ctx: typer.Context,
    status: Optional[str] = typer.Option(None, "--status", help="planning, active or completed"),
    search: Optional[str] = typer.Option(None, "--search", "-q", help="Search name or description")
):
    session = get_session(ctx)
    projects = session.source.list_projects()
    if not projects: return console.print("[yellow]The project list is empty.[/yellow]")
    status_filter = ProjectStatus.parse(status) if status else None

    assignments = session.source.list_assignments()
    engineers = {e.id: e for e in session.source.list_engineers()}

    table = Table(title="Projects Overview", header_style="bold magenta")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="white")
    table.add_column("Status", style="yellow")
    table.add_column("Dates")
    table.add_column("Progress", justify="right")
    table.add_column("Team", style="cyan")
    table.add_column("Required Skills", style="blue")

    for p in filter_projects(projects, search=search, status=status_filter):
        team = sorted({engineers[a.engineer_id].name for a in assignments if a.project_id == p.id and a.engineer_id in engineers})
        progress = progress_fraction(p.start_date, p.end_date, session.now) * 100
        team_str = ", ".join(team) if team else "[dim]-[/dim]"

        table.add_row(
            p.id, p.name, p.status.value,
            f"{session.fmt(p.start_date)} → {session.fmt(p.end_date)} ({duration_days(p.start_date, p.end_date)}d)",
            f"{progress:.0f}%", f"{team_str} ({len(team)}/{p.team_size})",
            ", ".join(p.required_skills) if p.required_skills else "-"
        )
    console.print(table)

@project_app.command(name="suitable")
def suitable_engineers(ctx: typer.Context, project_id: str = typer.Argument(..., help="Project ID")):
    session = get_session(ctx)
    project = session.source.get_project(project_id)
    if project is None:
        typer.secho(f"❌ Project {project_id} not found.", fg="red"); raise typer.Exit(1)

    candidates = find_suitable_engineers(project, session.source.list_engineers(), session.source.list_assignments(), session.now)
    if not candidates:
        return console.print(f"[yellow]No suitable engineers found for {project.name}.[/yellow]")

    table = Table(title=f"Suitable Engineers: {project.name}", header_style="bold magenta")
    table.add_column("Name", style="white"); table.add_column("Seniority", style="yellow")
    table.add_column("Department"); table.add_column("Matched Skills", style="blue")
    table.add_column("Capacity", justify="right"); table.add_column("Available", justify="right")

    for c in candidates:
        color = get_utilization_color(c.capacity.current_capacity, c.engineer.max_capacity)
        table.add_row(
            c.engineer.name, c.seniority.value, c.department or "-",
            f"{', '.join(c.matched_skills)} ({len(c.matched_skills)}/{len(set(project.required_skills))})",
            f"[{color}]{c.capacity.current_capacity}%[/]", f"{c.capacity.available_capacity}%"
        )
    console.print(table)
