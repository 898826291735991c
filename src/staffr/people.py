import typer
from typing import Optional
from rich.table import Table

from .capacity import active_assignments, assignments_for_engineer, completed_assignments, compute_capacity, monthly_utilization
from .intervals import assignment_status, duration_days
from .matching import filter_engineers
from .snapshot import join_assignments
from .utils import console, format_status, get_session, get_utilization_color

people_app = typer.Typer(help="Inspect engineers, their skills and capacity")

@people_app.command(name="list")
def list_people(
    ctx: typer.Context,
    skill: Optional[str] = typer.Option(None, "--skill", "-s", help="Filter by skill (substring match)"),
    search: Optional[str] = typer.Option(None, "--search", "-q", help="Search name, email, or skills")
):
    session = get_session(ctx)
    engineers = session.source.list_engineers()
    if not engineers: return console.print("[yellow]The roster is currently empty.[/yellow]")
    assignments = session.source.list_assignments()

    table = Table(title="Engineering Roster", header_style="bold magenta")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="white")
    table.add_column("Email", style="cyan")
    table.add_column("Seniority", style="yellow")
    table.add_column("Capacity", justify="right")
    table.add_column("Available", justify="right")
    table.add_column("Skills", style="blue")

    for e in filter_engineers(engineers, search=search, skill=skill):
        cap = compute_capacity(e, assignments, session.now)
        color = get_utilization_color(cap.current_capacity, e.max_capacity)
        skills = ", ".join(sorted(e.skills))
        table.add_row(
            e.id, e.name, e.email or "-", e.seniority.value,
            f"[{color}]{cap.current_capacity}%[/] / {e.max_capacity}%", f"{cap.available_capacity}%",
            skills if skills else "No skills logged"
        )
    console.print(table)

@people_app.command(name="capacity")
def show_capacity(ctx: typer.Context, engineer_id: str = typer.Argument(..., help="Engineer ID")):
    session = get_session(ctx)
    engineer = session.source.get_engineer(engineer_id)
    if engineer is None:
        typer.secho(f"❌ Engineer {engineer_id} not found.", fg="red"); raise typer.Exit(1)

    now = session.now
    own = assignments_for_engineer(session.source.list_assignments(), engineer.id)
    cap = compute_capacity(engineer, own, now)
    color = get_utilization_color(cap.current_capacity, engineer.max_capacity)

    console.print(f"\n[bold]{engineer.name}[/bold] ({engineer.seniority.value}, {engineer.department or 'no department'})")
    console.print(f"Allocated: [{color}]{cap.current_capacity}%[/] of {engineer.max_capacity}%  |  Available: {cap.available_capacity}%")
    console.print(f"{len(active_assignments(own, now))} active, {len(completed_assignments(own, now))} completed assignment(s)\n")

    table = Table(title="Assignments", header_style="bold magenta")
    table.add_column("Project", style="cyan"); table.add_column("Role")
    table.add_column("Alloc.", justify="right"); table.add_column("Start"); table.add_column("End")
    table.add_column("Days", justify="right"); table.add_column("Status")

    projects = session.source.list_projects()
    for view in sorted(join_assignments(own, [engineer], projects), key=lambda v: v.assignment.start_date):
        a = view.assignment
        table.add_row(
            view.project_name, a.role or "-", f"{a.allocation_percentage}%",
            session.fmt(a.start_date), session.fmt(a.end_date),
            str(duration_days(a.start_date, a.end_date)), format_status(assignment_status(a.end_date, now))
        )
    console.print(table)

    forecast = Table(title="Utilization Forecast", header_style="bold magenta")
    months = monthly_utilization(own, now, months=session.config["forecast_months"])
    for m in months: forecast.add_column(m.label, justify="center")
    forecast.add_row(*[f"[{get_utilization_color(m.utilization)}]{m.utilization}%[/]" for m in months])
    console.print(forecast)
