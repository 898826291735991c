import typer
from typing import Optional
from rich.table import Table

from .analytics import compute_team_analytics, skill_demand, skill_gap_analysis
from .intervals import assignment_status
from .snapshot import join_assignments
from .timeline import AssignmentFilter, bucket_assignments_by_month, upcoming_assignments
from .utils import console, format_status, get_session, get_utilization_color

report_app = typer.Typer(help="Generate utilization, timeline, and skill gap reports")

@report_app.command(name="team")
def report_team(ctx: typer.Context):
    session = get_session(ctx)
    engineers, projects = session.source.list_engineers(), session.source.list_projects()
    report = compute_team_analytics(engineers, projects, session.source.list_assignments(), session.now)

    summary = Table(title=f"Team Analytics ({session.fmt(session.now)})", header_style="bold magenta", show_header=False)
    summary.add_column("Metric", style="cyan"); summary.add_column("Value", justify="right")
    summary.add_row("Engineers", str(report.total_engineers))
    summary.add_row("Active Projects", str(report.active_projects))
    summary.add_row("Active Assignments", str(report.active_assignments))
    summary.add_row("Average Utilization", f"[{get_utilization_color(report.average_utilization)}]{round(report.average_utilization)}%[/]")
    summary.add_row("Overloaded (>90%)", f"[red]{report.overloaded_engineers}[/]")
    summary.add_row("Available (>20% free)", f"[green]{report.available_engineers}[/]")
    for status, count in report.project_status_distribution.items():
        summary.add_row(f"Projects: {status.value}", str(count))
    console.print(summary)

    table = Table(title="Engineer Utilization", header_style="bold magenta")
    table.add_column("Name", style="cyan"); table.add_column("Cap.", justify="right", style="dim")
    table.add_column("Util.", justify="right"); table.add_column("Avail.", justify="right")
    for load in sorted(report.loads, key=lambda l: l.current_capacity, reverse=True):
        color = get_utilization_color(load.current_capacity, load.engineer.max_capacity)
        flag = " [bold red]OVERLOADED[/]" if load.is_overloaded else ""
        table.add_row(load.engineer.name, f"{load.engineer.max_capacity}%", f"[{color}]{load.current_capacity}%[/]{flag}", f"{load.available_capacity}%")
    console.print(table)

@report_app.command(name="skills")
def report_skills(ctx: typer.Context, top: Optional[int] = typer.Option(None, "--top", "-t", min=0, help="Number of in-demand skills to show")):
    session = get_session(ctx)
    engineers, projects = session.source.list_engineers(), session.source.list_projects()
    if top is None: top = session.config["top_skills"]

    demand = Table(title="Most In-Demand Skills", header_style="bold magenta")
    demand.add_column("Skill", style="blue"); demand.add_column("Projects", justify="right")
    for skill, count in skill_demand(projects, top=top):
        demand.add_row(skill, str(count))
    console.print(demand)

    gap = skill_gap_analysis(engineers, projects)
    console.print(f"\nSkill coverage: [bold]{round(gap.coverage_percentage)}%[/bold] "
                  f"({len(gap.available_skills)} available / {len(gap.required_skills)} required)")

    table = Table(title="Skill Gap Analysis", header_style="bold magenta")
    table.add_column("Skill"); table.add_column("Engineers", justify="center"); table.add_column("Status")
    missing, low = set(gap.missing_skills), set(gap.low_coverage_skills)
    for skill in gap.required_skills:
        holders = sum(1 for e in engineers if skill in e.skills)
        if skill in missing: status = "[red]⚠️ MISSING[/]"
        elif skill in low: status = "[yellow]⚠️ LOW COVERAGE[/]"
        else: status = "[green]✅ Covered[/]"
        table.add_row(skill, str(holders), status)
    console.print(table)

@report_app.command(name="calendar")
def report_calendar(
    ctx: typer.Context,
    year: Optional[int] = typer.Option(None, "--year", "-y"),
    month: Optional[int] = typer.Option(None, "--month", "-m", min=1, max=12),
    project: Optional[str] = typer.Option(None, "--project", "-p", help="Only this project ID"),
    engineer: Optional[str] = typer.Option(None, "--engineer", "-e", help="Only this engineer ID"),
    show: int = typer.Option(3, "--show", help="Assignments listed per day before summarising")
):
    session = get_session(ctx)
    year, month = year or session.now.year, month or session.now.month
    views = {v.assignment.id: v for v in join_assignments(
        session.source.list_assignments(), session.source.list_engineers(), session.source.list_projects())}

    buckets = bucket_assignments_by_month(
        [v.assignment for v in views.values()], year, month, AssignmentFilter(project_id=project, engineer_id=engineer))

    table = Table(title=f"Assignment Calendar {buckets[0].instant.strftime('%B %Y')}", header_style="bold magenta")
    table.add_column("Day", style="bold yellow"); table.add_column("Assignments")
    for b in buckets:
        if not b.assignments:
            table.add_row(b.instant.strftime("%a %d"), "[dim].[/]"); continue
        shown = [f"{views[a.id].engineer_name} @ {views[a.id].project_name}" for a in b.assignments[:show]]
        if len(b.assignments) > show: shown.append(f"[dim]+{len(b.assignments) - show} more[/]")
        table.add_row(b.instant.strftime("%a %d"), "\n".join(shown))
    console.print(table)

@report_app.command(name="upcoming")
def report_upcoming(ctx: typer.Context, limit: Optional[int] = typer.Option(None, "--limit", "-l", min=0)):
    session = get_session(ctx)
    if limit is None: limit = session.config["upcoming_limit"]
    upcoming = upcoming_assignments(session.source.list_assignments(), session.now, limit=limit)
    if not upcoming: return console.print("[yellow]No upcoming assignments.[/yellow]")

    table = Table(title="Upcoming Assignments", header_style="bold magenta")
    table.add_column("Start"); table.add_column("End"); table.add_column("Engineer", style="cyan")
    table.add_column("Project"); table.add_column("Role"); table.add_column("Alloc.", justify="right"); table.add_column("Status")
    for v in join_assignments(upcoming, session.source.list_engineers(), session.source.list_projects()):
        a = v.assignment
        table.add_row(
            session.fmt(a.start_date), session.fmt(a.end_date), v.engineer_name, v.project_name,
            a.role or "-", f"{a.allocation_percentage}%", format_status(assignment_status(a.end_date, session.now))
        )
    console.print(table)
