"""
jobboard Command Line Interface

Provides CLI commands for managing the jobboard service, including
database setup, serving the API and inspecting scores and listings.
"""

import asyncio
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="jobboard",
    help="Job board backend CLI",
    add_completion=False,
)
console = Console()


def _require_database() -> None:
    """Exit unless MongoDB answers a ping."""
    from jobboard.data.database import get_database_manager

    if not get_database_manager().check_sync_connection():
        console.print("[red]Error: Could not connect to MongoDB. Run 'init-db' first.[/red]")
        raise typer.Exit(1)


@app.callback()
def main_callback():
    """Configure logging before any command runs."""
    from jobboard.utils.logger import setup_logging

    setup_logging()


@app.command()
def version():
    """Show application version."""
    from jobboard import __app_name__, __version__

    console.print(f"[bold blue]{__app_name__}[/bold blue] version [green]{__version__}[/green]")


@app.command()
def info():
    """Show system information and configuration."""
    from jobboard.utils.config import get_settings

    settings = get_settings()

    table = Table(title="jobboard Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Environment", settings.environment)
    table.add_row("Debug Mode", str(settings.debug))
    table.add_row("Database Host", settings.database.host)
    table.add_row("Database Name", settings.database.name)
    table.add_row("API Address", f"{settings.api.host}:{settings.api.port}")
    table.add_row("Dashboard Prefix", settings.api.dashboard_prefix or "/")
    table.add_row("Log Level", settings.logging.level)

    console.print(table)


@app.command()
def init_db():
    """Initialize the database with required collections and indexes."""
    from jobboard.data.database import get_database_manager

    console.print("[yellow]Initializing database...[/yellow]")

    db_manager = get_database_manager()

    console.print("  Checking database connection...")
    _require_database()
    console.print("  [green]✓[/green] Connected to MongoDB")

    console.print("  Creating indexes...")
    asyncio.run(db_manager.ensure_indexes())
    console.print("  [green]✓[/green] Indexes created")

    console.print("\n[green]Database initialized successfully![/green]")


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Bind port"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Serve the HTTP API."""
    import uvicorn

    from jobboard.utils.config import get_settings

    settings = get_settings()
    bind_host = host or settings.api.host
    bind_port = port or settings.api.port

    console.print(f"[yellow]Serving jobboard API on {bind_host}:{bind_port}[/yellow]")
    uvicorn.run(
        "jobboard.api:create_app",
        factory=True,
        host=bind_host,
        port=bind_port,
        reload=reload or settings.api.reload,
        log_level=settings.logging.level.lower(),
    )


@app.command()
def score(
    job_id: str = typer.Argument(..., help="Job ID"),
    candidate_id: str = typer.Argument(..., help="Candidate ID"),
):
    """Score one job against one candidate."""
    from jobboard.core.errors import JobBoardError
    from jobboard.core.matching import get_match_scorer
    from jobboard.data.repositories import get_candidate_repository, get_job_repository
    from jobboard.utils.constants import MAX_MATCH_COUNT

    _require_database()

    try:
        job = get_job_repository().get_by_id(job_id)
        candidate = get_candidate_repository().get_by_id(candidate_id)
    except JobBoardError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)

    if not job:
        console.print(f"[red]Error: Job not found: {job_id}[/red]")
        raise typer.Exit(1)

    if not candidate:
        console.print(f"[red]Error: Candidate not found: {candidate_id}[/red]")
        raise typer.Exit(1)

    result = get_match_scorer().score(job, candidate)

    console.print(f"  Job: [cyan]{job.title}[/cyan] at {job.company_name}")
    console.print(f"  Candidate: [cyan]{candidate.full_name}[/cyan]")
    style = "bold green" if result.is_full_match else "bold"
    console.print(f"  Criteria matched: [{style}]{result.match_count}[/{style}]/{MAX_MATCH_COUNT}")
    console.print(f"  Match score: [bold green]{result.score}[/bold green]")


@app.command()
def recommend(
    candidate_id: str = typer.Argument(..., help="Candidate ID"),
    page: int = typer.Option(1, "--page", "-p", help="Page number"),
    limit: int = typer.Option(9, "--limit", "-n", help="Jobs per page"),
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Search term"),
):
    """Show recommended jobs for a candidate."""
    from jobboard.core.errors import JobBoardError
    from jobboard.core.listing import get_listing_service
    from jobboard.data.database import get_database_manager
    from jobboard.utils.constants import ListingMode

    async def run():
        try:
            return await get_listing_service().list_jobs(
                candidate_id, ListingMode.RECOMMENDED, search=search, page=page, limit=limit
            )
        finally:
            get_database_manager().close_async()

    try:
        result = asyncio.run(run())
    except JobBoardError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"Recommended jobs (page {result.current_page}/{result.total_pages})")
    table.add_column("Score", style="green", justify="right")
    table.add_column("Title", style="cyan")
    table.add_column("Company")
    table.add_column("Location")
    table.add_column("Salary")
    table.add_column("ID", style="dim")

    for job in result.jobs:
        table.add_row(str(job.match_score), job.title, job.company, job.location, job.salary, job.id)

    console.print(table)
    console.print(f"[dim]{result.total_jobs} active job(s) considered[/dim]")


@app.command()
def list_jobs(
    status: str = typer.Option("Active", "--status", help="Active or In-Active"),
    limit: int = typer.Option(20, "--limit", "-n", help="Maximum jobs to show"),
):
    """List job postings by status."""
    from jobboard.data.repositories import get_job_repository
    from jobboard.utils.constants import JobStatus

    try:
        job_status = JobStatus(status)
    except ValueError:
        console.print(f"[red]Error: Unknown status: {status}[/red]")
        raise typer.Exit(1)

    _require_database()

    jobs = get_job_repository().get_by_status(job_status, limit=limit)
    if not jobs:
        console.print("[yellow]No jobs found.[/yellow]")
        raise typer.Exit(0)

    table = Table(title=f"{job_status.value} jobs")
    table.add_column("ID", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Company")
    table.add_column("Location")
    table.add_column("Experience")
    table.add_column("Skills")

    for job in jobs:
        experience = f"{job.min_exp}-{job.max_exp} yrs" if job.min_exp is not None else "-"
        table.add_row(str(job.id), job.title, job.company_name, job.location, experience, ", ".join(job.key_skills))

    console.print(table)


@app.command()
def profile_tasks(
    candidate_id: str = typer.Argument(..., help="Candidate ID"),
):
    """Show the profile-completeness checklist for a candidate."""
    from jobboard.core.errors import JobBoardError
    from jobboard.core.profile import evaluate_profile_tasks
    from jobboard.data.repositories import get_candidate_repository

    _require_database()

    try:
        candidate = get_candidate_repository().get_by_id(candidate_id)
    except JobBoardError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)
    if not candidate:
        console.print(f"[red]Error: Candidate not found: {candidate_id}[/red]")
        raise typer.Exit(1)

    report = evaluate_profile_tasks(candidate)

    table = Table(title=f"Profile tasks for {candidate.full_name}")
    table.add_column("#", justify="right")
    table.add_column("Task", style="cyan")
    table.add_column("Done")
    for task in report.profile_tasks:
        table.add_row(str(task.id), task.task, "[green]✓[/green]" if task.completed else "[red]✗[/red]")

    console.print(table)
    console.print(
        f"Completed [bold]{report.completed_tasks}[/bold]/{report.total_tasks} "
        f"([green]{report.completion_percentage}%[/green])"
    )


if __name__ == "__main__":
    app()
