"""TalentMatch CLI - job recommendations for candidates."""

import json
import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from talentmatch.config import (
    DEFAULT_LIST_LIMIT,
    DEFAULT_LIST_MIN_SCORE,
    JOB_CANDIDATES_LIMIT,
    JOB_CANDIDATES_MIN_SCORE,
)
from talentmatch.db.catalog import SqlCatalogStore
from talentmatch.db.connection import init_tables
from talentmatch.db.recommendations import SqlRecommendationStore
from talentmatch.errors import MatchingError
from talentmatch.schemas.match import MatchResult, Recommendation
from talentmatch.services.recommendation_service import RecommendationGenerator

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = typer.Typer(help="TalentMatch - job recommendations based on candidate profiles")
console = Console()


def _generator() -> RecommendationGenerator:
    return RecommendationGenerator(catalog=SqlCatalogStore(), store=SqlRecommendationStore())


@app.command(name="init-db")
def init_db() -> None:
    """Create database tables if they don't exist."""
    try:
        init_tables()
        console.print("[bold green]Database initialized.[/bold green]")
    except Exception as e:
        console.print(f"[red]Error initializing database: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def load(
    data_file: Path = typer.Option(
        ..., "--file", "-f", help="Path to JSON file with candidates, jobs and applications"
    ),
) -> None:
    """Load candidates, jobs and applications from a JSON file.

    The file holds an object with optional "candidates", "jobs" and
    "applications" arrays; applications are {"candidate_id", "job_id"} pairs.
    """
    if not data_file.exists():
        console.print(f"[red]Error: File not found: {data_file}[/red]")
        raise typer.Exit(1)

    try:
        data = json.loads(data_file.read_text())
        init_tables()
        catalog = SqlCatalogStore()

        for candidate in data.get("candidates", []):
            catalog.save_candidate(candidate)
        for job in data.get("jobs", []):
            catalog.save_job(job)
        applications = 0
        for application in data.get("applications", []):
            if catalog.record_application(application["candidate_id"], application["job_id"]):
                applications += 1

        console.print("[bold green]Load complete![/bold green]")
        console.print(f"  Candidates: {len(data.get('candidates', []))}")
        console.print(f"  Jobs: {len(data.get('jobs', []))}")
        console.print(f"  New applications: {applications}")

    except Exception as e:
        console.print(f"[red]Error loading data: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def recommend(
    candidate_id: str = typer.Option(..., "--candidate", "-c", help="Candidate ID"),
    output_json: bool = typer.Option(False, "--json", help="Output results as JSON"),
) -> None:
    """Regenerate recommendations for a candidate and display them."""
    try:
        stats, recommendations = _generator().generate_with_stats(candidate_id)
    except MatchingError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if stats["jobs_skipped_malformed"]:
        console.print(
            f"[yellow]Skipped {len(stats['jobs_skipped_malformed'])} malformed jobs: "
            f"{', '.join(stats['jobs_skipped_malformed'])}[/yellow]"
        )

    if output_json:
        _output_json(recommendations)
    else:
        console.print(
            f"[bold cyan]Generated {len(recommendations)} job recommendations "
            f"from {stats['jobs_scored']} scored jobs[/bold cyan]"
        )
        _output_pretty(recommendations)


@app.command(name="list")
def list_recommendations(
    candidate_id: str = typer.Option(..., "--candidate", "-c", help="Candidate ID"),
    min_score: int = typer.Option(DEFAULT_LIST_MIN_SCORE, "--min-score", help="Minimum match score"),
    limit: int = typer.Option(DEFAULT_LIST_LIMIT, "--limit", "-n", help="Number of results to show"),
    output_json: bool = typer.Option(False, "--json", help="Output results as JSON"),
) -> None:
    """List stored recommendations for a candidate."""
    recommendations = _generator().list_recommendations(candidate_id, min_score=min_score, limit=limit)

    if not recommendations:
        console.print("[yellow]No recommendations found. Run 'talentmatch recommend' first.[/yellow]")
        raise typer.Exit(0)

    if output_json:
        _output_json(recommendations)
    else:
        _output_pretty(recommendations)


@app.command()
def score(
    candidate_id: str = typer.Option(..., "--candidate", "-c", help="Candidate ID"),
    job_id: str = typer.Option(..., "--job", "-j", help="Job ID"),
    output_json: bool = typer.Option(False, "--json", help="Output result as JSON"),
) -> None:
    """Score one candidate against one active job without saving."""
    try:
        result = _generator().score_application(candidate_id, job_id)
    except MatchingError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if output_json:
        json.dump(obj=result.model_dump(mode="json"), fp=sys.stdout, indent=2)
        sys.stdout.write("\n")
    else:
        console.print(Panel(renderable=_describe(result), title=f"[bold]Job {job_id}[/bold]", border_style="green"))


@app.command()
def stats(
    candidate_id: str = typer.Option(..., "--candidate", "-c", help="Candidate ID"),
) -> None:
    """Show recommendation statistics for a candidate."""
    overview = _generator().stats(candidate_id)

    table = Table(title=f"Recommendations for {candidate_id}")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Total", str(overview["total"]))
    table.add_row("Viewed", str(overview["viewed"]))
    table.add_row("Unviewed", str(overview["unviewed"]))
    table.add_row("High matches", str(overview["high_match"]))
    table.add_row("Average score", str(overview["average_score"]))
    console.print(table)


@app.command(name="mark-viewed")
def mark_viewed(
    candidate_id: str = typer.Option(..., "--candidate", "-c", help="Candidate ID"),
    recommendation_id: int = typer.Option(..., "--id", help="Recommendation ID"),
) -> None:
    """Mark one of the candidate's recommendations as viewed."""
    try:
        _generator().mark_viewed(candidate_id, recommendation_id)
    except MatchingError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    console.print("[green]Recommendation marked as viewed[/green]")


@app.command()
def clear(
    candidate_id: str = typer.Option(..., "--candidate", "-c", help="Candidate ID"),
) -> None:
    """Delete all recommendations for a candidate."""
    deleted = _generator().clear(candidate_id)
    console.print(f"[green]Cleared {deleted} recommendations[/green]")


@app.command(name="job-candidates")
def job_candidates(
    job_id: str = typer.Option(..., "--job", "-j", help="Job ID"),
    min_score: int = typer.Option(JOB_CANDIDATES_MIN_SCORE, "--min-score", help="Minimum match score"),
    limit: int = typer.Option(JOB_CANDIDATES_LIMIT, "--limit", "-n", help="Number of candidates to show"),
) -> None:
    """Show the best matching candidates for a job."""
    recommendations = _generator().top_candidates(job_id, min_score=min_score, limit=limit)

    if not recommendations:
        console.print("[yellow]No matching candidates found.[/yellow]")
        raise typer.Exit(0)

    table = Table(title=f"Top candidates for job {job_id}")
    table.add_column("Candidate", style="cyan")
    table.add_column("Score", style="green")
    table.add_column("Reasoning")
    for rec in recommendations:
        table.add_row(rec.candidate_id, str(rec.match_score), rec.reasoning)
    console.print(table)


@app.command(name="purge-expired")
def purge_expired() -> None:
    """Delete recommendations older than their expiry time."""
    deleted = _generator().purge_expired()
    console.print(f"[green]Purged {deleted} expired recommendations[/green]")


def _output_json(recommendations: list[Recommendation]) -> None:
    """Output recommendations as JSON to stdout."""
    output = [rec.model_dump(mode="json") for rec in recommendations]
    json.dump(obj=output, fp=sys.stdout, indent=2)
    sys.stdout.write("\n")


def _describe(match: MatchResult | Recommendation) -> str:
    details = match.match_details
    content = [
        f"[cyan]Match Score:[/cyan] {match.match_score}",
        f"[cyan]Skills:[/cyan] {details.skills_match.percentage:.0f}%",
        f"[cyan]Experience:[/cyan] {details.experience_match.reason}",
        f"[cyan]Location:[/cyan] {details.location_match.reason}",
        f"\n{match.reasoning}",
    ]
    if details.skills_match.missing:
        content.append("\n[cyan]Skills to develop:[/cyan]")
        content.append(f"  {', '.join(details.skills_match.missing[:7])}")
        if len(details.skills_match.missing) > 7:
            content.append(f"  ... and {len(details.skills_match.missing) - 7} more")
    return "\n".join(content)


def _output_pretty(recommendations: list[Recommendation]) -> None:
    """Output recommendations in pretty console format."""
    for i, rec in enumerate(iterable=recommendations, start=1):
        header = f"[bold]#{i} Job {rec.job_id}[/bold]"
        if rec.id is not None:
            header += f" (id {rec.id})"
        if rec.viewed:
            header += " [dim]viewed[/dim]"

        panel = Panel(
            renderable=_describe(rec),
            title=header,
            border_style="green" if i == 1 else "blue",
        )
        console.print(panel)
        console.print()


if __name__ == "__main__":
    app()
