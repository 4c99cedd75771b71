"""CLI interface for the engagement integrity pipeline."""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from engagement_integrity.evaluators.composite import user_message
from engagement_integrity.models.model_policy import FusionWeights
from engagement_integrity.models.model_result import EvaluationReport, Verdict
from engagement_integrity.pipeline import load_submissions, run_evaluation_pipeline, save_reports

app = typer.Typer(
    name="eip",
    help="Engagement Integrity Pipeline - Judge raid engagement submissions",
)

console = Console()

VERDICT_COLORS = {
    Verdict.ADMIT: "green",
    Verdict.FLAG: "yellow",
    Verdict.REJECT: "red",
}


def _get_score_color(score: float) -> str:
    """Get color for score display."""
    if score >= 0.7:
        return "green"
    elif score >= 0.4:
        return "yellow"
    else:
        return "red"


def _print_report(report: EvaluationReport, verbose: bool) -> None:
    """Render one report as a per-evaluator table plus its decision."""
    title = f"{report.user_id or 'unknown'} @ {report.raid_id or 'unknown'}"
    table = Table(title=title)
    table.add_column("Evaluator", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Verdict", justify="center")
    table.add_column("Indicators", style="dim")

    for result in report.results:
        color = _get_score_color(result.score)
        verdict = "-" if result.verdict is None else str(result.verdict).lower()
        table.add_row(
            result.kind.value,
            f"[{color}]{result.score:.3f}[/{color}]",
            verdict,
            ", ".join(result.indicators) or "-",
        )

    console.print(table)

    decision = report.decision
    color = VERDICT_COLORS[decision.verdict]
    console.print(
        f"Decision: [bold {color}]{decision.verdict.value.upper()}[/bold {color}]  "
        f"trust={decision.trust_score:.3f}  points={decision.points_awarded}"
    )
    if decision.reasons:
        console.print(f"Reasons: {', '.join(decision.reasons)}")
    if report.failed_evaluators:
        console.print(f"[yellow]Failed evaluators:[/yellow] {', '.join(report.failed_evaluators)}")
    if verbose:
        console.print(f"User message: {user_message(decision)}")
        for result in report.results:
            if result.details:
                console.print(f"  [dim]{result.kind.value}: {escape(str(result.details))}[/dim]")
    console.print()


@app.command()
def evaluate(
    file: Path = typer.Argument(..., help="JSON file with one submission or a list"),
    output: str = typer.Option(None, "--output", "-o", help="Write reports as JSON to this path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show details and debug logs"),
) -> None:
    """Evaluate engagement submissions and print the decisions."""
    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        submissions = load_submissions(file)
        fusion_weights = FusionWeights.from_env()
    except (OSError, ValueError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if not submissions:
        console.print("[yellow]No submissions found.[/yellow]")
        return

    reports = run_evaluation_pipeline(submissions, weights=fusion_weights)

    for report in reports:
        _print_report(report, verbose)

    admitted = sum(1 for r in reports if r.decision.verdict == Verdict.ADMIT)
    console.print(f"[bold]{admitted}/{len(reports)} admitted[/bold]")

    if output:
        try:
            output_path = save_reports(reports, output)
        except OSError as e:
            console.print(f"[red]Error writing reports:[/red] {escape(str(e))}")
            raise typer.Exit(1)
        console.print(f"[green]Wrote {len(reports)} reports to {output_path}[/green]")


@app.command()
def weights() -> None:
    """Show effective fusion weights (after environment overrides)."""
    try:
        effective = FusionWeights.from_env()
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    table = Table(title="Fusion Weights")
    table.add_column("Evaluator", style="cyan")
    table.add_column("Weight", justify="right", style="magenta")

    for name, value in effective.model_dump().items():
        table.add_row(name, f"{value:.3f}")

    console.print(table)


if __name__ == "__main__":
    app()
