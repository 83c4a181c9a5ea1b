"""Command-line interface for cafarank."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cafarank.config import (
    BASELINE_MARKER,
    DEFAULT_MIN_COVERED,
    DEFAULT_TOP_K,
    NO_DISCRIMINATION_AUC,
    CurationConfig,
    CurationRunConfig,
    ReferenceIds,
)
from cafarank.core.types import SelectionResult

app = typer.Typer(
    name="cafarank",
    help="cafarank: curate bootstrapped benchmark results and select a leaderboard",
)
console = Console()


def _fail(error: Exception) -> None:
    console.print(f"[red]Error: {escape(str(error))}[/red]")
    raise typer.Exit(1)


def _render(result: SelectionResult) -> None:
    from cafarank.leaderboard import format_score, leaderboard_rows

    table = Table(title=f"Top {result.k} (one model per PI)")
    table.add_column("Rank", justify="right")
    table.add_column("Model", style="cyan")
    table.add_column("Mean", justify="right", style="green")
    table.add_column("5%", justify="right")
    table.add_column("95%", justify="right")
    table.add_column("Coverage", justify="right")

    for row in leaderboard_rows(result):
        table.add_row(
            str(row["rank"]) if row["rank"] is not None else "ref",
            row["tag"],
            format_score(row["mean"]),
            format_score(row["q05"]),
            format_score(row["q95"]),
            format_score(row["coverage"], 2),
            style="dim" if row["baseline"] else None,
        )
    console.print(table)

    if result.degraded:
        console.print(
            f"[yellow]Warning: only selected {len(result.selected)} models "
            f"({result.shortfall} short of {result.k})[/yellow]"
        )


def _execute(run_config: CurationRunConfig, json_out: Optional[str], md_out: Optional[str]) -> None:
    from cafarank.leaderboard import run_curation
    from cafarank.reporting import export_report_json, export_report_markdown

    try:
        result = run_curation(run_config)
    except (ValueError, OSError) as e:
        _fail(e)

    _render(result)

    if json_out:
        export_report_json(result, json_out, curation=run_config.curation)
        console.print(f"[green]JSON report saved to {json_out}[/green]")
    if md_out:
        export_report_markdown(result, md_out, curation=run_config.curation)
        console.print(f"[green]Markdown report saved to {md_out}[/green]")


def _logging(verbose: bool, quiet: bool = False) -> None:
    # without -v/-q the library installs no handler; warnings reach the last-resort handler
    if verbose or quiet:
        from cafarank.utils.logging import level_for, setup_logging

        setup_logging(level=level_for(verbose=verbose, quiet=quiet))


@app.command()
def select(
    roster: str = typer.Argument(..., help="Roster file (internal id, external id, team, type, name, PI)"),
    stats: str = typer.Argument(..., help="Bootstrap statistics JSON file"),
    naive: str = typer.Option(..., "--naive", help="Internal id of the naive reference"),
    blast: str = typer.Option(..., "--blast", help="Internal id of the BLAST reference"),
    top_k: int = typer.Option(DEFAULT_TOP_K, "--top-k", "-k", help="Leaderboard size"),
    min_covered: float = typer.Option(DEFAULT_MIN_COVERED, "--min-covered", help="Minimum average number of covered targets"),
    higher_is_better: bool = typer.Option(False, "--higher-is-better", help="Rank descending (Fmax-style)"),
    json_out: Optional[str] = typer.Option(None, "--json", help="Write a JSON report here"),
    md_out: Optional[str] = typer.Option(None, "--markdown", help="Write a Markdown report here"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
):
    """Select the top-K models, one per PI, plus the two references."""
    _logging(verbose, quiet)
    try:
        run_config = CurationRunConfig(
            roster_path=roster,
            stats_path=stats,
            references=ReferenceIds(naive=naive, blast=blast),
            curation=CurationConfig(top_k=top_k, min_covered=min_covered, higher_is_better=higher_is_better),
        )
    except ValueError as e:
        _fail(e)
    _execute(run_config, json_out, md_out)


@app.command()
def run(
    config: str = typer.Argument(..., help="Run config JSON (CurationRunConfig)"),
    json_out: Optional[str] = typer.Option(None, "--json", help="Write a JSON report here"),
    md_out: Optional[str] = typer.Option(None, "--markdown", help="Write a Markdown report here"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
):
    """Run a leaderboard selection described by a config file."""
    from cafarank.utils.config_io import load_run_config

    _logging(verbose, quiet)
    try:
        run_config = load_run_config(config)
    except (ValueError, OSError) as e:
        _fail(e)
    _execute(run_config, json_out, md_out)


@app.command("filter-auc")
def filter_auc(
    aucs: str = typer.Argument(..., help="Term AUC JSON file"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write kept model ids as JSON"),
    marker: str = typer.Option(BASELINE_MARKER, "--baseline-marker", help="Id prefix of baseline placeholders"),
    no_discrimination: float = typer.Option(
        NO_DISCRIMINATION_AUC, "--no-discrimination", help="AUC value that counts as no prediction"
    ),
    config: Optional[str] = typer.Option(
        None, "--config", "-c", help="Take the curation policy from this run config instead"
    ),
):
    """Drop baseline placeholders and models with no informative term AUC."""
    from cafarank.core.filters import select_valid_term_auc
    from cafarank.utils.config_io import load_run_config
    from cafarank.utils.stats_io import load_term_aucs

    try:
        if config:
            curation = load_run_config(config).curation
        else:
            curation = CurationConfig(baseline_marker=marker, no_discrimination_auc=no_discrimination)
        records = load_term_aucs(aucs)
        kept = select_valid_term_auc(records, curation)
    except (ValueError, OSError) as e:
        _fail(e)

    kept_ids = [r.model_id for r in kept]
    kept_set = set(kept_ids)
    dropped = [r.model_id for r in records if r.model_id not in kept_set]

    console.print(f"\n[bold]Kept {len(kept_ids)} of {len(records)} models[/bold]")
    for mid in dropped:
        console.print(f"  [dim]dropped[/dim] {mid}")

    if output:
        path = Path(output)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps({"kept": kept_ids, "dropped": dropped}, indent=2), encoding="utf-8")
        console.print(f"[green]Saved to {output}[/green]")


@app.command()
def version():
    """Show version information."""
    from cafarank import __version__
    console.print(f"cafarank v{__version__}")


if __name__ == "__main__":
    app()
