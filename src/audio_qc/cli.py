"""CLI interface for audio_qc."""

from __future__ import annotations

from pathlib import Path
from uuid import uuid4

import typer

from .infrastructure.measurement_store import MeasurementLoadError
from .interfaces.cli_handlers import analyze_from_path, resolve_run_config
from .profiles import PROFILES, UnknownProfileError
from .summary import render_summary
from .utils.config import ConfigLoadError

app = typer.Typer(help="audio_qc command line interface")


@app.command("analyze")
def analyze_command(
    input_path: Path = typer.Option(
        ..., "--input", "-i", help="JSON or CSV file of measurement records."
    ),
    profile: str | None = typer.Option(
        None,
        "--profile",
        "-p",
        help="Quality profile: pop, broadcast or archive.",
    ),
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Optional JSON/YAML analysis config."
    ),
    report_json: Path | None = typer.Option(
        None,
        "--report-json",
        help="Optional path to write the per-file analyses as JSON.",
    ),
    top_n: int | None = typer.Option(
        None, "--top-n", min=1, max=100, help="Number of files in the ranking."
    ),
) -> None:
    """Classify and score every measurement record in a file."""

    correlation_id = str(uuid4())
    try:
        run_config = resolve_run_config(config, profile, top_n)
        run = analyze_from_path(
            input_path,
            run_config,
            correlation_id=correlation_id,
            report_json=report_json,
        )
    except (ConfigLoadError, MeasurementLoadError, UnknownProfileError, ValueError) as error:
        typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1) from error

    for entry in run.outcome.rejected:
        typer.echo(f"[REJECTED] #{entry.index} {entry.file_path} error={entry.message}")
    for line in render_summary(run.summary):
        typer.echo(line)
    if report_json is not None:
        typer.echo(f"Report written to: {report_json}")
    typer.echo(f"Profile: {run.outcome.profile.name}")
    typer.echo(f"Correlation ID: {correlation_id}")


@app.command("profiles")
def profiles_command() -> None:
    """List the available quality profiles."""

    for profile in PROFILES.values():
        low, high = profile.loudness_band_lufs
        typer.echo(
            f"{profile.name}: target {profile.target_lufs:.1f} LUFS "
            f"[{low:.1f}, {high:.1f}], true peak warn {profile.true_peak_warning_dbtp:.1f} / "
            f"crit {profile.true_peak_critical_dbtp:.1f} dBTP"
        )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
