from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from . import __version__
from .anomalies import detect_outliers
from .config import AnalystSettings, resolve_api_key
from .ingest import IngestError, load_records_csv
from .logging_config import setup_logger
from .models import RecordStore
from .report import render_anomalies, render_statistics
from .synth import WellLogAnalyst

app = typer.Typer(add_completion=False, help="Well Log Analyzer: statistics and optional AI interpretation of well logs.")


def _load_or_exit(data: Path) -> RecordStore:
    typer.echo(f"Reading data from: {data}")
    try:
        store = load_records_csv(data)
    except IngestError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(code=1)
    if not len(store):
        typer.echo(f"ERROR: no records found in {data}", err=True)
        raise typer.Exit(code=1)
    return store


@app.command()
def stats(
    data: Path = typer.Argument(..., help="Path to well-log CSV (depth, gamma_ray, neutron_density, resistivity, lithology)"),
):
    """
    Print basic statistics for every numeric parameter. Never contacts the network.
    """
    store = _load_or_exit(data)
    typer.echo(render_statistics(store))


@app.command()
def analyze(
    data: Path = typer.Argument(..., help="Path to well-log CSV (depth, gamma_ray, neutron_density, resistivity, lithology)"),
    api_key: Optional[str] = typer.Argument(None, help="API key (falls back to OPENAI_API_KEY, then ./api_key.txt)"),
    model: Optional[str] = typer.Option(None, "--model", help="Model identifier (default: openai/gpt-3.5-turbo)"),
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Chat-completions service root"),
    no_ai: bool = typer.Option(False, "--no-ai", help="Skip the language model even if a key is configured"),
    strict_parameters: bool = typer.Option(
        False, "--strict-parameters", help="Drop AI anomalies whose parameter is not gamma_ray/neutron_density/resistivity"
    ),
    z_threshold: float = typer.Option(3.0, "--z-threshold", min=0.1, help="z-score cut-off for offline outlier detection"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """
    Print statistics, then AI anomalies and interpretation when a key is available.

    Without a key (or with --no-ai), statistical z-score outliers are reported instead.
    """
    setup_logger(level=logging.DEBUG if verbose else logging.WARNING)
    typer.echo(f"Well Log Analyzer v{__version__}")

    store = _load_or_exit(data)
    typer.echo(render_statistics(store))

    key = None if no_ai else resolve_api_key(api_key)
    if not key:
        outliers = detect_outliers(store, z_threshold=z_threshold)
        if outliers:
            typer.echo(render_anomalies(outliers, title=f"Statistical Outliers (|z| > {z_threshold:g})"))
        else:
            typer.echo(f"No statistical outliers beyond |z| > {z_threshold:g}.")
        if not no_ai:
            typer.echo("")
            typer.echo("No API key provided. Skipping AI analysis.")
            typer.echo("To include AI analysis, provide your API key as a command line argument,")
            typer.echo("set the OPENAI_API_KEY environment variable, or create an api_key.txt file.")
        return

    settings = AnalystSettings.from_env(model=model, base_url=base_url, strict_parameters=strict_parameters)
    analyst = WellLogAnalyst(key, settings=settings)

    typer.echo("=== AI Well Log Analysis ===")
    typer.echo("")
    typer.echo("Detecting anomalies...")
    anomalies = analyst.detect_anomalies(store)
    if anomalies:
        typer.echo(render_anomalies(anomalies, title="AI Detected Anomalies"))
    else:
        typer.echo("No anomalies detected by AI.")

    typer.echo("")
    typer.echo(f"Requesting analysis from {settings.model}...")
    typer.echo("")
    typer.echo("AI Analysis Results:")
    typer.echo("")
    typer.echo(analyst.interpret(store))
