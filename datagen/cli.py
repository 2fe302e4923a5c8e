"""Command line interface for the fake identity generator."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import rich.traceback
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TimeElapsedColumn,
)
from rich.table import Table

from . import generate as generate_module
from . import io as io_module
from . import report as report_module
from . import validate as validate_module
from .config import ConfigError, RunConfig, load_run_config
from .generate import InvalidErrorRateError, Record
from .identity import IdentityGenerationError, IdentityProvider
from .plugin_registry import registry
from .regions import UnknownRegionError, resolve_region
from .utils import random_run_seed

rich.traceback.install(show_locals=False)

app = typer.Typer(help="Reproducible fake identity records with controllable typos.")
console = Console()


def _resolve_path(path: Path | str) -> Path:
    """Resolve a string or path to an absolute Path."""
    resolved = Path(path).expanduser().resolve()
    if not resolved.exists():
        raise typer.BadParameter(f"Path does not exist: {resolved}")
    return resolved


def _parse_seed(value: Optional[str]) -> Optional[int | str]:
    if value is None:
        return None
    try:
        number = int(value)
    except ValueError:
        return value
    # only canonical spellings become ints; "042" and "+42" seed differently from 42
    return number if str(number) == value else value


def _build_config(
    config_path: Optional[Path],
    *,
    region: Optional[str],
    errors: Optional[float],
    seed: Optional[str],
    start: Optional[int],
    count: Optional[int],
    page: Optional[int],
    workers: Optional[int],
    provider: Optional[str],
) -> RunConfig:
    try:
        base = load_run_config(_resolve_path(config_path)) if config_path is not None else RunConfig()
    except ConfigError as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc

    if page is not None:
        try:
            start, count = generate_module.page_bounds(page)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--page") from exc

    config = base.merged(
        region=region,
        error_rate=errors,
        seed=_parse_seed(seed),
        start_index=start,
        count=count,
        workers=workers,
        provider=provider,
    )
    try:
        config.region = resolve_region(config.region).value
        generate_module.validate_error_rate(config.error_rate)
    except UnknownRegionError as exc:
        raise typer.BadParameter(str(exc), param_hint="--region") from exc
    except InvalidErrorRateError as exc:
        raise typer.BadParameter(str(exc), param_hint="--errors") from exc
    if config.start_index < 1:
        raise typer.BadParameter(f"must be 1 or greater, got {config.start_index}", param_hint="--start")
    if config.count < 0:
        raise typer.BadParameter(f"must not be negative, got {config.count}", param_hint="--count")
    if config.workers < 1:
        raise typer.BadParameter(f"must be 1 or greater, got {config.workers}", param_hint="--workers")
    return config


def _load_provider(name: str) -> IdentityProvider:
    try:
        return registry.create_provider(name)
    except (KeyError, ImportError, AttributeError, TypeError, ValueError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--provider") from exc


def _run_batch(
    config: RunConfig,
    *,
    error_rate: Optional[float] = None,
    label: str = "Generating",
) -> list[Record]:
    provider = _load_provider(config.provider)
    failures: list[tuple[int, IdentityGenerationError]] = []

    with Progress(
        SpinnerColumn(),
        BarColumn(bar_width=None),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    ) as progress:
        task_id = progress.add_task(label, total=config.count)

        def _on_failure(index: int, exc: IdentityGenerationError) -> None:
            failures.append((index, exc))
            progress.advance(task_id)

        if config.workers > 1:
            records = generate_module.generate_batch(
                config.start_index,
                config.count,
                config.region,
                config.error_rate if error_rate is None else error_rate,
                config.seed,
                provider=provider,
                on_failure=_on_failure,
                workers=config.workers,
            )
            progress.update(task_id, completed=config.count)
        else:
            records = []
            for record in generate_module.iter_batch(
                config.start_index,
                config.count,
                config.region,
                config.error_rate if error_rate is None else error_rate,
                config.seed,
                provider=provider,
                on_failure=_on_failure,
            ):
                records.append(record)
                progress.advance(task_id)

    for index, exc in failures:
        console.print(f"[yellow]Skipped record {index}:[/yellow] {exc}")
    return records


def _records_table(records: list[Record]) -> Table:
    table = Table(title="Generated Data")
    for column in io_module.COLUMNS:
        table.add_column(column.capitalize(), overflow="fold")
    for record in records:
        table.add_row(str(record.index), record.identifier, record.name, record.address, record.phone)
    return table


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Configure logging for all commands."""

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.command()
def generate(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML run configuration."),
    region: Optional[str] = typer.Option(None, "--region", "-r", help="USA, Germany or Poland."),
    errors: Optional[float] = typer.Option(None, "--errors", "-e", help="Expected typos per record."),
    seed: Optional[str] = typer.Option(None, "--seed", "-s", help="Run seed (integer or text)."),
    start: Optional[int] = typer.Option(None, "--start", help="First record index (1-based)."),
    count: Optional[int] = typer.Option(None, "--count", "-n", help="Number of records to generate."),
    page: Optional[int] = typer.Option(
        None, "--page", help="Scroll page to generate (20 records first, then 10 per page)."
    ),
    workers: Optional[int] = typer.Option(None, "--workers", help="Threads used for synthesis."),
    provider: Optional[str] = typer.Option(
        None, "--provider", help="Registered provider name or dotted path to a provider factory."
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write records to a CSV or JSONL file."),
    output_format: Optional[str] = typer.Option(
        None, "--format", "-f", help="Output format (csv or jsonl); defaults to the file suffix."
    ),
) -> None:
    """Generate a batch of records and print or export them."""

    config = _build_config(
        config_path,
        region=region,
        errors=errors,
        seed=seed,
        start=start,
        count=count,
        page=page,
        workers=workers,
        provider=provider,
    )
    records = _run_batch(config)

    if output is None:
        console.print(_records_table(records))
        return

    output_path = output.expanduser().resolve()
    try:
        written = io_module.write_records(records, output_path, output_format)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--format") from exc
    console.print(f"{written} records written to [green]{output_path}[/green]")


@app.command()
def audit(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML run configuration."),
    region: Optional[str] = typer.Option(None, "--region", "-r", help="USA, Germany or Poland."),
    errors: Optional[float] = typer.Option(None, "--errors", "-e", help="Expected typos per record."),
    seed: Optional[str] = typer.Option(None, "--seed", "-s", help="Run seed (integer or text)."),
    start: Optional[int] = typer.Option(None, "--start", help="First record index (1-based)."),
    count: Optional[int] = typer.Option(None, "--count", "-n", help="Number of records to audit."),
    workers: Optional[int] = typer.Option(None, "--workers", help="Threads used for synthesis."),
    provider: Optional[str] = typer.Option(None, "--provider", help="Identity provider to use."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Path to write the audit JSON."),
) -> None:
    """Compare a corrupted batch with its zero-error baseline."""

    config = _build_config(
        config_path,
        region=region,
        errors=errors,
        seed=seed,
        start=start,
        count=count,
        page=None,
        workers=workers,
        provider=provider,
    )
    baseline = _run_batch(config, error_rate=0.0, label="Baseline")
    corrupted = _run_batch(config, label="Corrupting")

    result = validate_module.validate_corruption(baseline, corrupted, config.error_rate)
    result["run"] = config.to_dict()

    if output is None:
        console.print_json(data=result)
        return

    destination = output.expanduser().resolve()
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(json.dumps(result, indent=2, ensure_ascii=False), encoding="utf-8")
    console.print(f"Audit written to [green]{destination}[/green]")


@app.command()
def report(
    audit_json: Path = typer.Argument(..., help="Audit JSON produced by the audit command."),
    output_html: Path = typer.Option(Path("report.html"), "--output", "-o", help="Path to write HTML report."),
) -> None:
    """Render an HTML report from an audit JSON artifact."""

    audit_data = json.loads(_resolve_path(audit_json).read_text(encoding="utf-8"))
    html = report_module.render_report(audit_data)
    output_html = output_html.expanduser().resolve()
    output_html.parent.mkdir(parents=True, exist_ok=True)
    output_html.write_text(html, encoding="utf-8")
    console.print(f"Report written to [green]{output_html}[/green]")


@app.command()
def seed() -> None:
    """Print a fresh random run seed."""

    console.print(str(random_run_seed()))


def main() -> None:
    """Entrypoint for the ``datagen`` console script."""

    app()


if __name__ == "__main__":  # pragma: no cover
    main()
