"""Typer CLI entrypoint for hookcheck."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, cast

import typer

from apps.cli.format_human import render_check_summary
from apps.cli.io import (
    OutputPaths,
    build_output_paths,
    existing_output_files,
    open_in_viewer,
    write_error_json_atomic,
    write_report_html_atomic,
    write_report_json_atomic,
)
from core.orchestrator.pipeline import run_check
from core.report.models import AggregateReport
from core.scan.scanner import ScanStrategy, list_strategies
from core.spec.loader import load_spec
from core.utils.errors import ConfigError, NotFoundError

app = typer.Typer(help="Check that pages still contain expected ids and classes.", rich_markup_mode=None)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_MISSING = 3


@app.callback()
def cli_callback(
    log_level: Annotated[
        str, typer.Option("--log-level", help="Logging level for diagnostics on stderr.")
    ] = "WARNING",
) -> None:
    """CLI root callback to keep `hookcheck check` as explicit command form."""

    level = logging.getLevelName(log_level.upper().strip())
    if not isinstance(level, int):
        typer.echo(f"ERROR: unknown --log-level: {log_level}", err=True)
        raise typer.Exit(code=EXIT_ERROR)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s %(message)s")


@app.command("check")
def check_command(
    spec: Annotated[Path, typer.Argument(help="Spec document (JSON or YAML).")],
    search_folder: Annotated[Path, typer.Argument(help="Folder to scan recursively.")],
    auxiliary: Annotated[
        Path | None, typer.Argument(help="Optional PDF or text document to search as well.")
    ] = None,
    out_dir: Annotated[Path, typer.Option()] = Path("."),
    strategy: Annotated[str, typer.Option(help="pattern, structural or auto.")] = "pattern",
    open_report: Annotated[
        bool,
        typer.Option(
            "--open/--no-open",
            envvar="HOOKCHECK_OPEN",
            help="Open report.html in the default viewer.",
        ),
    ] = True,
    fail_on_missing: Annotated[
        bool,
        typer.Option(
            "--fail-on-missing/--no-fail-on-missing",
            help="Exit with status 3 when any expected item is missing.",
        ),
    ] = True,
    no_overwrite: Annotated[
        bool, typer.Option("--no-overwrite", help="Fail when outputs already exist.")
    ] = False,
) -> None:
    """Scan a folder for the ids/classes declared in a spec and write reports."""

    paths = build_output_paths(out_dir)

    normalized_strategy = strategy.lower().strip()
    if normalized_strategy not in list_strategies():
        typer.echo(
            f"ERROR: --strategy must be one of: {', '.join(list_strategies())}.", err=True
        )
        raise typer.Exit(code=EXIT_ERROR)
    strategy_typed = cast(ScanStrategy, normalized_strategy)

    existing = existing_output_files(paths)
    if existing and no_overwrite:
        typer.echo("ERROR: outputs already exist and --no-overwrite is enabled.", err=True)
        raise typer.Exit(code=EXIT_ERROR)
    if existing:
        names = ", ".join(path.name for path in existing)
        typer.echo(f"INFO: overwriting existing outputs: {names}")

    failure_stage = "load_spec"
    try:
        spec_model = load_spec(spec)
        failure_stage = "scan"
        report = run_check(
            spec_model,
            search_folder,
            auxiliary_path=auxiliary,
            strategy=strategy_typed,
        )
    except NotFoundError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        _safe_write_error_json(paths, type(exc).__name__, str(exc), failure_stage)
        raise typer.Exit(code=EXIT_ERROR) from exc
    except ConfigError as exc:
        typer.echo(f"ERROR: invalid spec: {exc}", err=True)
        _safe_write_error_json(paths, type(exc).__name__, str(exc), failure_stage)
        raise typer.Exit(code=EXIT_ERROR) from exc
    except Exception as exc:  # noqa: BLE001
        typer.echo(f"ERROR: {type(exc).__name__}: {exc}", err=True)
        _safe_write_error_json(paths, type(exc).__name__, str(exc), failure_stage)
        raise typer.Exit(code=EXIT_ERROR) from exc

    for message in report.warnings:
        typer.echo(f"WARNING(scan): {message}", err=True)

    typer.echo(render_check_summary(report))
    exit_code = _exit_code_for(report, fail_on_missing)

    try:
        write_report_json_atomic(paths, report)
        typer.echo(f"INFO: wrote {paths.report_json}")
    except Exception as exc:  # noqa: BLE001
        typer.echo(f"ERROR: write report.json failed: {exc}", err=True)
        exit_code = EXIT_ERROR

    html_written = False
    try:
        write_report_html_atomic(paths, report)
        html_written = True
        typer.echo(f"INFO: wrote {paths.report_html}")
    except Exception as exc:  # noqa: BLE001
        typer.echo(f"ERROR: write report.html failed: {exc}", err=True)
        exit_code = EXIT_ERROR

    if html_written and open_report:
        open_in_viewer(paths.report_html)

    if exit_code == EXIT_OK:
        typer.echo("INFO: success")
    elif exit_code == EXIT_MISSING:
        typer.echo("ERROR: expected ids/classes are missing", err=True)

    raise typer.Exit(code=exit_code)


def _exit_code_for(report: AggregateReport, fail_on_missing: bool) -> int:
    if report.passed or not fail_on_missing:
        return EXIT_OK
    return EXIT_MISSING


def _safe_write_error_json(
    paths: OutputPaths, error_type: str, error_message: str, stage: str
) -> None:
    # A report from an earlier completed run is never replaced by an error stub.
    if paths.report_json.exists():
        typer.echo(f"INFO: kept existing {paths.report_json}; no error report written")
        return
    try:
        write_error_json_atomic(
            paths, error_type=error_type, error_message=error_message, stage=stage
        )
    except Exception:  # noqa: BLE001
        pass


def main() -> None:
    """Console script entrypoint."""

    app()


if __name__ == "__main__":
    main()
