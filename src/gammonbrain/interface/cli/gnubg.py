from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from gammonbrain.infrastructure.config import load_config
from gammonbrain.infrastructure.gnubg import (
    EngineError,
    EngineUnavailableError,
    GnubgApiClient,
    GnubgIntegration,
    get_gnubg_info,
)
from gammonbrain.infrastructure.gnubg.integration import validate_position_id
from gammonbrain.infrastructure.gnubg.toolchain import (
    build_gnubg,
    check_dependencies,
    configure_gnubg,
    dependency_instructions,
)
from gammonbrain.interface.telemetry.logging import setup_logging


def _report_missing(missing: list[str]) -> None:
    deps = dependency_instructions()
    click.secho(f"Missing dependencies: {', '.join(missing)}", fg="yellow", err=True)
    click.echo(f"To install dependencies on {deps.platform_name}:", err=True)
    for line in deps.setup_instructions:
        click.echo(f"  {line}", err=True)
    click.echo(f"  {deps.install_command}", err=True)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--log-level", default="WARNING", show_default=True, help="structlog level for diagnostics.")
def main(log_level: str) -> None:
    """Set up and query the GNU Backgammon engine."""
    setup_logging(log_level, json=False)


@main.command()
def check() -> None:
    """Check that the gnubg build toolchain is installed."""
    missing = check_dependencies()
    if missing:
        _report_missing(missing)
        sys.exit(1)
    click.secho("All required dependencies found.", fg="green")


@main.command()
@click.option(
    "--gnubg-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=Path("gnubg"),
    show_default=True,
    help="Directory holding the gnubg source tree.",
)
@click.option("--configure-only", is_flag=True, help="Run ./configure and stop.")
@click.option("--build-only", is_flag=True, help="Run make on an already configured tree.")
def setup(gnubg_dir: Path, configure_only: bool, build_only: bool) -> None:
    """Configure and build gnubg from the bundled source tree."""
    if configure_only and build_only:
        raise click.UsageError("--configure-only and --build-only are mutually exclusive.")

    deps = dependency_instructions()
    click.echo(f"Detected platform: {deps.platform_name}")
    missing = check_dependencies()
    if missing:
        _report_missing(missing)
        sys.exit(1)

    if not build_only:
        if not configure_gnubg(gnubg_dir):
            click.secho("gnubg configure failed.", fg="red", err=True)
            sys.exit(1)
        click.secho("gnubg configured successfully.", fg="green")
        if configure_only:
            return

    if not build_gnubg(gnubg_dir):
        click.secho("gnubg build failed.", fg="red", err=True)
        sys.exit(1)
    click.secho("gnubg built successfully.", fg="green")


@main.command()
def info() -> None:
    """Print engine availability, path and version as JSON."""
    integration = GnubgIntegration.from_config(load_config())
    click.echo(json.dumps(get_gnubg_info(integration), indent=2))


@main.command()
@click.argument("position_id")
@click.option(
    "--via",
    type=click.Choice(["process", "api"]),
    default="process",
    show_default=True,
    help="Ask the local binary or the evaluation service.",
)
@click.option("--timeout", type=float, default=None, help="Seconds to wait for the engine.")
def hint(position_id: str, via: str, timeout: float | None) -> None:
    """Print gnubg's best move for POSITION_ID."""
    try:
        validate_position_id(position_id)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="POSITION_ID") from exc

    config = load_config()
    oracle = GnubgApiClient.from_config(config) if via == "api" else GnubgIntegration.from_config(config)
    try:
        best_move = oracle.get_best_move(position_id, timeout=timeout)
    except EngineUnavailableError as exc:
        click.secho(str(exc), fg="red", err=True)
        if exc.instructions:
            click.echo(exc.instructions, err=True)
        sys.exit(2)
    except EngineError as exc:
        click.secho(str(exc), fg="red", err=True)
        sys.exit(1)
    click.echo(best_move)


if __name__ == "__main__":  # pragma: no cover
    main()


__all__ = ["main"]
