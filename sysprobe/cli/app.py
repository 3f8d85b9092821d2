"""Typer-based CLI application for sysprobe."""

import logging
import time
from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import BaseModel

from sysprobe import __version__
from sysprobe.core.config import LOG_LEVELS, load_settings
from sysprobe.core.errors import SysprobeError
from sysprobe.core.executor import CommandExecutor
from sysprobe.core.queries import Category, field_names
from sysprobe.core.template import TemplateEngine
from sysprobe.core.units import DataUnit
from sysprobe.provider import is_supported_system
from sysprobe.provider.base import Provider
from sysprobe.provider.unsupported import UnsupportedProvider

app = typer.Typer(
    name="sysprobe",
    help="Dead simple CLI program to query information about system and hardware",
    add_completion=False,
)

logger = logging.getLogger(__name__)


class CliOptions(BaseModel):
    """Options shared by every command.

    Unset delimiter, unit and log level fall back to the config file when a
    command runs.
    """

    delimiter: Optional[str] = None
    fmt: Optional[str] = None
    unit: Optional[DataUnit] = None
    run_times: int = 1
    interval: float = 0.0
    config: Optional[Path] = None
    log_level: Optional[str] = None


def create_provider() -> Provider:
    """Create the telemetry provider for one run."""
    if not is_supported_system():
        return UnsupportedProvider()

    # psutil raises on import where it has no backend
    from sysprobe.provider.system import SystemProvider

    return SystemProvider()


def version_callback(value: bool):
    """Display version and exit."""
    if value:
        typer.echo(f"sysprobe v{__version__}")
        raise typer.Exit()


def configure_logging(log_level: str) -> None:
    """Configure logging from a level name (debug, info, warn, error)."""
    log_level_upper = log_level.upper()
    # Map WARN to WARNING for Python logging
    if log_level_upper == "WARN":
        log_level_upper = "WARNING"

    logging.basicConfig(
        level=getattr(logging, log_level_upper),
        format="%(message)s",
    )


@app.callback()
def main(
    ctx: typer.Context,
    delimiter: Annotated[
        Optional[str],
        typer.Option(
            "--delimiter",
            "-d",
            help="Delimiter used for separating responses (default: newline)",
        ),
    ] = None,
    fmt: Annotated[
        Optional[str],
        typer.Option(
            "--fmt",
            "-f",
            help=(
                "String with format specifiers `%<FIELD>%` replaced by actual "
                "values; `%%` is a literal percent sign. Field arguments are ignored."
            ),
        ),
    ] = None,
    unit: Annotated[
        Optional[DataUnit],
        typer.Option(
            "--unit",
            "-u",
            case_sensitive=False,
            help="Unit for byte-valued fields (default: bytes)",
        ),
    ] = None,
    run_times: Annotated[
        int,
        typer.Option(
            "--run-times",
            "-n",
            min=0,
            help="How many times to run the command (0 = until interrupted)",
        ),
    ] = 1,
    interval: Annotated[
        float,
        typer.Option("--interval", "-i", min=0, help="Seconds to wait between runs"),
    ] = 0.0,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", help="Path to YAML config file"),
    ] = None,
    # Runtime options (hidden from help - for developers)
    log_level: Annotated[
        Optional[str],
        typer.Option(
            help="Logging level (debug, info, warn, error)",
            case_sensitive=False,
            hidden=True,
        ),
    ] = None,
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, is_eager=True),
    ] = None,
):
    """Query information about system and hardware.

    Pick a command, then name the fields to print, e.g.
    `sysprobe memory total available` or `sysprobe -f "%usage%%%" cpu cpu0`.
    """
    if log_level and log_level.lower() not in LOG_LEVELS:
        typer.echo(
            f"❌ Invalid log level: {log_level}. Must be debug, info, warn, or error.",
            err=True,
        )
        raise typer.Exit(1)

    if not is_supported_system():
        typer.echo(
            "⚠️  Warning: this OS is not supported; some stats might be "
            "inaccurate/invalid.",
            err=True,
        )

    # The config file is read by the command itself, so `COMMAND --help`
    # works even with a broken config
    ctx.obj = CliOptions(
        delimiter=delimiter,
        fmt=fmt,
        unit=unit,
        run_times=run_times,
        interval=interval,
        config=config,
        log_level=log_level,
    )


def resolve_options(options: CliOptions) -> CliOptions:
    """Fill unset options from the config file and configure logging.

    Raises:
        typer.Exit: If the config file cannot be loaded
    """
    try:
        settings = load_settings(options.config)
    except SysprobeError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(1) from e

    configure_logging(options.log_level or settings.log_level)
    return options.model_copy(
        update={
            "delimiter": (
                options.delimiter
                if options.delimiter is not None
                else settings.delimiter
            ),
            "unit": options.unit or settings.unit,
        }
    )


def execute_once(
    options: CliOptions,
    category: Category,
    name: Optional[str],
    fields: list[str],
) -> Optional[str]:
    """Run a command once against a fresh provider.

    Returns:
        The line to print, or None when the command produced nothing
    """
    executor = CommandExecutor(create_provider(), unit=options.unit)

    if options.fmt is not None:
        return TemplateEngine(executor).format(category, options.fmt, name)

    data = executor.execute(category, fields, name)
    if not data:
        return None
    return options.delimiter.join(data)


def run_command(
    ctx: typer.Context,
    category: Category,
    name: Optional[str] = None,
    fields: Optional[list[str]] = None,
) -> None:
    """Execute a command, repeating it as requested by --run-times/--interval."""
    options = resolve_options(ctx.obj or CliOptions())
    fields = list(fields) if fields else []

    runs = 0
    try:
        while True:
            line = execute_once(options, category, name, fields)
            if line is not None:
                typer.echo(line)

            runs += 1
            if options.run_times and runs >= options.run_times:
                break
            if options.interval:
                time.sleep(options.interval)

    except SysprobeError as e:
        typer.echo(f"❌ {e}", err=True)
        logger.debug("Command failed", exc_info=True)
        raise typer.Exit(1) from e

    except KeyboardInterrupt:
        raise typer.Exit(130) from None  # 130 is standard exit code for SIGINT


def _fields_help(category: Category) -> str:
    return f"Fields to query: {', '.join(field_names(category))}"


@app.command("os")
def os_command(
    ctx: typer.Context,
    fields: Annotated[
        Optional[list[str]], typer.Argument(help=_fields_help(Category.OS))
    ] = None,
):
    """Query operating system information."""
    run_command(ctx, Category.OS, fields=fields)


@app.command("cpu")
def cpu_command(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="CPU name (see list-cpus)")],
    fields: Annotated[
        Optional[list[str]], typer.Argument(help=_fields_help(Category.CPU))
    ] = None,
):
    """Query a single CPU."""
    run_command(ctx, Category.CPU, name, fields)


@app.command("memory")
def memory_command(
    ctx: typer.Context,
    fields: Annotated[
        Optional[list[str]], typer.Argument(help=_fields_help(Category.MEMORY))
    ] = None,
):
    """Query memory usage."""
    run_command(ctx, Category.MEMORY, fields=fields)


@app.command("swap")
def swap_command(
    ctx: typer.Context,
    fields: Annotated[
        Optional[list[str]], typer.Argument(help=_fields_help(Category.SWAP))
    ] = None,
):
    """Query swap usage."""
    run_command(ctx, Category.SWAP, fields=fields)


@app.command("drive")
def drive_command(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Drive device name (e.g. /dev/sda1)")],
    fields: Annotated[
        Optional[list[str]], typer.Argument(help=_fields_help(Category.DRIVE))
    ] = None,
):
    """Query a mounted drive."""
    run_command(ctx, Category.DRIVE, name, fields)


@app.command("sensor")
def sensor_command(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Sensor label (see list-sensors)")],
    fields: Annotated[
        Optional[list[str]], typer.Argument(help=_fields_help(Category.SENSOR))
    ] = None,
):
    """Query a temperature sensor."""
    run_command(ctx, Category.SENSOR, name, fields)


@app.command("network")
def network_command(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Interface name (see list-networks)")],
    fields: Annotated[
        Optional[list[str]], typer.Argument(help=_fields_help(Category.NETWORK))
    ] = None,
):
    """Query a network interface."""
    run_command(ctx, Category.NETWORK, name, fields)


@app.command("list-cpus")
def list_cpus_command(ctx: typer.Context):
    """List all available CPUs."""
    run_command(ctx, Category.LIST_CPUS)


@app.command("list-sensors")
def list_sensors_command(ctx: typer.Context):
    """List all available sensors."""
    run_command(ctx, Category.LIST_SENSORS)


@app.command("list-networks")
def list_networks_command(ctx: typer.Context):
    """List all available network interfaces."""
    run_command(ctx, Category.LIST_NETWORKS)


if __name__ == "__main__":
    app()
