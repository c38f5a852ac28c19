"""
Command line interface for ibexa-system-info.

Every option can also be set through an environment variable, so the tool
works the same when called by hand, from a deploy hook, or from CI:
- PROJECT_DIR: Project root containing composer.lock and vendor/ (default: .)
- COMPOSER_LOCK / COMPOSER_JSON: Override the Composer file locations
- IBEXA_RELEASE: Product version, detected from composer.lock when unset
- APP_ENV / APP_DEBUG: Application environment and debug flag
- POWERED_BY_ENABLED / POWERED_BY_RELEASE: "powered by" footer settings
- IBEXA_SYSTEM_INFO_CONFIG: YAML configuration file
- LOG_LEVEL: Logging level
- LOG_FORMAT: "text" or "json" log lines on stderr
"""

import json
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import click

from .. import __version__
from .._collectors import (
    COMPOSER_COLLECTOR,
    IBEXA_COLLECTOR,
    KERNEL_COLLECTOR,
    create_default_registry,
)
from ..config import LOG_LEVELS, Settings, build_settings
from ..console import (
    console,
    print_composer_info,
    print_error,
    print_kernel_info,
    print_summary_table,
    print_system_info,
)
from ..exceptions import ConfigurationError, SystemInfoError
from ..lifecycle import evaluate_lifecycle, get_release_date, release_key
from ..logging_config import logger, set_log_level, setup_logging
from ..models import ComposerSystemInfo, IbexaSystemInfo, KernelSystemInfo
from ..product import RELEASE_FORMATS, get_powered_by_name

COLLECTOR_CHOICES = (IBEXA_COLLECTOR, COMPOSER_COLLECTOR, KERNEL_COLLECTOR, "all")

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def _settings_from_context(ctx: click.Context) -> Settings:
    """Build settings from the group options, exiting with status 1 on invalid configuration."""
    options: Dict[str, Any] = ctx.obj
    try:
        return build_settings(**options)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        print_error(str(e), title="Configuration")
        sys.exit(1)


def _print_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2))


def _render(identifier: str, info: Any) -> None:
    if isinstance(info, IbexaSystemInfo):
        print_system_info(info)
    elif isinstance(info, KernelSystemInfo):
        print_kernel_info(info)
    elif isinstance(info, ComposerSystemInfo):
        print_composer_info(info)
    else:
        console.print(f"{identifier}: {info}")


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, "--version", "-V", prog_name="Ibexa System Info")
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    envvar="IBEXA_SYSTEM_INFO_CONFIG",
    help="YAML configuration file.",
)
@click.option(
    "--project-dir",
    type=click.Path(file_okay=False),
    envvar="PROJECT_DIR",
    help="Project root containing composer.lock and vendor/. [default: .]",
)
@click.option("--composer-lock", type=click.Path(dir_okay=False), envvar="COMPOSER_LOCK", help="Path to composer.lock.")
@click.option("--composer-json", type=click.Path(dir_okay=False), envvar="COMPOSER_JSON", help="Path to composer.json.")
@click.option("--release", envvar="IBEXA_RELEASE", help="Product version, detected from composer.lock when omitted.")
@click.option("--env", "environment", envvar="APP_ENV", help="Application environment. [default: prod]")
@click.option("--debug/--no-debug", default=None, envvar="APP_DEBUG", help="Application debug mode.")
@click.option(
    "--powered-by/--no-powered-by",
    "powered_by_enabled",
    default=None,
    envvar="POWERED_BY_ENABLED",
    help="Enable the powered-by name.",
)
@click.option(
    "--powered-by-release",
    type=click.Choice(RELEASE_FORMATS),
    envvar="POWERED_BY_RELEASE",
    help="Version suffix of the powered-by name. [default: major]",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    envvar="LOG_LEVEL",
    help="Logging level. [default: INFO]",
)
@click.option(
    "--log-format",
    type=click.Choice(("text", "json")),
    envvar="LOG_FORMAT",
    help="Log line format on stderr. [default: text]",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_file: Optional[str],
    project_dir: Optional[str],
    composer_lock: Optional[str],
    composer_json: Optional[str],
    release: Optional[str],
    environment: Optional[str],
    debug: Optional[bool],
    powered_by_enabled: Optional[bool],
    powered_by_release: Optional[str],
    log_level: Optional[str],
    log_format: Optional[str],
) -> None:
    """Collect diagnostic information about an Ibexa installation."""
    if log_format:
        setup_logging(log_level or "INFO", structured=log_format == "json")
    elif log_level:
        set_log_level(log_level)

    ctx.obj = {
        "config_file": config_file,
        "project_dir": project_dir,
        "composer_lock": composer_lock,
        "composer_json": composer_json,
        "release": release,
        "environment": environment,
        "debug": debug,
        "powered_by_enabled": powered_by_enabled,
        "powered_by_release": powered_by_release,
        "log_level": log_level.upper() if log_level else None,
    }


@cli.command()
@click.option(
    "--collector",
    type=click.Choice(COLLECTOR_CHOICES),
    default=IBEXA_COLLECTOR,
    show_default=True,
    help="Which collector to run.",
)
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of tables.")
@click.pass_context
def collect(ctx: click.Context, collector: str, as_json: bool) -> None:
    """Collect and print system information."""
    settings = _settings_from_context(ctx)
    registry = create_default_registry(settings)
    identifiers = registry.identifiers if collector == "all" else [collector]

    results: Dict[str, Any] = {}
    try:
        for identifier in identifiers:
            results[identifier] = registry.collect(identifier)
    except SystemInfoError as e:
        logger.error(f"Collection failed: {e}")
        print_error(str(e), title="Collection")
        sys.exit(1)

    if as_json:
        data = {identifier: info.to_dict() for identifier, info in results.items()}
        _print_json(data if collector == "all" else data[collector])
        return

    for identifier, info in results.items():
        _render(identifier, info)


@cli.command("powered-by")
@click.pass_context
def powered_by(ctx: click.Context) -> None:
    """Print the "powered by" product name."""
    settings = _settings_from_context(ctx)
    if not settings.powered_by_enabled:
        logger.debug("Powered-by name is disabled")
        return

    registry = create_default_registry(settings)
    try:
        info = registry.collect(IBEXA_COLLECTOR)
    except SystemInfoError as e:
        print_error(str(e), title="Collection")
        sys.exit(1)

    click.echo(get_powered_by_name(settings.project_dir / "vendor", settings.powered_by_release, info.release))


@cli.command()
@click.argument("version")
@click.option(
    "--at",
    "at",
    type=click.DateTime(formats=["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S"]),
    help="Evaluate at this UTC date instead of now.",
)
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table.")
def lifecycle(version: str, at: Optional[datetime], as_json: bool) -> None:
    """Show end of maintenance and end of life status of VERSION."""
    now = at.replace(tzinfo=timezone.utc) if at else None
    status = evaluate_lifecycle(version, now)
    key = release_key(version)
    release_date = get_release_date(key)

    if as_json:
        _print_json(
            {
                "release": key,
                "releaseDate": release_date.isoformat() if release_date else None,
                "isEndOfMaintenance": status.is_end_of_maintenance,
                "isEndOfLife": status.is_end_of_life,
                "endOfMaintenanceDate": (
                    status.end_of_maintenance_date.isoformat() if status.end_of_maintenance_date else None
                ),
                "endOfLifeDate": status.end_of_life_date.isoformat() if status.end_of_life_date else None,
            }
        )
        return

    print_summary_table(
        f"Lifecycle of {key}",
        [
            ("Release date", release_date.strftime("%Y-%m-%d") if release_date else "n/a"),
            (
                "End of maintenance",
                status.end_of_maintenance_date.strftime("%Y-%m-%d") if status.end_of_maintenance_date else "n/a",
            ),
            ("End of maintenance reached", "yes" if status.is_end_of_maintenance else "no"),
            ("End of life", status.end_of_life_date.strftime("%Y-%m-%d") if status.end_of_life_date else "n/a"),
            ("End of life reached", "yes" if status.is_end_of_life else "no"),
        ],
        show_if_empty=True,
    )


def main() -> None:
    """Console script entry point."""
    cli(prog_name="ibexa-system-info")
