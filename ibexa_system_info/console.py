"""Rich console utilities for ibexa-system-info.

This module provides a shared Rich Console instance and helpers that render
collected system info as tables.
"""

from datetime import datetime
from typing import Any, List, Optional, Tuple

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

from .models import ComposerSystemInfo, IbexaSystemInfo, KernelSystemInfo
from .stability import Stability

custom_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "highlight": "magenta",
    }
)

# Shared console instance
console = Console(theme=custom_theme, color_system="auto")

# Shared stderr console for diagnostics
error_console = Console(theme=custom_theme, color_system="auto", stderr=True)


def print_warning(message: str, title: Optional[str] = None) -> None:
    """Print a warning to stderr."""
    if title:
        error_console.print(f"[warning]Warning ({title}):[/warning] {message}")
    else:
        error_console.print(f"[warning]Warning:[/warning] {message}")


def print_error(message: str, title: Optional[str] = None) -> None:
    """Print an error to stderr."""
    if title:
        error_console.print(f"[error]Error ({title}):[/error] {message}")
    else:
        error_console.print(f"[error]Error:[/error] {message}")


def print_summary_table(
    title: str,
    data: List[Tuple[str, Any]],
    show_if_empty: bool = False,
) -> None:
    """
    Print a two column summary table.

    Args:
        title: Table title
        data: List of (label, value) tuples
        show_if_empty: Whether to show the table if all values are empty
    """
    if not show_if_empty:
        data = [(label, value) for label, value in data if value not in (None, "")]

    if not data:
        return

    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Property", style="cyan")
    table.add_column("Value")

    for label, value in data:
        table.add_row(label, str(value))

    console.print(table)


def _format_date(value: Optional[datetime], passed: bool) -> str:
    if value is None:
        return "n/a"
    text = value.strftime("%Y-%m-%d")
    return f"[error]{text} (passed)[/error]" if passed else text


def _format_stability(value: Stability) -> str:
    if value is Stability.STABLE:
        return f"[success]{value.value}[/success]"
    return f"[warning]{value.value}[/warning]"


def print_system_info(info: IbexaSystemInfo) -> None:
    """Print the Ibexa installation snapshot."""
    data = [
        ("Product", f"[highlight]{info.name}[/highlight]"),
        ("Release", info.release),
        ("End of maintenance", _format_date(info.end_of_maintenance_date, info.is_end_of_maintenance)),
        ("End of life", _format_date(info.end_of_life_date, info.is_end_of_life)),
        ("Enterprise", "yes" if info.is_enterprise else "no"),
        ("Stability", _format_stability(info.stability)),
        ("Debug", "yes" if info.debug else "no"),
    ]
    if info.composer_info is not None:
        data.append(("Minimum stability", info.composer_info.get("minimumStability") or "stable (default)"))

    print_summary_table("Ibexa System Info", data, show_if_empty=True)


def print_kernel_info(info: KernelSystemInfo) -> None:
    """Print kernel information and the active bundles."""
    print_summary_table(
        "Kernel",
        [
            ("Environment", info.environment),
            ("Debug mode", "yes" if info.debug_mode else "no"),
            ("Version", info.version),
            ("Project dir", info.project_dir),
            ("Cache dir", info.cache_dir),
            ("Log dir", info.log_dir),
            ("Charset", info.charset),
        ],
        show_if_empty=True,
    )

    if info.bundles:
        print_summary_table("Bundles", list(info.bundles.items()))


def print_composer_info(info: ComposerSystemInfo) -> None:
    """Print installed packages with their version and stability."""
    table = Table(title="Composer Packages", show_header=True, header_style="bold")
    table.add_column("Package", style="cyan")
    table.add_column("Version")
    table.add_column("Alias")
    table.add_column("Stability")

    for name in sorted(info.packages):
        package = info.packages[name]
        table.add_row(name, package.branch, package.alias or "", package.stability or "")

    console.print(table)
    console.print(f"Minimum stability: {info.minimum_stability or 'stable (default)'}")
