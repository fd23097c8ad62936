"""Rich display functions for the installation plan."""

from collections.abc import Mapping, Sequence

from rich.markup import escape
from rich.table import Table

from yao.models.package import PlanItem
from yao.utils.formatting import console, err_console


def create_plan_table(plan: Sequence[PlanItem]) -> Table:
    """Create a Rich table listing the packages to process.

    Rows follow request order, which is also the execution order.
    Packages that are already installed carry a reinstall note, the way
    pacman warns about them.

    Args:
        plan: Classified plan items.

    Returns:
        Rich Table configured for plan display.
    """
    table = Table(
        title="Packages to process",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Package", no_wrap=True)
    table.add_column("Source", width=6)
    table.add_column("Note")

    for item in plan:
        style = "source_repo" if item.is_repo else "source_aur"
        note = "[installed]up to date -- reinstalling[/installed]" if item.installed else ""
        table.add_row(
            escape(item.name),
            f"[{style}]{item.kind.label}[/{style}]",
            note,
        )

    return table


def print_plan(plan: Sequence[PlanItem]) -> None:
    """Print the plan table followed by a one-line summary."""
    err_console.print(create_plan_table(plan))

    repo_count = sum(1 for item in plan if item.is_repo)
    aur_count = sum(1 for item in plan if item.is_aur)
    parts: list[str] = []
    if repo_count:
        parts.append(f"[source_repo]{repo_count} from repos[/source_repo]")
    if aur_count:
        parts.append(f"[source_aur]{aur_count} from AUR[/source_aur]")
    if parts:
        err_console.print(f"Summary: {', '.join(parts)}")


def create_config_table(values: Mapping[str, str]) -> Table:
    """Create a two-column key/value table for configuration output."""
    table = Table(
        title="Configuration",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Key", no_wrap=True)
    table.add_column("Value", style="muted")
    for key, value in values.items():
        table.add_row(key, escape(value))
    return table


def print_config(values: Mapping[str, str], *, stderr: bool = True) -> None:
    """Print resolved configuration values."""
    target = err_console if stderr else console
    target.print(create_config_table(values))
