"""Console reporting helpers.

The synthesis core never prints. Callers that want feedback hand the
:class:`~fluent_builder.synthesis.driver.SynthesisReport` of a pass to
:func:`print_report`, which renders it with Rich.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table
from rich.text import Text

if TYPE_CHECKING:
    from fluent_builder.synthesis.driver import SynthesisReport

console = Console()

_FAILED_PREFIX = "FAILED: "


# ---------------------------------------------------------------------------
# Synthesis reports
# ---------------------------------------------------------------------------


def report_rows(report: SynthesisReport) -> dict[str, str]:
    """Summarise each class of *report* as ``{class: status}``.

    Generated classes list their member counts, failed ones the error.
    """
    rows: dict[str, str] = {}
    for name, generated in report.builders.items():
        spec = generated.builder
        rows[name] = (
            f"{len(spec.constructors)} constructors, {len(spec.methods)} methods, "
            f"{len(spec.fields)} fields"
        )
    for name, error in report.failures.items():
        rows[name] = f"{_FAILED_PREFIX}{error}"
    return rows


def report_table(report: SynthesisReport, title: str = "Builder synthesis") -> Table:
    """Build the per-class table of *report*; failed rows are shown in red."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Class", style="dim", no_wrap=True)
    table.add_column("Builder")
    for name, status in report_rows(report).items():
        style = "red" if status.startswith(_FAILED_PREFIX) else "green"
        table.add_row(name, Text(status, style=style))
    return table


def report_status(report: SynthesisReport) -> Text:
    """One-line verdict: green when every class succeeded, yellow when some did."""
    generated = len(report.builders)
    if report.succeeded:
        return Text(f"Generated {generated} builder(s)", style="bold green")
    if generated:
        return Text(
            f"Generated {generated} builder(s), {len(report.failures)} failed", style="bold yellow"
        )
    return Text(f"All {len(report.failures)} class(es) failed", style="bold red")


def print_report(report: SynthesisReport, title: str = "Builder synthesis") -> None:
    """Render a synthesis report as a table followed by a status line."""
    console.print(report_table(report, title))
    console.print()
    console.print(report_status(report))
