"""Terminal output formatter using Rich."""
from typing import Iterable, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from header_audit.analysis.approval import DEFAULT_APPROVED_CATEGORIES
from header_audit.models.license import LicenseFamily
from header_audit.models.report import AuditResult, ReportModel


class TerminalFormatter:
    """Format audit results for terminal display using Rich."""

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize the formatter with a Rich console.

        Args:
            console: Optional Rich Console instance. If not provided,
                a new Console will be created.
        """
        self._console = console if console is not None else Console()

    def format_unapproved(self, report: ReportModel) -> None:
        """Print the sorted list of unapproved files with their family.

        Args:
            report: A frozen report model.
        """
        unapproved = report.unapproved_claims()
        if not unapproved:
            return
        self._console.print("Files with unapproved licenses:")
        for claim in unapproved:
            self._console.print(
                f" - {escape(claim.path)} ([yellow]{escape(claim.family_display)}[/yellow])"
            )
        self._console.print("")

    def format_plain_summary(self, plain_report: str) -> None:
        """Echo the plain-text report."""
        self._console.print(plain_report, markup=False, highlight=False)

    def format_result(self, result: AuditResult) -> None:
        """Print the executive summary panel of a completed run.

        Args:
            result: The audit result to summarize.
        """
        stats = result.statistics
        if result.passed:
            status, color = "PASS", "green"
        else:
            status, color = "FAIL", "red"

        lines = [
            f"Total Files: {stats.num_total}",
            f"Approved: {stats.num_approved}",
            f"Unapproved: {stats.num_unapproved}",
            f"Unknown: {stats.num_unknown}",
        ]
        if stats.num_read_errors:
            lines.append(f"Read Errors: {stats.num_read_errors}")
        lines.extend(
            [
                "",
                f"Status: [{color}]{status}[/{color}]",
                f"Report: {escape(str(result.styled_report))}",
            ]
        )

        panel = Panel(
            "\n".join(lines),
            title="[bold]HEADER AUDIT[/bold]",
            border_style=color,
        )
        self._console.print(panel)

    def format_families(self, families: Iterable[LicenseFamily]) -> None:
        """Print a table of license families and their default approval."""
        table = Table(title="Built-in License Families")
        table.add_column("Category", style="cyan", no_wrap=True)
        table.add_column("Name", style="magenta")
        table.add_column("Approved by default", style="green")

        for family in families:
            approved = family.category in DEFAULT_APPROVED_CATEGORIES
            table.add_row(
                escape(family.category),
                escape(family.name),
                "yes" if approved else "[yellow]no[/yellow]",
            )

        self._console.print(table)
