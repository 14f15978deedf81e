"""Plain-text report for header audits."""

from header_audit.exceptions import RenderError
from header_audit.models.report import ReportModel


class PlainTextRenderer:
    """Render a frozen report model as a line-oriented summary.

    Totals come first, then per-family and per-type counts, then one line
    per unapproved file sorted by path.
    """

    def render(self, report: ReportModel) -> str:
        """Render the report.

        Args:
            report: A frozen report model.

        Returns:
            The plain-text report.

        Raises:
            RenderError: If the report is not frozen.
        """
        if not report.is_frozen:
            raise RenderError("Cannot render a report that is still collecting")

        stats = report.statistics
        lines: list[str] = [
            "Header Audit Report",
            "===================",
            "",
            f"Total files: {stats.num_total}",
            f"Approved: {stats.num_approved}",
            f"Unapproved: {stats.num_unapproved}",
            f"Unknown licenses: {stats.num_unknown}",
            f"Read errors: {stats.num_read_errors}",
        ]

        if stats.document_types:
            lines.extend(["", "Document types:"])
            for name, count in stats.document_types.items():
                lines.append(f"  {name}: {count}")

        if stats.families:
            lines.extend(["", "License families:"])
            for family in stats.families:
                lines.append(
                    f"  {family.category} ({family.name}): {family.count}"
                    f" [{family.approved} approved]"
                )

        unapproved = report.unapproved_claims()
        lines.extend(["", f"Unapproved files ({len(unapproved)}):"])
        if unapproved:
            for claim in unapproved:
                lines.append(f"  {claim.path} — {claim.reason}")
        else:
            lines.append("  none")

        return "\n".join(lines) + "\n"
