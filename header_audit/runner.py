"""Audit runner: orchestrates one audit from collection to verdict.

A run moves strictly through COLLECTING, AGGREGATING, RENDERING and
VERDICT. A runner cannot be reused; a fresh run needs a fresh runner.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console

from header_audit.analysis.approval import ApprovalPolicy
from header_audit.analysis.exclusions import ExclusionFilter
from header_audit.analysis.matchers import MatcherPipeline
from header_audit.analysis.statistics import aggregate_claims
from header_audit.constants import (
    PLAIN_REPORT_NAME,
    STRUCTURED_REPORT_NAME,
    STYLED_REPORT_NAME,
)
from header_audit.exceptions import AuditFailure, RenderError, ScanError
from header_audit.models.config import AuditConfig
from header_audit.models.report import (
    AuditResult,
    AuditStage,
    ReportModel,
    Verdict,
)
from header_audit.output.plain_text import PlainTextRenderer
from header_audit.output.styled import StyledReportRenderer
from header_audit.output.terminal import TerminalFormatter
from header_audit.output.xml_report import StructuredReportRenderer
from header_audit.scanner import audit_files, discover_files

logger = logging.getLogger(__name__)


def failure_message(num_unapproved: int, report_url: str) -> str:
    """Build the audit failure message."""
    plural = "s" if num_unapproved > 1 else ""
    return (
        f"Header audit failure - {num_unapproved} unapproved license{plural}\n"
        f"\tSee {report_url}"
    )


class AuditRunner:
    """Run one header audit and produce its reports and verdict."""

    def __init__(
        self,
        config: AuditConfig,
        console: Optional[Console] = None,
        show_progress: bool = False,
    ) -> None:
        """Initialize the runner.

        Configuration problems (malformed exclusion file, unusable
        stylesheet) are raised here, before any file is read.

        Args:
            config: Immutable audit configuration.
            console: Diagnostic console (stderr by default).
            show_progress: Whether to show a progress indicator.

        Raises:
            ConfigurationError: If the configuration cannot be used.
        """
        self._config = config
        self._console = console if console is not None else Console(stderr=True)
        self._show_progress = show_progress
        self._stage = AuditStage.PENDING
        self._report = ReportModel()
        self._result: Optional[AuditResult] = None

        self._exclusion_filter = ExclusionFilter.from_file(config.exclude_file)
        self._pipeline = MatcherPipeline.from_config(config)
        self._policy = ApprovalPolicy.from_config(config)
        self._styled_renderer = StyledReportRenderer(config.stylesheet)

        if not self._exclusion_filter.is_empty:
            logger.info(
                "Loaded %d exclusion pattern(s) from %s",
                len(self._exclusion_filter.patterns),
                config.exclude_file,
            )
        logger.info(
            "Approving %s",
            "the built-in license families"
            if self._policy.uses_defaults
            else f"{len(config.approved_licenses)} listed license(s)",
        )

    @property
    def stage(self) -> AuditStage:
        """Current stage of the run."""
        return self._stage

    @property
    def report(self) -> ReportModel:
        """The report model (frozen once AGGREGATING completes)."""
        return self._report

    @property
    def result(self) -> Optional[AuditResult]:
        """The result once the VERDICT stage is reached."""
        return self._result

    @property
    def structured_report_path(self) -> Path:
        return self._config.report_dir / STRUCTURED_REPORT_NAME

    @property
    def plain_report_path(self) -> Path:
        return self._config.report_dir / PLAIN_REPORT_NAME

    @property
    def styled_report_path(self) -> Path:
        return self._config.report_dir / STYLED_REPORT_NAME

    def discover(self) -> list[Path]:
        """Discover the files to audit below the input directory.

        The report directory is skipped when it lies inside the tree.
        """
        excludes = list(self._config.excludes)
        try:
            report_rel = (
                self._config.report_dir.resolve()
                .relative_to(self._config.input_dir.resolve())
                .as_posix()
            )
        except ValueError:
            report_rel = None
        if report_rel and report_rel != ".":
            excludes.append(f"/{report_rel}/")
        return discover_files(
            self._config.input_dir, self._config.includes, excludes
        )

    def _enter(self, stage: AuditStage) -> None:
        logger.info("Audit stage: %s", stage.value)
        self._stage = stage

    def run(self, files: Optional[Sequence[Path]] = None) -> AuditResult:
        """Run the audit synchronously.

        See run_async.
        """
        return asyncio.run(self.run_async(files))

    async def run_async(self, files: Optional[Sequence[Path]] = None) -> AuditResult:
        """Run the audit.

        Args:
            files: Files in discovery order. Discovered below the input
                directory when None.

        Returns:
            The audit result.

        Raises:
            ScanError: If this runner has already been started.
            RenderError: If a report artifact cannot be produced.
            AuditFailure: If unapproved licenses were found and
                fail_on_error is set.
        """
        if self._stage is not AuditStage.PENDING:
            raise ScanError("An audit runner can only be run once")

        self._enter(AuditStage.COLLECTING)
        candidates = self.discover() if files is None else list(files)
        claims = await audit_files(
            candidates,
            self._config.input_dir,
            self._exclusion_filter,
            self._pipeline,
            self._policy,
            max_workers=self._config.max_workers,
            console=self._console,
            show_progress=self._show_progress,
        )
        self._report.extend(claims)

        self._enter(AuditStage.AGGREGATING)
        self._report.freeze(aggregate_claims(self._report.claims))

        self._enter(AuditStage.RENDERING)
        plain_report = self._render()

        self._enter(AuditStage.VERDICT)
        return self._verdict(plain_report)

    def _render(self) -> str:
        """Render and write the three report artifacts.

        Returns:
            The plain-text report, for verbose echoing.
        """
        structured = StructuredReportRenderer().render(self._report)
        plain = PlainTextRenderer().render(self._report)
        styled = self._styled_renderer.transform(structured)

        try:
            self._config.report_dir.mkdir(parents=True, exist_ok=True)
            self.structured_report_path.write_text(structured, encoding="utf-8")
            self.plain_report_path.write_text(plain, encoding="utf-8")
            self.styled_report_path.write_text(styled, encoding="utf-8")
        except (OSError, UnicodeError) as e:
            raise RenderError(
                f"Cannot write reports to '{self._config.report_dir}': {e}"
            ) from e

        logger.info("Reports written to %s", self._config.report_dir)
        return plain

    def _verdict(self, plain_report: str) -> AuditResult:
        stats = self._report.statistics
        formatter = TerminalFormatter(console=self._console)
        report_url = self.styled_report_path.resolve().as_uri()

        if stats.num_unapproved == 0:
            if self._config.verbose:
                formatter.format_plain_summary(plain_report)
            self._result = self._build_result(Verdict.PASS, None)
            return self._result

        if self._config.verbose:
            formatter.format_unapproved(self._report)

        message = failure_message(stats.num_unapproved, report_url)
        self._result = self._build_result(Verdict.FAIL, message)
        if self._config.fail_on_error:
            raise AuditFailure(message, stats.num_unapproved, report_url)

        self._console.print(message, markup=False, highlight=False)
        return self._result

    def _build_result(self, verdict: Verdict, message: Optional[str]) -> AuditResult:
        return AuditResult(
            verdict=verdict,
            statistics=self._report.statistics,
            structured_report=self.structured_report_path,
            plain_report=self.plain_report_path,
            styled_report=self.styled_report_path,
            message=message,
        )


def run_audit(
    config: AuditConfig,
    files: Optional[Sequence[Path]] = None,
    console: Optional[Console] = None,
) -> AuditResult:
    """Run a complete audit with a fresh runner.

    Raises:
        ConfigurationError: If the configuration cannot be used.
        RenderError: If a report artifact cannot be produced.
        AuditFailure: If unapproved licenses were found and fail_on_error
            is set.
    """
    return AuditRunner(config, console=console).run(files)
