"""Report and run result models for header-audit."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Iterable, Optional

from pydantic import BaseModel, Field

from header_audit.exceptions import ScanError
from header_audit.models.claim import Claim
from header_audit.models.statistics import Statistics


class AuditStage(Enum):
    """Stages of an audit run, in the only order they can occur."""

    PENDING = "pending"
    COLLECTING = "collecting"
    AGGREGATING = "aggregating"
    RENDERING = "rendering"
    VERDICT = "verdict"


class Verdict(Enum):
    """Final outcome of an audit run."""

    PASS = "pass"
    FAIL = "fail"


class ReportModel:
    """Ordered claims plus the statistics snapshot of one run.

    Created empty, populated claim by claim in discovery order, then frozen.
    Renderers only accept a frozen model.
    """

    def __init__(self) -> None:
        self._claims: list[Claim] = []
        self._statistics: Optional[Statistics] = None

    def append(self, claim: Claim) -> None:
        """Append a claim.

        Raises:
            ScanError: If the model is already frozen.
        """
        if self.is_frozen:
            raise ScanError("Cannot add claims to a frozen report")
        self._claims.append(claim)

    def extend(self, claims: Iterable[Claim]) -> None:
        """Append claims in order."""
        for claim in claims:
            self.append(claim)

    def freeze(self, statistics: Statistics) -> None:
        """Attach the final statistics and forbid further changes.

        Raises:
            ScanError: If the model is already frozen.
        """
        if self.is_frozen:
            raise ScanError("Report is already frozen")
        self._statistics = statistics

    @property
    def is_frozen(self) -> bool:
        """True once statistics have been attached."""
        return self._statistics is not None

    @property
    def claims(self) -> tuple[Claim, ...]:
        """Claims in discovery order."""
        return tuple(self._claims)

    @property
    def statistics(self) -> Statistics:
        """Frozen statistics.

        Raises:
            ScanError: If the model has not been frozen yet.
        """
        if self._statistics is None:
            raise ScanError("Report statistics are not available before freezing")
        return self._statistics

    def unapproved_claims(self) -> list[Claim]:
        """Get unapproved claims sorted by path."""
        return sorted(
            (claim for claim in self._claims if not claim.approved),
            key=lambda c: c.path,
        )


class AuditResult(BaseModel):
    """Outcome of a completed audit run."""

    model_config = {"extra": "forbid", "frozen": True}

    verdict: Verdict = Field(description="Pass or fail")
    statistics: Statistics = Field(description="Final statistics")
    structured_report: Path = Field(description="Path of the structured report")
    plain_report: Path = Field(description="Path of the plain-text report")
    styled_report: Path = Field(description="Path of the styled report")
    message: Optional[str] = Field(
        default=None,
        description="Failure message when the verdict is FAIL",
    )

    @property
    def passed(self) -> bool:
        """True if no unapproved licenses were found."""
        return self.verdict == Verdict.PASS
