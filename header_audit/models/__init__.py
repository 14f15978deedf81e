"""Pydantic data models for header-audit."""

from header_audit.models.claim import Claim, ClaimOutcome, DocumentType
from header_audit.models.config import AuditConfig, SubstringRule
from header_audit.models.license import (
    BUILTIN_FAMILIES,
    UNKNOWN_FAMILY,
    LicenseFamily,
)
from header_audit.models.report import (
    AuditResult,
    AuditStage,
    ReportModel,
    Verdict,
)
from header_audit.models.statistics import FamilyStatistics, Statistics

__all__ = [
    "AuditConfig",
    "AuditResult",
    "AuditStage",
    "BUILTIN_FAMILIES",
    "Claim",
    "ClaimOutcome",
    "DocumentType",
    "FamilyStatistics",
    "LicenseFamily",
    "ReportModel",
    "Statistics",
    "SubstringRule",
    "UNKNOWN_FAMILY",
    "Verdict",
]
