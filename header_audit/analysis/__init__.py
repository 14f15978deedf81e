"""Header analysis logic for header-audit."""
from header_audit.analysis.approval import DEFAULT_APPROVED_CATEGORIES, ApprovalPolicy
from header_audit.analysis.documents import (
    AuditDocument,
    build_document,
    guess_document_type,
)
from header_audit.analysis.exclusions import (
    ExclusionFilter,
    ExclusionPattern,
    compile_pattern,
)
from header_audit.analysis.matchers import (
    HeaderMatcher,
    MatcherKind,
    MatcherPipeline,
    match_default,
)
from header_audit.analysis.statistics import aggregate_claims

__all__ = [
    "ApprovalPolicy",
    "AuditDocument",
    "DEFAULT_APPROVED_CATEGORIES",
    "ExclusionFilter",
    "ExclusionPattern",
    "HeaderMatcher",
    "MatcherKind",
    "MatcherPipeline",
    "aggregate_claims",
    "build_document",
    "compile_pattern",
    "guess_document_type",
    "match_default",
]
