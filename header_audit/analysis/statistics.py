"""Statistics aggregation over a stream of claims."""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from header_audit.models.claim import Claim
from header_audit.models.statistics import FamilyStatistics, Statistics


def aggregate_claims(claims: Iterable[Claim]) -> Statistics:
    """Fold claims into per-family counts and overall totals.

    Single pass and independent of claim order: families are reported
    sorted by category code and document types by name.

    Args:
        claims: Claims of one run.

    Returns:
        Statistics for the run.
    """
    family_counts: Counter[str] = Counter()
    family_approved: Counter[str] = Counter()
    family_names: dict[str, str] = {}
    document_types: Counter[str] = Counter()
    num_approved = 0
    num_unapproved = 0
    num_unknown = 0
    num_read_errors = 0

    for claim in claims:
        document_types[claim.document_type.value] += 1
        if claim.approved:
            num_approved += 1
        else:
            num_unapproved += 1
        if claim.is_read_error:
            num_read_errors += 1
        if claim.family is None:
            continue
        if claim.is_unknown:
            num_unknown += 1
        category = claim.family.category
        family_counts[category] += 1
        if claim.approved:
            family_approved[category] += 1
        # Lowest name wins when several rules share a category
        current = family_names.get(category)
        if current is None or claim.family.name < current:
            family_names[category] = claim.family.name

    families = [
        FamilyStatistics(
            category=category,
            name=family_names[category],
            count=family_counts[category],
            approved=family_approved[category],
        )
        for category in sorted(family_counts)
    ]

    return Statistics(
        families=families,
        document_types=dict(sorted(document_types.items())),
        num_approved=num_approved,
        num_unapproved=num_unapproved,
        num_unknown=num_unknown,
        num_read_errors=num_read_errors,
    )
