"""Aggregated audit statistics models."""

from __future__ import annotations

from pydantic import BaseModel, Field, computed_field


class FamilyStatistics(BaseModel):
    """Counts for a single license family."""

    model_config = {"extra": "forbid", "frozen": True}

    category: str = Field(description="Family category code")
    name: str = Field(description="Family display name")
    count: int = Field(ge=0, description="Number of files in this family")
    approved: int = Field(ge=0, description="Number of those files approved")


class Statistics(BaseModel):
    """Statistics for a whole audit run.

    Built once from the full claim stream and never mutated afterwards.
    """

    model_config = {"extra": "forbid", "frozen": True}

    families: list[FamilyStatistics] = Field(
        default_factory=list,
        description="Per-family counts sorted by category code",
    )
    document_types: dict[str, int] = Field(
        default_factory=dict,
        description="Number of files per document type",
    )
    num_approved: int = Field(default=0, ge=0)
    num_unapproved: int = Field(default=0, ge=0)
    num_unknown: int = Field(default=0, ge=0)
    num_read_errors: int = Field(default=0, ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def num_total(self) -> int:
        """Total number of claims."""
        return self.num_approved + self.num_unapproved
