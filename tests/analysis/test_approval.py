"""Tests for the approval policy."""
from header_audit.analysis.approval import DEFAULT_APPROVED_CATEGORIES, ApprovalPolicy
from header_audit.models.config import AuditConfig, SubstringRule
from header_audit.models.license import (
    APACHE_2,
    BUILTIN_FAMILIES,
    GENERATED,
    MIT,
    UNKNOWN_FAMILY,
    LicenseFamily,
)

ACME_RULE = SubstringRule(
    license_family_category="ACME",
    license_family_name="Acme Proprietary",
    substrings=["Copyright ACME"],
)


class TestDefaultApproval:
    """Tests for approval without an explicit list."""

    def test_uses_defaults(self) -> None:
        """Test that an empty list defers to the built-in table."""
        assert ApprovalPolicy().uses_defaults
        assert ApprovalPolicy(approved_names=[]).uses_defaults

    def test_builtin_families_approved(self) -> None:
        """Test that every built-in family is approved by default."""
        policy = ApprovalPolicy()

        assert all(policy.is_approved(family) for family in BUILTIN_FAMILIES)
        assert {f.category for f in BUILTIN_FAMILIES} == DEFAULT_APPROVED_CATEGORIES

    def test_unknown_never_approved(self) -> None:
        """Test that the unknown family is rejected."""
        assert not ApprovalPolicy().is_approved(UNKNOWN_FAMILY)

    def test_unreadable_never_approved(self) -> None:
        """Test that a missing family is rejected."""
        assert not ApprovalPolicy().is_approved(None)

    def test_rule_family_approved(self) -> None:
        """Test that families declared by configured rules are approved."""
        policy = ApprovalPolicy(rules=[ACME_RULE])

        assert policy.is_approved(ACME_RULE.family)

    def test_undeclared_family_rejected(self) -> None:
        """Test that families outside the table and rules are rejected."""
        policy = ApprovalPolicy(rules=[ACME_RULE])

        assert not policy.is_approved(LicenseFamily(category="XYZ", name="Xyz"))


class TestExplicitApproval:
    """Tests for an explicit approved list."""

    def test_list_replaces_defaults(self) -> None:
        """Test that only listed family names are approved."""
        policy = ApprovalPolicy(approved_names=["MIT"])

        assert not policy.uses_defaults
        assert policy.is_approved(MIT)
        assert not policy.is_approved(APACHE_2)
        assert not policy.is_approved(GENERATED)

    def test_names_are_case_sensitive(self) -> None:
        """Test that names must match exactly."""
        assert not ApprovalPolicy(approved_names=["mit"]).is_approved(MIT)

    def test_unknown_not_approvable(self) -> None:
        """Test that listing the unknown name does not approve it."""
        policy = ApprovalPolicy(approved_names=["Unknown license"])

        assert not policy.is_approved(UNKNOWN_FAMILY)

    def test_rule_family_needs_listing(self) -> None:
        """Test that rule families are not approved implicitly."""
        policy = ApprovalPolicy(approved_names=["Apache-2.0"], rules=[ACME_RULE])

        assert not policy.is_approved(ACME_RULE.family)

    def test_from_config(self) -> None:
        """Test building the policy from configuration."""
        config = AuditConfig(approved_licenses=["Acme Proprietary"], substring_matchers=[ACME_RULE])

        policy = ApprovalPolicy.from_config(config)

        assert policy.is_approved(ACME_RULE.family)
        assert not policy.is_approved(APACHE_2)
