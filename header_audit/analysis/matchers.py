"""Header matchers and the first-match-wins matcher pipeline.

Matchers form a closed set: the built-in default matcher and configured
substring matchers. The pipeline evaluates the default matcher first (when
enabled), then substring matchers in declaration order, and returns the
family of the first matcher that recognizes the header.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import NamedTuple, Optional, Sequence, Union

from header_audit.analysis.documents import AuditDocument
from header_audit.models.claim import DocumentType
from header_audit.models.config import AuditConfig, SubstringRule
from header_audit.models.license import (
    APACHE_2,
    ARCHIVE,
    BINARY,
    BSD,
    CDDL_1,
    GENERATED,
    GPL_1,
    GPL_2,
    GPL_3,
    LGPL,
    MIT,
    NOTICE,
    OASIS,
    UNKNOWN_FAMILY,
    W3C,
    W3C_DOCS,
    LicenseFamily,
)

logger = logging.getLogger(__name__)

# Phrases are compared against normalized text (see normalize_text).
# Order matters: LGPL must be tried before the GPL versions.
DEFAULT_LICENSE_PHRASES: tuple[tuple[LicenseFamily, tuple[str, ...]], ...] = (
    (
        APACHE_2,
        (
            "licensed to the apache software foundation asf under one or more "
            "contributor license agreements",
            "licensed under the apache license version 2 0",
            "http www apache org licenses license 2 0",
            "https www apache org licenses license 2 0",
        ),
    ),
    (
        MIT,
        (
            "permission is hereby granted free of charge to any person obtaining "
            "a copy of this software and associated documentation files the "
            "software to deal in the software without restriction",
        ),
    ),
    (
        BSD,
        (
            "redistribution and use in source and binary forms with or without "
            "modification are permitted provided that the following conditions "
            "are met",
        ),
    ),
    (
        LGPL,
        (
            "gnu lesser general public license",
            "gnu library general public license",
        ),
    ),
    (
        GPL_3,
        (
            "gnu general public license as published by the free software "
            "foundation either version 3",
        ),
    ),
    (
        GPL_2,
        (
            "gnu general public license as published by the free software "
            "foundation either version 2",
        ),
    ),
    (
        GPL_1,
        (
            "gnu general public license as published by the free software "
            "foundation either version 1",
        ),
    ),
    (
        CDDL_1,
        ("common development and distribution license cddl version 1 0",),
    ),
    (
        W3C,
        ("http www w3 org consortium legal 2002 copyright software 20021231",),
    ),
    (
        W3C_DOCS,
        ("http www w3 org consortium legal 2002 copyright documents 20021231",),
    ),
    (
        OASIS,
        ("copyright c oasis open",),
    ),
)

SPDX_FAMILIES: dict[str, LicenseFamily] = {
    "Apache-2.0": APACHE_2,
    "MIT": MIT,
    "0BSD": BSD,
    "BSD-2-Clause": BSD,
    "BSD-3-Clause": BSD,
    "GPL-1.0": GPL_1,
    "GPL-2.0": GPL_2,
    "GPL-3.0": GPL_3,
    "LGPL-2.0": LGPL,
    "LGPL-2.1": LGPL,
    "LGPL-3.0": LGPL,
    "CDDL-1.0": CDDL_1,
}

SPDX_PATTERN = re.compile(r"SPDX-License-Identifier:\s*([A-Za-z0-9.+-]+)")

GENERATED_MARKERS: tuple[str, ...] = (
    "autogenerated by thrift",
    "automatically generated do not modify",
    "code generated by",
    "do not edit",
    "generated by maven",
    "generated by the protocol buffer compiler",
    "this class was autogenerated",
    "this class was generated by",
    "this file has been automatically generated",
    "this file is autogenerated",
    "this file is automatically generated",
    "this file was automatically generated",
    "this file was generated by",
)

# Generated-file markers are only looked for in the leading lines
GENERATED_SCAN_LINES = 30

EXEMPT_DOCUMENT_FAMILIES: dict[DocumentType, LicenseFamily] = {
    DocumentType.BINARY: BINARY,
    DocumentType.ARCHIVE: ARCHIVE,
    DocumentType.NOTICE: NOTICE,
}

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def normalize_text(text: str) -> str:
    """Lowercase text and collapse punctuation and whitespace.

    The result is padded with single spaces so phrases can be matched on
    word boundaries with a plain ``in`` check.
    """
    return " " + _NON_ALNUM.sub(" ", text.lower()).strip() + " "


def _contains_phrase(normalized: str, phrase: str) -> bool:
    return f" {phrase} " in normalized


def spdx_family(text: str) -> Optional[LicenseFamily]:
    """Map the first known SPDX license identifier tag to a family."""
    for match in SPDX_PATTERN.finditer(text):
        identifier = match.group(1)
        for suffix in ("-or-later", "-only", "+"):
            if identifier.endswith(suffix):
                identifier = identifier[: -len(suffix)]
                break
        family = SPDX_FAMILIES.get(identifier)
        if family is not None:
            return family
    return None


def is_generated(text: str) -> bool:
    """Check the leading lines of a file for generated-content markers."""
    head = "\n".join(text.splitlines()[:GENERATED_SCAN_LINES])
    normalized = normalize_text(head)
    return any(_contains_phrase(normalized, marker) for marker in GENERATED_MARKERS)


def match_default(document: AuditDocument) -> Optional[LicenseFamily]:
    """Built-in default matcher.

    Exempts binary, archive and notice documents, then recognizes the
    well-known license notices, SPDX identifiers and generated files.

    Args:
        document: The document to classify.

    Returns:
        The recognized family, or None.
    """
    exempt = EXEMPT_DOCUMENT_FAMILIES.get(document.document_type)
    if exempt is not None:
        return exempt

    normalized = normalize_text(document.text)
    for family, phrases in DEFAULT_LICENSE_PHRASES:
        if any(_contains_phrase(normalized, phrase) for phrase in phrases):
            return family

    family = spdx_family(document.text)
    if family is not None:
        return family

    if is_generated(document.text):
        return GENERATED
    return None


class MatcherKind(Enum):
    """The closed set of matcher strategies."""

    DEFAULT = "default"
    SUBSTRING = "substring"


class HeaderMatcher(NamedTuple):
    """A matcher definition.

    Attributes:
        kind: Strategy used to evaluate the matcher.
        family: Family reported by a substring matcher (None for default).
        substrings: Literal, case-sensitive substrings (substring matchers).
    """

    kind: MatcherKind
    family: Optional[LicenseFamily] = None
    substrings: tuple[str, ...] = ()

    @classmethod
    def default(cls) -> HeaderMatcher:
        """Create the built-in default matcher."""
        return cls(kind=MatcherKind.DEFAULT)

    @classmethod
    def from_rule(cls, rule: SubstringRule) -> HeaderMatcher:
        """Create a substring matcher from a configured rule."""
        return cls(
            kind=MatcherKind.SUBSTRING,
            family=rule.family,
            substrings=tuple(rule.substrings),
        )

    def match(self, document: AuditDocument) -> Optional[LicenseFamily]:
        """Evaluate this matcher against a document.

        Returns:
            The matched family, or None.
        """
        if self.kind is MatcherKind.DEFAULT:
            return match_default(document)
        if any(substring in document.text for substring in self.substrings):
            return self.family
        return None


class MatcherPipeline:
    """Ordered matchers evaluated first-match-wins."""

    def __init__(
        self,
        add_default_matchers: bool = True,
        rules: Sequence[SubstringRule] = (),
    ) -> None:
        """Initialize the pipeline.

        Args:
            add_default_matchers: Evaluate the built-in default matcher
                before any configured rule.
            rules: Substring rules, evaluated in declaration order.
        """
        matchers: list[HeaderMatcher] = []
        if add_default_matchers:
            matchers.append(HeaderMatcher.default())
        matchers.extend(HeaderMatcher.from_rule(rule) for rule in rules)
        self._matchers = tuple(matchers)

    @classmethod
    def from_config(cls, config: AuditConfig) -> MatcherPipeline:
        """Build the pipeline described by an audit configuration."""
        return cls(
            add_default_matchers=config.add_default_matchers,
            rules=config.substring_matchers,
        )

    @property
    def matchers(self) -> tuple[HeaderMatcher, ...]:
        """Matchers in evaluation order."""
        return self._matchers

    def classify(self, document: Union[AuditDocument, str]) -> LicenseFamily:
        """Classify a document (or bare header text) into a family.

        Args:
            document: Document to classify. Plain strings are treated as
                the text of a standard document.

        Returns:
            The family of the first matching matcher, or UNKNOWN_FAMILY.
        """
        if isinstance(document, str):
            document = AuditDocument(
                path="", document_type=DocumentType.STANDARD, text=document
            )
        for matcher in self._matchers:
            family = matcher.match(document)
            if family is not None:
                logger.debug(
                    "%s matched %s (%s matcher)",
                    document.path,
                    family.category,
                    matcher.kind.value,
                )
                return family
        return UNKNOWN_FAMILY
