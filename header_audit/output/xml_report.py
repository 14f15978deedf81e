"""Structured XML report for header audits.

The document layout follows the long-standing release-audit report format
so existing consumers keep working::

    <rat-report tool="header-audit" version="...">
      <resource name="src/main.py">
        <type name="standard"/>
        <header-type name="AL"/>
        <license-family name="Apache-2.0"/>
        <license-approval name="true"/>
      </resource>
      ...
      <statistics .../>
    </rat-report>

No timestamps are written, so identical runs give identical bytes.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from typing import Any, Optional

from header_audit import __version__
from header_audit.exceptions import RenderError
from header_audit.models.claim import Claim
from header_audit.models.report import ReportModel
from header_audit.models.statistics import Statistics

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

# Characters that are not allowed in XML 1.0 documents
_INVALID_XML_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def _xml_safe(value: str) -> str:
    return _INVALID_XML_CHARS.sub("?", value)


def _bool(value: bool) -> str:
    return "true" if value else "false"


class StructuredReportRenderer:
    """Render a frozen report model as an XML document."""

    def render(self, report: ReportModel) -> str:
        """Render the report.

        Args:
            report: A frozen report model.

        Returns:
            The XML document as a string.

        Raises:
            RenderError: If the report is not frozen.
        """
        if not report.is_frozen:
            raise RenderError("Cannot render a report that is still collecting")

        root = ET.Element("rat-report", {"tool": "header-audit", "version": __version__})
        for claim in report.claims:
            self._add_resource(root, claim)
        self._add_statistics(root, report.statistics)

        ET.indent(root, space="  ")
        return XML_DECLARATION + "\n" + ET.tostring(root, encoding="unicode") + "\n"

    def _add_resource(self, root: ET.Element, claim: Claim) -> None:
        """Append the resource element for one claim."""
        resource = ET.SubElement(root, "resource", {"name": _xml_safe(claim.path)})
        ET.SubElement(resource, "type", {"name": claim.document_type.value})

        if claim.header_sample is not None:
            sample = ET.SubElement(resource, "header-sample")
            sample.text = _xml_safe(claim.header_sample)

        for outcome in claim.outcomes:
            ET.SubElement(resource, "header-type", {"name": _xml_safe(outcome.header_type)})
            ET.SubElement(
                resource, "license-family", {"name": _xml_safe(outcome.license_family)}
            )
            ET.SubElement(resource, "license-approval", {"name": _bool(outcome.approved)})

        if claim.error is not None:
            ET.SubElement(resource, "read-error", {"message": _xml_safe(claim.error)})
            ET.SubElement(resource, "license-approval", {"name": "false"})

    def _add_statistics(self, root: ET.Element, stats: Statistics) -> None:
        """Append the statistics element."""
        element = ET.SubElement(
            root,
            "statistics",
            {
                "total": str(stats.num_total),
                "approved": str(stats.num_approved),
                "unapproved": str(stats.num_unapproved),
                "unknown": str(stats.num_unknown),
                "read-errors": str(stats.num_read_errors),
            },
        )
        for name, count in stats.document_types.items():
            ET.SubElement(element, "document-type", {"name": name, "count": str(count)})
        for family in stats.families:
            ET.SubElement(
                element,
                "license-family",
                {
                    "category": _xml_safe(family.category),
                    "name": _xml_safe(family.name),
                    "count": str(family.count),
                    "approved": str(family.approved),
                },
            )


def _int_attr(element: ET.Element, name: str) -> int:
    return int(element.get(name, "0"))


def parse_structured_report(document: str) -> dict[str, Any]:
    """Parse a structured report into plain data.

    The result is what style templates receive as ``report``.

    Args:
        document: XML produced by StructuredReportRenderer.

    Returns:
        Dictionary with ``tool``, ``version``, ``resources`` and
        ``statistics`` keys.

    Raises:
        RenderError: If the document is not a valid structured report.
    """
    try:
        root = ET.fromstring(document)
    except ET.ParseError as e:
        raise RenderError(f"Malformed structured report: {e}") from e
    if root.tag != "rat-report":
        raise RenderError(f"Unexpected structured report root element '{root.tag}'")

    resources: list[dict[str, Any]] = []
    for element in root.iter("resource"):
        type_element = element.find("type")
        sample_element = element.find("header-sample")
        error_element = element.find("read-error")
        outcomes = [
            {
                "header_type": header.get("name", ""),
                "license_family": family.get("name", ""),
                "approved": approval.get("name") == "true",
            }
            for header, family, approval in zip(
                element.findall("header-type"),
                element.findall("license-family"),
                element.findall("license-approval"),
            )
        ]
        approvals = [a.get("name") == "true" for a in element.findall("license-approval")]
        read_error: Optional[str] = (
            error_element.get("message") if error_element is not None else None
        )
        resources.append(
            {
                "name": element.get("name", ""),
                "type": type_element.get("name", "") if type_element is not None else "",
                "header_sample": (
                    sample_element.text or "" if sample_element is not None else None
                ),
                "outcomes": outcomes,
                "read_error": read_error,
                "approved": bool(approvals) and all(approvals),
            }
        )

    statistics: dict[str, Any] = {
        "total": 0,
        "approved": 0,
        "unapproved": 0,
        "unknown": 0,
        "read_errors": 0,
        "document_types": {},
        "families": [],
    }
    stats_element = root.find("statistics")
    if stats_element is not None:
        statistics.update(
            {
                "total": _int_attr(stats_element, "total"),
                "approved": _int_attr(stats_element, "approved"),
                "unapproved": _int_attr(stats_element, "unapproved"),
                "unknown": _int_attr(stats_element, "unknown"),
                "read_errors": _int_attr(stats_element, "read-errors"),
                "document_types": {
                    e.get("name", ""): _int_attr(e, "count")
                    for e in stats_element.findall("document-type")
                },
                "families": [
                    {
                        "category": e.get("category", ""),
                        "name": e.get("name", ""),
                        "count": _int_attr(e, "count"),
                        "approved": _int_attr(e, "approved"),
                    }
                    for e in stats_element.findall("license-family")
                ],
            }
        )

    return {
        "tool": root.get("tool", ""),
        "version": root.get("version", ""),
        "resources": resources,
        "statistics": statistics,
    }
