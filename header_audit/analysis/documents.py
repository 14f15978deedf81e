"""Document typing for audited files.

Binary files, archives and notice files carry no license header of their
own; they are recognized here so the default matcher can exempt them.
"""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import NamedTuple

from header_audit.models.claim import DocumentType

# Size of the leading chunk inspected for NUL bytes
BINARY_SNIFF_BYTES = 8192

ARCHIVE_EXTENSIONS: frozenset[str] = frozenset(
    {
        ".7z",
        ".bz2",
        ".ear",
        ".egg",
        ".gz",
        ".jar",
        ".rar",
        ".tar",
        ".tbz2",
        ".tgz",
        ".war",
        ".whl",
        ".xz",
        ".zip",
    }
)

BINARY_EXTENSIONS: frozenset[str] = frozenset(
    {
        ".bin",
        ".bmp",
        ".class",
        ".dll",
        ".dylib",
        ".eot",
        ".exe",
        ".gif",
        ".ico",
        ".jpeg",
        ".jpg",
        ".o",
        ".otf",
        ".pdf",
        ".png",
        ".pyc",
        ".pyd",
        ".pyo",
        ".so",
        ".svgz",
        ".tif",
        ".tiff",
        ".ttf",
        ".webp",
        ".woff",
        ".woff2",
    }
)

# Compared case-insensitively against the file stem and the full name
NOTICE_NAMES: frozenset[str] = frozenset(
    {
        "authors",
        "changelog",
        "changes",
        "contributors",
        "copying",
        "copyright",
        "dependencies",
        "license",
        "licence",
        "notice",
        "readme",
    }
)

NOTICE_SUFFIXES: frozenset[str] = frozenset({"", ".txt", ".md", ".rst"})


class AuditDocument(NamedTuple):
    """A file prepared for header classification.

    Attributes:
        path: Path relative to the audit root (POSIX form).
        document_type: Guessed document type.
        text: Decoded content (empty for binary and archive files).
    """

    path: str
    document_type: DocumentType
    text: str


def is_binary_content(content: bytes) -> bool:
    """Check the leading chunk of a file for NUL bytes."""
    return b"\x00" in content[:BINARY_SNIFF_BYTES]


def is_notice_name(name: str) -> bool:
    """Check whether a file name is a well-known notice file name."""
    pure = PurePosixPath(name)
    lowered_suffix = pure.suffix.lower()
    if lowered_suffix not in NOTICE_SUFFIXES:
        return False
    return pure.stem.lower() in NOTICE_NAMES


def guess_document_type(path: str, content: bytes) -> DocumentType:
    """Guess the document type of a file.

    Args:
        path: File path (only the name is inspected).
        content: Raw file bytes.

    Returns:
        ARCHIVE, BINARY, NOTICE or STANDARD. GENERATED is decided later
        by the default matcher, which reads the decoded text.
    """
    name = PurePosixPath(path).name
    suffix = PurePosixPath(name).suffix.lower()
    if suffix in ARCHIVE_EXTENSIONS:
        return DocumentType.ARCHIVE
    if suffix in BINARY_EXTENSIONS or is_binary_content(content):
        return DocumentType.BINARY
    if is_notice_name(name):
        return DocumentType.NOTICE
    return DocumentType.STANDARD


def build_document(path: str, content: bytes) -> AuditDocument:
    """Type and decode raw file content.

    Undecodable bytes in text files are replaced rather than rejected so
    that a stray byte never turns a file into a read error.
    """
    document_type = guess_document_type(path, content)
    if document_type in (DocumentType.ARCHIVE, DocumentType.BINARY):
        text = ""
    else:
        text = content.decode("utf-8", errors="replace")
    return AuditDocument(path=path, document_type=document_type, text=text)
