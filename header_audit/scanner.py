"""Scanner module: file discovery and per-file header auditing."""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from header_audit.analysis.approval import ApprovalPolicy
from header_audit.analysis.documents import AuditDocument, build_document
from header_audit.analysis.exclusions import ExclusionFilter
from header_audit.analysis.matchers import MatcherPipeline
from header_audit.constants import HEADER_SAMPLE_LINES, MAX_CONCURRENT_READS
from header_audit.exceptions import FileReadError
from header_audit.models.claim import Claim, DocumentType
from header_audit.models.license import GENERATED

logger = logging.getLogger(__name__)


def default_worker_count() -> int:
    """Number of concurrent file reads bounded by available CPUs."""
    return min(MAX_CONCURRENT_READS, (os.cpu_count() or 1) + 4)


def printable_path(text: str) -> str:
    """Replace file name bytes that are not valid UTF-8.

    Such bytes are decoded by the filesystem layer as lone surrogates,
    which cannot be written to UTF-8 reports.
    """
    return os.fsencode(text).decode("utf-8", errors="replace")


def relative_path(path: Path, base_dir: Path) -> str:
    """Get the printable POSIX path of a file relative to the audit root.

    Paths outside the root are returned as given.
    """
    try:
        rel = path.relative_to(base_dir)
    except ValueError:
        try:
            rel = path.resolve().relative_to(base_dir.resolve())
        except ValueError:
            rel = path
    return printable_path(rel.as_posix())


def discover_files(
    root: Path,
    includes: Sequence[str] = (),
    excludes: Sequence[str] = (),
) -> list[Path]:
    """Discover regular files below a directory.

    Args:
        root: Directory to walk.
        includes: Glob patterns a file must match (all files when empty).
        excludes: Glob patterns of files to skip.

    Returns:
        Files sorted by relative path for deterministic output.
    """
    include_filter = (
        ExclusionFilter.from_lines(includes, source="includes") if includes else None
    )
    exclude_filter = ExclusionFilter.from_lines(excludes, source="excludes")

    discovered: list[tuple[str, Path]] = []
    for path in root.rglob("*"):
        if not path.is_file():
            continue
        rel = relative_path(path, root)
        # An include filter "excludes" exactly the paths it matches
        if include_filter is not None and not include_filter.is_excluded(rel):
            continue
        if exclude_filter.is_excluded(rel):
            continue
        discovered.append((rel, path))

    return [path for _, path in sorted(discovered, key=lambda item: item[0])]


def read_document(path: Path, rel: str) -> AuditDocument:
    """Read and type a file.

    Raises:
        FileReadError: If the file cannot be read.
    """
    try:
        content = path.read_bytes()
    except OSError as e:
        raise FileReadError(rel, e.strerror or str(e)) from e
    return build_document(rel, content)


def header_sample(text: str, lines: int = HEADER_SAMPLE_LINES) -> str:
    """Get the leading lines of a file."""
    return "\n".join(text.splitlines()[:lines])


def audit_file(
    path: Path,
    base_dir: Path,
    pipeline: MatcherPipeline,
    policy: ApprovalPolicy,
) -> Claim:
    """Audit a single file.

    Unreadable files produce a read-error claim instead of an exception.

    Args:
        path: File to audit.
        base_dir: Audit root, used to compute the claim path.
        pipeline: Matcher pipeline classifying the header.
        policy: Approval policy for the classified family.

    Returns:
        The claim for the file.
    """
    rel = relative_path(path, base_dir)
    try:
        document = read_document(path, rel)
    except FileReadError as e:
        logger.warning("%s", e)
        return Claim.read_error(rel, e.reason)

    family = pipeline.classify(document)
    document_type = document.document_type
    # Rule families sharing the category code keep the document type
    if family is GENERATED and document_type is DocumentType.STANDARD:
        document_type = DocumentType.GENERATED

    return Claim(
        path=rel,
        document_type=document_type,
        family=family,
        approved=policy.is_approved(family),
        header_sample=header_sample(document.text) if family.is_unknown else None,
    )


async def audit_files(
    files: Sequence[Path],
    base_dir: Path,
    exclusion_filter: ExclusionFilter,
    pipeline: MatcherPipeline,
    policy: ApprovalPolicy,
    max_workers: Optional[int] = None,
    console: Optional[Console] = None,
    show_progress: bool = False,
) -> list[Claim]:
    """Audit files concurrently, returning claims in discovery order.

    Excluded files produce no claim. Reads and classification run in worker
    threads bounded by a semaphore; results are merged back by discovery
    index.

    Args:
        files: Files in discovery order.
        base_dir: Audit root.
        exclusion_filter: Filter removing files from the audit.
        pipeline: Matcher pipeline.
        policy: Approval policy.
        max_workers: Maximum concurrent reads (default bounded by CPUs).
        console: Optional Rich Console for progress display.
        show_progress: Whether to show a progress indicator.

    Returns:
        One claim per non-excluded file, in discovery order.
    """
    candidates = [
        path
        for path in files
        if exclusion_filter.should_include(relative_path(path, base_dir))
    ]
    excluded_count = len(files) - len(candidates)
    if excluded_count:
        logger.info("Excluded %d file(s) by exclusion patterns", excluded_count)

    semaphore = asyncio.Semaphore(max_workers or default_worker_count())

    async def audit_one(idx: int, path: Path) -> tuple[int, Claim]:
        async with semaphore:
            claim = await asyncio.to_thread(audit_file, path, base_dir, pipeline, policy)
            return (idx, claim)

    claims: list[Optional[Claim]] = [None] * len(candidates)

    if console is not None and show_progress and len(candidates) > 0:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            task_id = progress.add_task(
                f"Auditing {len(candidates)} files...",
                total=len(candidates),
            )
            tasks = [audit_one(i, path) for i, path in enumerate(candidates)]
            for coro in asyncio.as_completed(tasks):
                idx, claim = await coro
                claims[idx] = claim
                progress.advance(task_id)
    else:
        results = await asyncio.gather(
            *(audit_one(i, path) for i, path in enumerate(candidates))
        )
        for idx, claim in results:
            claims[idx] = claim

    return [claim for claim in claims if claim is not None]
