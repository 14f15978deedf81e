"""Tests for scanner module."""
import os
import sys
from io import StringIO
from pathlib import Path

import pytest
from rich.console import Console

from header_audit.analysis.approval import ApprovalPolicy
from header_audit.analysis.exclusions import ExclusionFilter
from header_audit.analysis.matchers import MatcherPipeline
from header_audit.models.claim import DocumentType
from header_audit.models.config import SubstringRule
from header_audit.models.license import APACHE_2, UNKNOWN_FAMILY
from header_audit.scanner import (
    audit_file,
    audit_files,
    discover_files,
    header_sample,
    relative_path,
)


class TestDiscoverFiles:
    """Tests for discover_files function."""

    def test_sorted_relative_order(self, tmp_path: Path) -> None:
        """Test that files are returned sorted by relative path."""
        for name in ["b.py", "a/z.py", "a/b.py"]:
            path = tmp_path / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("x\n")

        files = discover_files(tmp_path)

        assert [relative_path(f, tmp_path) for f in files] == ["a/b.py", "a/z.py", "b.py"]

    def test_excludes(self, tmp_path: Path) -> None:
        """Test that exclude patterns skip files."""
        (tmp_path / ".git").mkdir()
        (tmp_path / ".git" / "config").write_text("x\n")
        (tmp_path / "main.py").write_text("x\n")

        files = discover_files(tmp_path, excludes=["**/.git/**"])

        assert [f.name for f in files] == ["main.py"]

    def test_includes(self, tmp_path: Path) -> None:
        """Test that include patterns restrict discovery."""
        (tmp_path / "main.py").write_text("x\n")
        (tmp_path / "notes.md").write_text("x\n")

        files = discover_files(tmp_path, includes=["*.py"])

        assert [f.name for f in files] == ["main.py"]


class TestHeaderSample:
    """Tests for header_sample function."""

    def test_limits_lines(self) -> None:
        """Test that only the leading lines are kept."""
        text = "".join(f"line {i}\n" for i in range(20))

        assert header_sample(text).splitlines() == [f"line {i}" for i in range(10)]


class TestRelativePath:
    """Tests for relative_path function."""

    def test_posix_separators(self, tmp_path: Path) -> None:
        """Test that nested paths use forward slashes."""
        assert relative_path(tmp_path / "a" / "b.py", tmp_path) == "a/b.py"

    @pytest.mark.skipif(
        not sys.platform.startswith("linux"), reason="byte file names are POSIX only"
    )
    def test_undecodable_name_is_replaced(self, tmp_path: Path) -> None:
        """Test that file name bytes that are not UTF-8 become U+FFFD."""
        path = tmp_path / os.fsdecode(b"caf\xe9.sh")

        assert relative_path(path, tmp_path) == "caf\ufffd.sh"


class TestAuditFile:
    """Tests for audit_file function."""

    def test_approved_file(self, tmp_path: Path, apache_header: str) -> None:
        """Test that a licensed file is approved."""
        path = tmp_path / "run.sh"
        path.write_text(apache_header + "echo hi\n")

        claim = audit_file(path, tmp_path, MatcherPipeline(), ApprovalPolicy())

        assert claim.path == "run.sh"
        assert claim.family == APACHE_2
        assert claim.approved
        assert claim.header_sample is None

    def test_unknown_file_keeps_sample(self, tmp_path: Path) -> None:
        """Test that unknown files record their leading lines."""
        path = tmp_path / "src" / "util.py"
        path.parent.mkdir()
        path.write_text("import os\n")

        claim = audit_file(path, tmp_path, MatcherPipeline(), ApprovalPolicy())

        assert claim.path == "src/util.py"
        assert claim.family == UNKNOWN_FAMILY
        assert not claim.approved
        assert claim.header_sample == "import os"

    def test_generated_file(self, tmp_path: Path) -> None:
        """Test that generated files get the generated document type."""
        path = tmp_path / "api.pb.go"
        path.write_text("// Code generated by protoc-gen-go. DO NOT EDIT.\n")

        claim = audit_file(path, tmp_path, MatcherPipeline(), ApprovalPolicy())

        assert claim.document_type == DocumentType.GENERATED
        assert claim.approved

    def test_rule_sharing_generated_category(self, tmp_path: Path) -> None:
        """Test that a rule family with the generated code stays a standard file."""
        rule = SubstringRule(
            license_family_category="GEN",
            license_family_name="Generated by tool",
            substrings=["hello"],
        )
        path = tmp_path / "greet.py"
        path.write_text("# hello\n")

        claim = audit_file(
            path,
            tmp_path,
            MatcherPipeline(add_default_matchers=False, rules=[rule]),
            ApprovalPolicy(rules=[rule]),
        )

        assert claim.family is not None
        assert claim.family.name == "Generated by tool"
        assert claim.document_type == DocumentType.STANDARD
        assert claim.approved

    def test_unreadable_file(self, tmp_path: Path) -> None:
        """Test that a read failure becomes a read-error claim."""
        claim = audit_file(
            tmp_path / "vanished.py", tmp_path, MatcherPipeline(), ApprovalPolicy()
        )

        assert claim.is_read_error
        assert claim.path == "vanished.py"
        assert not claim.approved


class TestAuditFiles:
    """Tests for audit_files function."""

    def _tree(self, root: Path, count: int) -> list[Path]:
        files = []
        for i in range(count):
            path = root / f"f{i:03d}.txt"
            path.write_text(f"file {i}\n")
            files.append(path)
        return files

    @pytest.mark.asyncio
    async def test_discovery_order_preserved(self, tmp_path: Path) -> None:
        """Test that claims come back in discovery order."""
        files = self._tree(tmp_path, 25)

        claims = await audit_files(
            files,
            tmp_path,
            ExclusionFilter(),
            MatcherPipeline(),
            ApprovalPolicy(),
            max_workers=3,
        )

        assert [c.path for c in claims] == [f.name for f in files]

    @pytest.mark.asyncio
    async def test_excluded_files_have_no_claim(self, tmp_path: Path) -> None:
        """Test that excluded files are skipped entirely."""
        files = self._tree(tmp_path, 3)

        claims = await audit_files(
            files,
            tmp_path,
            ExclusionFilter.from_lines(["f001.txt"]),
            MatcherPipeline(),
            ApprovalPolicy(),
        )

        assert [c.path for c in claims] == ["f000.txt", "f002.txt"]

    @pytest.mark.asyncio
    async def test_with_progress(self, tmp_path: Path) -> None:
        """Test that the progress display keeps discovery order."""
        files = self._tree(tmp_path, 10)
        console = Console(file=StringIO(), force_terminal=False)

        claims = await audit_files(
            files,
            tmp_path,
            ExclusionFilter(),
            MatcherPipeline(),
            ApprovalPolicy(),
            max_workers=2,
            console=console,
            show_progress=True,
        )

        assert [c.path for c in claims] == [f.name for f in files]

    @pytest.mark.asyncio
    async def test_no_files(self, tmp_path: Path) -> None:
        """Test that an empty file list yields no claims."""
        claims = await audit_files(
            [], tmp_path, ExclusionFilter(), MatcherPipeline(), ApprovalPolicy()
        )

        assert claims == []
