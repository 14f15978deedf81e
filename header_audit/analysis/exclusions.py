"""Exclusion patterns: decide which files are audited at all.

Pattern syntax, one pattern per line:

- ``*`` matches any run of characters within one path segment,
  ``?`` a single character, ``[abc]`` / ``[!abc]`` a character class.
- ``**`` as a whole segment matches across segments (zero or more).
- A pattern without a ``/`` matches the file name, or any directory name,
  at any depth. A pattern containing a ``/`` is anchored at the audit root.
- A trailing ``/`` only matches directories (everything below them).
- A leading ``!`` negates: a later matching negated pattern re-includes a
  path excluded by an earlier one. Patterns apply in order.
- Blank lines and lines starting with ``#`` are ignored. ``\\!`` and
  ``\\#`` escape a literal leading character.
"""

from __future__ import annotations

import re
from pathlib import Path, PurePath
from typing import Iterable, NamedTuple, Optional, Sequence, Union

from header_audit.exceptions import ConfigurationError

PathLike = Union[str, PurePath]


class ExclusionPattern(NamedTuple):
    """A compiled exclusion pattern.

    Attributes:
        source: The pattern as written.
        regex: Compiled expression matched against relative POSIX paths.
        negated: True for ``!`` patterns that re-include paths.
    """

    source: str
    regex: re.Pattern[str]
    negated: bool

    def matches(self, path: str) -> bool:
        """Check whether a normalized relative path matches."""
        return self.regex.match(path) is not None


def translate_glob(pattern: str) -> str:
    """Translate a glob into a regular expression body.

    Args:
        pattern: Glob without leading ``!`` and surrounding slashes.

    Returns:
        Regular expression source, without anchors.

    Raises:
        ValueError: If the glob is malformed.
    """
    i, n = 0, len(pattern)
    out: list[str] = []
    while i < n:
        c = pattern[i]
        if c == "*":
            j = i
            while j < n and pattern[j] == "*":
                j += 1
            whole_segment = (i == 0 or pattern[i - 1] == "/") and (
                j == n or pattern[j] == "/"
            )
            if j - i >= 2 and whole_segment:
                if j < n:
                    # "**/" matches zero or more leading directories
                    out.append("(?:[^/]*/)*")
                    i = j + 1
                else:
                    out.append(".*")
                    i = j
                continue
            out.append("[^/]*")
            i = j
        elif c == "?":
            out.append("[^/]")
            i += 1
        elif c == "[":
            j = i + 1
            if j < n and pattern[j] in "!^":
                j += 1
            if j < n and pattern[j] == "]":
                j += 1
            while j < n and pattern[j] != "]":
                j += 1
            if j >= n:
                raise ValueError("unterminated character class")
            body = pattern[i + 1 : j]
            negate = body[:1] in ("!", "^")
            if negate:
                body = body[1:]
            body = (
                body.replace("\\", "\\\\").replace("[", "\\[").replace("]", "\\]")
            )
            # Classes never match the path separator, ranges included
            out.append(f"(?!/)[{'^' if negate else ''}{body}]")
            i = j + 1
        elif c == "\\":
            if i + 1 >= n:
                raise ValueError("dangling escape at end of pattern")
            out.append(re.escape(pattern[i + 1]))
            i += 2
        else:
            out.append(re.escape(c))
            i += 1
    return "".join(out)


def compile_pattern(line: str) -> ExclusionPattern:
    """Compile one exclusion line.

    Args:
        line: The pattern line (surrounding whitespace is ignored).

    Returns:
        The compiled pattern.

    Raises:
        ValueError: If the pattern is malformed.
    """
    source = line.strip()
    text = source
    negated = text.startswith("!")
    if negated:
        text = text[1:].strip()
    if not text:
        raise ValueError("empty pattern")

    directory_only = text.endswith("/")
    text = text.rstrip("/")
    if not text:
        raise ValueError("pattern matches nothing")

    anchored = "/" in text
    text = text.lstrip("/")
    body = translate_glob(text)
    prefix = "" if anchored else "(?:[^/]*/)*"
    suffix = "/.*" if directory_only else "(?:/.*)?"
    try:
        regex = re.compile(f"^{prefix}{body}{suffix}$", re.DOTALL)
    except re.error as e:
        raise ValueError(str(e)) from e
    return ExclusionPattern(source=source, regex=regex, negated=negated)


def normalize_path(path: PathLike) -> str:
    """Normalize a relative path to the POSIX form patterns match against."""
    text = PurePath(path).as_posix()
    while text.startswith("./"):
        text = text[2:]
    return text.lstrip("/")


class ExclusionFilter:
    """Decides, from ordered glob patterns, whether a path is audited.

    An empty filter includes every path.
    """

    def __init__(self, patterns: Sequence[ExclusionPattern] = ()) -> None:
        self._patterns = tuple(patterns)

    @classmethod
    def from_lines(
        cls, lines: Iterable[str], source: str = "<patterns>"
    ) -> ExclusionFilter:
        """Compile a filter from pattern lines.

        Args:
            lines: Pattern lines; blank and ``#`` comment lines are skipped.
            source: Name used in error messages.

        Returns:
            The compiled filter.

        Raises:
            ConfigurationError: If any line is malformed. All malformed
                lines are reported together.
        """
        patterns: list[ExclusionPattern] = []
        errors: list[str] = []
        for lineno, line in enumerate(lines, start=1):
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            try:
                patterns.append(compile_pattern(stripped))
            except ValueError as e:
                errors.append(f"line {lineno} '{stripped}': {e}")
        if errors:
            raise ConfigurationError(
                f"Invalid exclusion patterns in '{source}': " + "; ".join(errors)
            )
        return cls(patterns)

    @classmethod
    def from_file(cls, path: Optional[Path]) -> ExclusionFilter:
        """Compile a filter from an exclusion file.

        A missing path, or one that is not a regular file, yields an empty
        filter.

        Raises:
            ConfigurationError: If the file cannot be read or is malformed.
        """
        if path is None or not path.is_file():
            return cls()
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(
                f"Cannot read exclusion file '{path}': {e}"
            ) from e
        return cls.from_lines(content.splitlines(), source=str(path))

    @property
    def patterns(self) -> tuple[ExclusionPattern, ...]:
        """Compiled patterns in file order."""
        return self._patterns

    @property
    def is_empty(self) -> bool:
        """True if the filter has no patterns."""
        return not self._patterns

    def is_excluded(self, path: PathLike) -> bool:
        """Check whether a relative path is excluded."""
        normalized = normalize_path(path)
        excluded = False
        for pattern in self._patterns:
            if pattern.matches(normalized):
                excluded = not pattern.negated
        return excluded

    def should_include(self, path: PathLike) -> bool:
        """Check whether a relative path should be audited."""
        return not self.is_excluded(path)
