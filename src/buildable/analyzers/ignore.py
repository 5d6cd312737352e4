# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Gitignore-style path filtering for declaration discovery."""

import logging
import os
from collections.abc import Iterable
from pathlib import Path

import pathspec

logger = logging.getLogger(__name__)


class IgnoreMatcher:
    """Match root-relative paths against gitignore patterns."""

    def __init__(self, spec: pathspec.GitIgnoreSpec) -> None:
        self._spec = spec

    @classmethod
    def from_root(cls, root_path: Path, extra_patterns: Iterable[str] = ()) -> "IgnoreMatcher":
        """Build a matcher from every ``.gitignore`` below a root.

        Args:
            root_path: Discovery root.
            extra_patterns: Additional root-relative gitignore patterns.

        Returns:
            Configured matcher.

        Raises:
            OSError: If a ``.gitignore`` file cannot be read.
            UnicodeDecodeError: If a ``.gitignore`` file is not valid UTF-8.
        """
        patterns: list[str] = []
        for ignore_path in sorted(root_path.rglob(".gitignore")):
            base = ignore_path.parent.relative_to(root_path).as_posix()
            if base == ".":
                base = ""
            for line in ignore_path.read_text(encoding="utf-8").splitlines():
                patterns.append(_rebase_pattern(line=line, base=base))
        patterns.extend(extra_patterns)
        logger.debug(f"Loaded ignore patterns (root={root_path} count={len(patterns)})")
        return cls(spec=pathspec.GitIgnoreSpec.from_lines(patterns))

    def matches(self, relative_path: str, is_dir: bool = False) -> bool:
        """Check whether a root-relative path is ignored.

        Args:
            relative_path: Root-relative path.
            is_dir: Whether the path is a directory.

        Returns:
            True when the path should be skipped.
        """
        normalized = relative_path.replace(os.sep, "/").strip("/")
        if not normalized:
            return False
        if self._spec.match_file(normalized):
            return True
        return is_dir and self._spec.match_file(f"{normalized}/")


def _rebase_pattern(line: str, base: str) -> str:
    """Rewrite a nested ``.gitignore`` line relative to the discovery root."""
    if not base or not line or line.lstrip().startswith("#"):
        return line
    if line.startswith(r"\!") or line.startswith(r"\#"):
        return line
    negated = line.startswith("!")
    pattern = line[1:] if negated else line
    anchored = pattern.startswith("/")
    pattern = pattern.lstrip("/")
    rebased = f"{base}/{pattern}" if pattern else base
    if anchored:
        rebased = f"/{rebased}"
    return f"!{rebased}" if negated else rebased
