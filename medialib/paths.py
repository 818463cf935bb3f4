"""Confine client supplied relative paths to the media root.

Resolution is purely lexical: nothing here touches the filesystem, so a
rejected path never causes a stat or open.
"""

from __future__ import annotations

import logging
import os
import posixpath
from dataclasses import dataclass
from pathlib import Path

from medialib.errors import TraversalError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ResolvedPath:
    """An absolute path known to be ``root`` or a descendant of it."""

    root: Path
    path: Path

    @property
    def relative(self) -> str:
        return relative_to_root(self.root, self.path)

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def is_root(self) -> bool:
        return self.path == self.root

    def child(self, name: str) -> "ResolvedPath":
        rel = f"{self.relative}/{name}" if self.relative else name
        return resolve(self.root, rel)


def is_within(root: Path, candidate: str) -> bool:
    root_s = str(root)
    if candidate == root_s:
        return True
    return candidate.startswith(root_s.rstrip(os.sep) + os.sep)


def relative_to_root(root: Path, path: Path) -> str:
    if path == root:
        return ""
    return path.relative_to(root).as_posix()


def resolve(root: Path, relative: str | None) -> ResolvedPath:
    if relative is None or not relative.strip():
        return ResolvedPath(root, root)
    if "\x00" in relative:
        logger.warning("rejected path with NUL byte: %r", relative)
        raise TraversalError("invalid path")

    cleaned = relative.replace("\\", "/")
    normalized = posixpath.normpath(cleaned)
    if normalized == ".":
        return ResolvedPath(root, root)
    if normalized == ".." or normalized.startswith("../"):
        logger.warning("traversal attempt rejected: %r", relative)
        raise TraversalError("invalid path: directory traversal detected")

    candidate = os.path.normpath(os.path.join(str(root), normalized))
    if not is_within(root, candidate):
        logger.warning("path outside media root rejected: %r -> %s", relative, candidate)
        raise TraversalError("invalid path: directory traversal detected")
    return ResolvedPath(root, Path(candidate))
