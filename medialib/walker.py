"""Directory listings and depth-bounded recursive name search."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from itertools import islice
from pathlib import Path
from typing import Iterator

from medialib.errors import EntryKindError, MediaIOError, NotFoundError
from medialib.media import MediaClassifier
from medialib.paths import ResolvedPath, relative_to_root

logger = logging.getLogger(__name__)

FOLDER = "folder"
FILE = "file"
ROOT_FOLDER = "/"
HIDDEN_PREFIX = "."


@dataclass(frozen=True, slots=True)
class Entry:
    name: str
    relative_path: str
    kind: str
    type: str | None = None
    size: int | None = None
    modified_at: float | None = None

    def to_dict(self) -> dict:
        out: dict = {"name": self.name, "relativePath": self.relative_path, "kind": self.kind}
        if self.type is not None:
            out["type"] = self.type
        if self.size is not None:
            out["size"] = self.size
        if self.modified_at is not None:
            out["modifiedAt"] = (
                datetime.fromtimestamp(self.modified_at, tz=timezone.utc)
                .isoformat()
                .replace("+00:00", "Z")
            )
        return out


@dataclass(frozen=True, slots=True)
class SearchResult:
    entry: Entry
    folder: str

    def to_dict(self) -> dict:
        return {**self.entry.to_dict(), "folder": self.folder}


@dataclass(frozen=True, slots=True)
class Listing:
    folders: tuple[Entry, ...] = field(default_factory=tuple)
    files: tuple[Entry, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "folders": [e.to_dict() for e in self.folders],
            "files": [e.to_dict() for e in self.files],
        }


def _sort_key(entry: os.DirEntry) -> tuple[str, str]:
    return (entry.name.lower(), entry.name)


def _scan(path: Path) -> list[os.DirEntry]:
    with os.scandir(path) as it:
        return sorted((e for e in it if not e.name.startswith(HIDDEN_PREFIX)), key=_sort_key)


def _is_dir(entry: os.DirEntry) -> bool:
    try:
        return entry.is_dir()
    except OSError:
        return False


# an entry whose link status cannot be read is treated as a link and not descended
def _is_symlink(entry: os.DirEntry) -> bool:
    try:
        return entry.is_symlink()
    except OSError:
        return True


def _file_entry(root: Path, entry: os.DirEntry, classifier: MediaClassifier) -> Entry | None:
    try:
        st = entry.stat()
    except FileNotFoundError:
        # vanished or dangling symlink
        logger.debug("skipping unreadable entry %s", entry.path)
        return None
    return Entry(
        name=entry.name,
        relative_path=relative_to_root(root, Path(entry.path)),
        kind=FILE,
        type=classifier.classify(entry.name).kind,
        size=st.st_size,
        modified_at=st.st_mtime,
    )


def _folder_entry(root: Path, entry: os.DirEntry) -> Entry:
    return Entry(
        name=entry.name,
        relative_path=relative_to_root(root, Path(entry.path)),
        kind=FOLDER,
    )


def _require_directory(target: ResolvedPath) -> None:
    try:
        is_dir = target.path.is_dir()
        exists = is_dir or target.path.exists()
    except OSError as e:
        raise MediaIOError(f"failed to stat directory: {e.strerror or e}") from e
    if not exists:
        raise NotFoundError("path not found")
    if not is_dir:
        raise EntryKindError("path is not a directory")


def list_directory(target: ResolvedPath, classifier: MediaClassifier) -> Listing:
    _require_directory(target)
    try:
        items = _scan(target.path)
    except OSError as e:
        raise MediaIOError(f"failed to read directory: {e.strerror or e}") from e

    folders: list[Entry] = []
    files: list[Entry] = []
    for item in items:
        if _is_dir(item):
            folders.append(_folder_entry(target.root, item))
            continue
        try:
            entry = _file_entry(target.root, item, classifier)
        except OSError as e:
            raise MediaIOError(f"failed to stat {item.name}: {e.strerror or e}") from e
        if entry is not None:
            files.append(entry)
    return Listing(folders=tuple(folders), files=tuple(files))


def iter_search(
    start: ResolvedPath,
    query: str,
    classifier: MediaClassifier,
    max_depth: int,
) -> Iterator[SearchResult]:
    """Yield matches under ``start`` depth first, in name order.

    ``start`` itself is depth 0; a subfolder is entered only while its depth
    stays within ``max_depth``. Unreadable subfolders are skipped.
    """
    _require_directory(start)
    try:
        top = _scan(start.path)
    except OSError as e:
        raise MediaIOError(f"failed to read directory: {e.strerror or e}") from e
    yield from _walk(start.root, start.path, top, query.lower(), classifier, 0, max_depth)


def _walk(
    root: Path,
    directory: Path,
    items: list[os.DirEntry],
    needle: str,
    classifier: MediaClassifier,
    depth: int,
    max_depth: int,
) -> Iterator[SearchResult]:
    folder = relative_to_root(root, directory) or ROOT_FOLDER
    for item in items:
        if _is_dir(item):
            if needle in item.name.lower():
                yield SearchResult(_folder_entry(root, item), folder)
            if depth + 1 > max_depth:
                logger.debug("depth limit %d reached at %s", max_depth, item.path)
                continue
            if _is_symlink(item):
                continue
            try:
                children = _scan(Path(item.path))
            except OSError as e:
                logger.warning("skipping unreadable folder %s: %s", item.path, e.strerror or e)
                continue
            yield from _walk(root, Path(item.path), children, needle, classifier, depth + 1, max_depth)
        elif needle in item.name.lower():
            try:
                entry = _file_entry(root, item, classifier)
            except OSError as e:
                logger.warning("skipping unreadable file %s: %s", item.path, e.strerror or e)
                continue
            if entry is not None:
                yield SearchResult(entry, folder)


def search(
    start: ResolvedPath,
    query: str,
    classifier: MediaClassifier,
    max_depth: int = 10,
    max_results: int = 100,
    min_query_length: int = 2,
) -> tuple[SearchResult, ...]:
    query = (query or "").strip()
    if len(query) < min_query_length or max_results <= 0:
        return ()
    return tuple(islice(iter_search(start, query, classifier, max(0, max_depth)), max_results))
