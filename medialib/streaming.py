"""Byte-range aware file streaming.

Every check that can fail (existence, kind, classification, range bounds)
runs before a response object exists, so failures never follow committed
headers. Once streaming starts, an I/O error can only abort the connection.
"""

from __future__ import annotations

import logging
import os
import re
import stat as stat_mod
from dataclasses import dataclass
from pathlib import Path
from typing import AsyncIterator
from urllib.parse import quote

import anyio
from fastapi.responses import StreamingResponse

from medialib.errors import (
    EntryKindError,
    InvalidMediaError,
    MalformedRangeError,
    MediaIOError,
    NotFoundError,
)
from medialib.media import VIDEO, MediaClassifier
from medialib.paths import ResolvedPath

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_BYTES = 64 * 1024
OCTET_STREAM = "application/octet-stream"

_RANGE_RE = re.compile(r"^bytes\s*=\s*(\d+)\s*-\s*(\d*)$", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class ByteRange:
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    def content_range(self, file_size: int) -> str:
        return f"bytes {self.start}-{self.end}/{file_size}"


def parse_range(header: str | None, file_size: int) -> ByteRange | None:
    if header is None or not header.strip():
        return None
    m = _RANGE_RE.match(header.strip())
    if not m:
        raise MalformedRangeError(file_size, "malformed range header")
    start = int(m.group(1))
    end = int(m.group(2)) if m.group(2) else file_size - 1
    if start >= file_size or end >= file_size or start > end:
        raise MalformedRangeError(file_size)
    return ByteRange(start, end)


async def iter_file_range(
    path: Path, start: int, end: int, chunk_size: int = DEFAULT_CHUNK_BYTES
) -> AsyncIterator[bytes]:
    f = await anyio.open_file(path, "rb")
    try:
        if start:
            await f.seek(start)
        remaining = end - start + 1
        while remaining > 0:
            try:
                chunk = await f.read(min(chunk_size, remaining))
            except OSError as e:
                logger.error("read failed for %s at offset %d: %s", path, end - remaining + 1, e)
                raise MediaIOError(f"read failed: {e.strerror or e}") from e
            if not chunk:
                logger.error("%s shrank while streaming, %d bytes short", path, remaining)
                raise MediaIOError("file truncated during stream")
            remaining -= len(chunk)
            yield chunk
    finally:
        with anyio.CancelScope(shield=True):
            await f.aclose()


class FileStreamResponse(StreamingResponse):
    """StreamingResponse that always closes its body iterator.

    Starlette abandons the iterator when the client goes away; closing it
    here releases the open file handle right away.
    """

    async def __call__(self, scope, receive, send) -> None:
        try:
            await super().__call__(scope, receive, send)
        finally:
            aclose = getattr(self.body_iterator, "aclose", None)
            if aclose is not None:
                with anyio.CancelScope(shield=True):
                    await aclose()


def stat_regular_file(target: ResolvedPath) -> os.stat_result:
    try:
        st = target.path.stat()
    except FileNotFoundError as e:
        raise NotFoundError("file not found") from e
    except NotADirectoryError as e:
        raise NotFoundError("file not found") from e
    except OSError as e:
        raise MediaIOError(f"failed to stat file: {e.strerror or e}") from e
    if not stat_mod.S_ISREG(st.st_mode):
        raise EntryKindError("path is not a file")
    return st


def stream_media(
    target: ResolvedPath,
    range_header: str | None,
    classifier: MediaClassifier,
    chunk_size: int = DEFAULT_CHUNK_BYTES,
) -> FileStreamResponse:
    st = stat_regular_file(target)
    info = classifier.classify(target.name)
    if info.kind != VIDEO or not info.mime_type:
        raise InvalidMediaError("invalid video file")

    file_size = st.st_size
    byte_range = parse_range(range_header, file_size)
    headers = {"Accept-Ranges": "bytes"}
    if byte_range is None:
        headers["Content-Length"] = str(file_size)
        return FileStreamResponse(
            iter_file_range(target.path, 0, file_size - 1, chunk_size),
            status_code=200,
            headers=headers,
            media_type=info.mime_type,
        )

    headers["Content-Range"] = byte_range.content_range(file_size)
    headers["Content-Length"] = str(byte_range.length)
    logger.debug("range %s for %s", headers["Content-Range"], target.relative)
    return FileStreamResponse(
        iter_file_range(target.path, byte_range.start, byte_range.end, chunk_size),
        status_code=206,
        headers=headers,
        media_type=info.mime_type,
    )


def content_disposition(filename: str, disposition: str = "attachment") -> str:
    ascii_name = filename.encode("ascii", "ignore").decode("ascii").replace('"', "").replace("\\", "")
    ascii_name = ascii_name or "download"
    value = f'{disposition}; filename="{ascii_name}"'
    if ascii_name != filename:
        value += f"; filename*=UTF-8''{quote(filename, safe='')}"
    return value


def download_file(
    target: ResolvedPath,
    classifier: MediaClassifier,
    chunk_size: int = DEFAULT_CHUNK_BYTES,
) -> FileStreamResponse:
    st = stat_regular_file(target)
    mime = classifier.classify(target.name).mime_type or OCTET_STREAM
    headers = {
        "Content-Length": str(st.st_size),
        "Content-Disposition": content_disposition(target.name),
    }
    return FileStreamResponse(
        iter_file_range(target.path, 0, st.st_size - 1, chunk_size),
        status_code=200,
        headers=headers,
        media_type=mime,
    )
