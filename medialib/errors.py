"""Errors raised by the media core.

Each error knows the HTTP status it maps to; ``main`` registers a single
handler that renders them the same way FastAPI renders ``HTTPException``.
"""

from __future__ import annotations


class MediaError(Exception):
    status_code = 500
    default_detail = "internal error"

    def __init__(self, detail: str | None = None, headers: dict[str, str] | None = None):
        self.detail = detail or self.default_detail
        self.headers = headers
        super().__init__(self.detail)


class TraversalError(MediaError):
    status_code = 400
    default_detail = "invalid path"


class NotFoundError(MediaError):
    status_code = 404
    default_detail = "not found"


class EntryKindError(NotFoundError):
    """The path exists but is a file where a folder was expected, or the reverse."""

    status_code = 400
    default_detail = "wrong entry kind"


class InvalidMediaError(MediaError):
    status_code = 400
    default_detail = "unsupported media type"


class MalformedRangeError(MediaError):
    status_code = 416
    default_detail = "range not satisfiable"

    def __init__(self, file_size: int, detail: str | None = None):
        self.file_size = file_size
        super().__init__(detail, headers={"Content-Range": f"bytes */{file_size}"})


class MediaIOError(MediaError):
    status_code = 500
    default_detail = "i/o error"


class ConflictError(MediaError):
    status_code = 409
    default_detail = "target already exists"
