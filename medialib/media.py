from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Iterable

VIDEO = "video"
IMAGE = "image"
DOCUMENT = "document"
AUDIO = "audio"
ARCHIVE = "archive"
CODE = "code"
FILE = "file"

DEFAULT_VIDEO_MIME = "video/mp4"

_MIME = {
    # video
    ".mp4": "video/mp4",
    ".m4v": "video/mp4",
    ".webm": "video/webm",
    ".mkv": "video/x-matroska",
    ".mov": "video/quicktime",
    ".avi": "video/x-msvideo",
    ".ogv": "video/ogg",
    ".mpeg": "video/mpeg",
    ".mpg": "video/mpeg",
    ".3gp": "video/3gpp",
    # image
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".bmp": "image/bmp",
    ".avif": "image/avif",
    ".tif": "image/tiff",
    ".tiff": "image/tiff",
    # audio
    ".mp3": "audio/mpeg",
    ".m4a": "audio/mp4",
    ".aac": "audio/aac",
    ".flac": "audio/flac",
    ".wav": "audio/wav",
    ".ogg": "audio/ogg",
    ".opus": "audio/opus",
    # document
    ".pdf": "application/pdf",
    ".txt": "text/plain",
    ".md": "text/markdown",
    ".srt": "application/x-subrip",
    ".vtt": "text/vtt",
    # archive
    ".zip": "application/zip",
    ".gz": "application/gzip",
    ".tar": "application/x-tar",
    ".7z": "application/x-7z-compressed",
    ".rar": "application/vnd.rar",
}

_BUCKETS = {
    DOCUMENT: {
        ".pdf", ".txt", ".md", ".doc", ".docx", ".odt", ".rtf", ".xls", ".xlsx",
        ".ods", ".ppt", ".pptx", ".odp", ".csv", ".epub", ".srt", ".vtt", ".sub",
    },
    AUDIO: {".mp3", ".m4a", ".aac", ".flac", ".wav", ".ogg", ".opus", ".wma"},
    ARCHIVE: {".zip", ".gz", ".tgz", ".tar", ".bz2", ".xz", ".7z", ".rar"},
    CODE: {
        ".py", ".js", ".ts", ".tsx", ".jsx", ".html", ".css", ".json", ".yaml",
        ".yml", ".toml", ".xml", ".sh", ".c", ".h", ".cpp", ".go", ".rs", ".java",
    },
}


def parse_extensions(raw: str | Iterable[str]) -> frozenset[str]:
    """Normalize ``".mp4, MKV,webm"`` (or an iterable) to ``{".mp4", ".mkv", ".webm"}``."""
    items = raw.split(",") if isinstance(raw, str) else raw
    out = set()
    for item in items:
        ext = item.strip().lower()
        if not ext:
            continue
        out.add(ext if ext.startswith(".") else f".{ext}")
    return frozenset(out)


def extension_of(filename: str) -> str:
    return PurePosixPath(filename).suffix.lower()


@dataclass(frozen=True, slots=True)
class Classification:
    kind: str
    mime_type: str | None


@dataclass(frozen=True, slots=True)
class MediaClassifier:
    video_extensions: frozenset[str]
    image_extensions: frozenset[str]

    @classmethod
    def from_strings(cls, video: str, image: str) -> "MediaClassifier":
        return cls(parse_extensions(video), parse_extensions(image))

    def classify(self, filename: str) -> Classification:
        ext = extension_of(filename)
        if ext in self.video_extensions:
            return Classification(VIDEO, _MIME.get(ext, DEFAULT_VIDEO_MIME))
        if ext in self.image_extensions:
            mime = _MIME.get(ext)
            return Classification(IMAGE, mime if mime and mime.startswith("image/") else None)
        for kind, exts in _BUCKETS.items():
            if ext in exts:
                return Classification(kind, _MIME.get(ext))
        return Classification(FILE, None)

    def is_video(self, filename: str) -> bool:
        return extension_of(filename) in self.video_extensions

    def is_image(self, filename: str) -> bool:
        return extension_of(filename) in self.image_extensions
