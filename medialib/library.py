"""Process-wide objects built once from configuration."""

from medialib.albums import AlbumStore
from medialib.config import (
    DATA_DIR,
    IMAGE_EXTENSIONS,
    MEDIA_ROOT,
    SESSION_TTL_S,
    VIDEO_EXTENSIONS,
)
from medialib.media import MediaClassifier
from medialib.paths import ResolvedPath, resolve
from medialib.security import SessionStore, SlidingWindowRateLimiter

ROOT = MEDIA_ROOT
classifier = MediaClassifier.from_strings(VIDEO_EXTENSIONS, IMAGE_EXTENSIONS)
sessions = SessionStore(ttl_s=SESSION_TTL_S)
albums = AlbumStore(DATA_DIR / "albums.json")
login_limiter = SlidingWindowRateLimiter(limit=10, window_s=60.0)


def resolve_request_path(raw: str | None) -> ResolvedPath:
    return resolve(ROOT, raw)
