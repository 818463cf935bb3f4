import os
from pathlib import Path

_PROJECT_ROOT = Path(__file__).resolve().parent.parent


def _int_env(name: str, default: int, minimum: int = 0) -> int:
    raw = (os.environ.get(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from e
    return max(minimum, value)


MEDIA_ROOT = Path(os.environ.get("MEDIA_ROOT", str(_PROJECT_ROOT / "media"))).resolve()
MEDIA_PASSWORD = os.environ.get("MEDIA_PASSWORD", "")

VIDEO_EXTENSIONS = os.environ.get(
    "VIDEO_EXTENSIONS", ".mp4,.webm,.mkv,.mov,.m4v,.avi,.ogv"
)
IMAGE_EXTENSIONS = os.environ.get(
    "IMAGE_EXTENSIONS", ".jpg,.jpeg,.png,.gif,.webp,.bmp"
)

MAX_RECURSION_DEPTH = _int_env("MAX_RECURSION_DEPTH", 10)
MAX_SEARCH_RESULTS = _int_env("MAX_SEARCH_RESULTS", 100, minimum=1)
MIN_QUERY_LENGTH = _int_env("MIN_QUERY_LENGTH", 2, minimum=1)

SESSION_TTL_S = _int_env("SESSION_TTL_S", 12 * 60 * 60, minimum=60)
STREAM_CHUNK_BYTES = _int_env("STREAM_CHUNK_BYTES", 64 * 1024, minimum=1024)
UPLOAD_MAX_MB = _int_env("UPLOAD_MAX_MB", 2048, minimum=1)
UPLOAD_MAX_BYTES = UPLOAD_MAX_MB * 1024 * 1024

DATA_DIR = Path(os.environ.get("DATA_DIR", str(_PROJECT_ROOT / "data"))).resolve()
FRONTEND_DIR = Path(os.environ.get("FRONTEND_DIR", str(_PROJECT_ROOT / "frontend"))).resolve()

HOST = os.environ.get("HOST", "127.0.0.1")
PORT = _int_env("PORT", 3000, minimum=1)
LOG_LEVEL = (os.environ.get("LOG_LEVEL") or "INFO").upper()

if not MEDIA_PASSWORD:
    raise RuntimeError("MEDIA_PASSWORD is required")
