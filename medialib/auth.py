import re
from fastapi import Header, HTTPException, Query
from medialib.library import sessions

SAFE_NAME_RE = re.compile(r"^[^/\\\x00-\x1f\x7f]{1,255}$")


def require_session(
    x_session_token: str | None = Header(default=None),
    token: str | None = Query(default=None),
) -> str:
    """Return the caller's session token, or reject with 401.

    Media elements (<video src>, <img src>) cannot send headers, so the
    token is also accepted as a query parameter.
    """
    current = x_session_token or token
    if not sessions.is_valid(current):
        raise HTTPException(status_code=401, detail="unauthorized")
    return current


def safe_name(name: str) -> str:
    name = name.strip()
    if not SAFE_NAME_RE.match(name) or name in (".", "..") or name.startswith("."):
        raise HTTPException(status_code=400, detail="invalid filename")
    return name
