"""Health check endpoint."""
import os
from datetime import datetime, timezone
from fastapi import APIRouter
from medialib.library import ROOT

router = APIRouter()


@router.get("/api/health")
def health():
    checks = {"app": "ok"}

    # the media root must exist and be listable
    if ROOT.is_dir() and os.access(ROOT, os.R_OK | os.X_OK):
        checks["media_root"] = "ok"
    else:
        checks["media_root"] = "error: not readable"

    status = "ok" if all(v == "ok" for v in checks.values()) else "unhealthy"
    return {
        "status": status,
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "checks": checks,
    }
