import logging
from pathlib import PurePosixPath
from fastapi import APIRouter, Depends, HTTPException
from medialib.auth import require_session, safe_name
from medialib.errors import ConflictError, MediaIOError, NotFoundError
from medialib.library import albums, classifier, resolve_request_path
from medialib.models import RenamePayload

router = APIRouter(prefix="/api", tags=["manage"], dependencies=[Depends(require_session)])
logger = logging.getLogger(__name__)


@router.post("/rename")
def api_rename(payload: RenamePayload):
    src = resolve_request_path(payload.path)
    if src.is_root:
        raise HTTPException(status_code=400, detail="cannot rename the media root")
    if not src.path.exists() and not src.path.is_symlink():
        raise NotFoundError("source not found")

    new_name = safe_name(payload.newName)
    if src.path.is_file() and not PurePosixPath(new_name).suffix:
        new_name += src.path.suffix
    elif src.path.is_file() and classifier.classify(new_name).kind != classifier.classify(src.name).kind:
        raise HTTPException(status_code=400, detail="new name changes the file type")
    parent = PurePosixPath(src.relative).parent.as_posix()
    dst = resolve_request_path(new_name if parent == "." else f"{parent}/{new_name}")
    if dst.path == src.path:
        return {"ok": True, "old": src.relative, "new": dst.relative, "albumsUpdated": 0}
    if dst.path.exists():
        raise ConflictError("target name exists")

    try:
        src.path.rename(dst.path)
    except OSError as e:
        raise MediaIOError(f"rename failed: {e.strerror or e}") from e
    logger.info("renamed %s -> %s", src.relative, dst.relative)
    updated = albums.on_rename(src.relative, dst.relative)
    return {"ok": True, "old": src.relative, "new": dst.relative, "albumsUpdated": updated}
