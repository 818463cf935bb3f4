import logging
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from medialib.auth import require_session, safe_name
from medialib.config import UPLOAD_MAX_BYTES, UPLOAD_MAX_MB
from medialib.errors import ConflictError, EntryKindError, NotFoundError
from medialib.library import classifier, resolve_request_path
from medialib.media import IMAGE, VIDEO

router = APIRouter(prefix="/api", tags=["upload"], dependencies=[Depends(require_session)])
logger = logging.getLogger(__name__)


@router.post("/upload")
async def api_upload(file: UploadFile = File(...), path: str = Form(default="")):
    folder = resolve_request_path(path)
    if not folder.path.exists():
        raise NotFoundError("folder not found")
    if not folder.path.is_dir():
        raise EntryKindError("path is not a directory")

    name = safe_name(file.filename or "")
    if classifier.classify(name).kind not in (VIDEO, IMAGE):
        raise HTTPException(status_code=400, detail="only video and image files allowed")
    target = folder.child(name)
    if target.path.exists():
        raise ConflictError("file already exists")

    total = 0
    try:
        with target.path.open("xb") as out:
            while True:
                chunk = await file.read(1024 * 1024)
                if not chunk:
                    break
                total += len(chunk)
                if total > UPLOAD_MAX_BYTES:
                    raise HTTPException(
                        status_code=413, detail=f"file too large (max {UPLOAD_MAX_MB}MB)"
                    )
                out.write(chunk)
    except FileExistsError as e:
        raise ConflictError("file already exists") from e
    except BaseException:
        target.path.unlink(missing_ok=True)
        raise
    logger.info("upload stored %s (%d bytes)", target.relative, total)
    return {"ok": True, "path": target.relative, "size": total}
