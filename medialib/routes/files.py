"""Stream videos, serve images and force downloads.

Routes:
  GET /api/video?path=...     byte-range streaming for seeking
  GET /api/image?path=...     inline image
  GET /api/download?path=...  any file, Content-Disposition: attachment
"""

from fastapi import APIRouter, Depends, Header, HTTPException, Query
from fastapi.responses import FileResponse
from medialib.auth import require_session
from medialib.config import STREAM_CHUNK_BYTES
from medialib.errors import InvalidMediaError
from medialib.library import classifier, resolve_request_path
from medialib.media import IMAGE
from medialib.paths import ResolvedPath
from medialib.streaming import stat_regular_file, download_file, stream_media

router = APIRouter(prefix="/api", tags=["files"], dependencies=[Depends(require_session)])


def _resolve_file(path: str) -> ResolvedPath:
    target = resolve_request_path(path)
    if target.is_root:
        raise HTTPException(status_code=400, detail="path parameter required")
    return target


@router.get("/video")
def api_video(
    path: str = Query(default=""),
    range_header: str | None = Header(default=None, alias="range"),
):
    return stream_media(_resolve_file(path), range_header, classifier, STREAM_CHUNK_BYTES)


@router.get("/image")
def api_image(path: str = Query(default="")):
    target = _resolve_file(path)
    st = stat_regular_file(target)
    info = classifier.classify(target.name)
    if info.kind != IMAGE or not info.mime_type:
        raise InvalidMediaError("not an image")
    return FileResponse(target.path, media_type=info.mime_type, stat_result=st)


@router.get("/download")
def api_download(path: str = Query(default="")):
    return download_file(_resolve_file(path), classifier, STREAM_CHUNK_BYTES)
