from fastapi import APIRouter, Depends, HTTPException, Query
from medialib.albums import AlbumNotFound
from medialib.auth import require_session
from medialib.errors import InvalidMediaError
from medialib.library import albums, classifier, resolve_request_path
from medialib.models import AlbumPayload, AlbumVideoPayload
from medialib.streaming import stat_regular_file

router = APIRouter(prefix="/api/albums", tags=["albums"], dependencies=[Depends(require_session)])


def _album_name(raw: str) -> str:
    name = raw.strip()
    if not name:
        raise HTTPException(status_code=400, detail="album name required")
    return name


@router.get("")
def api_albums():
    return {"albums": albums.list_albums()}


@router.post("")
def api_album_create(payload: AlbumPayload):
    return albums.create_album(_album_name(payload.name))


@router.get("/{album_id}")
def api_album_get(album_id: int):
    try:
        return albums.get_album(album_id)
    except AlbumNotFound as e:
        raise HTTPException(status_code=404, detail="album not found") from e


@router.patch("/{album_id}")
def api_album_rename(album_id: int, payload: AlbumPayload):
    try:
        return albums.rename_album(album_id, _album_name(payload.name))
    except AlbumNotFound as e:
        raise HTTPException(status_code=404, detail="album not found") from e


@router.delete("/{album_id}")
def api_album_delete(album_id: int):
    try:
        albums.delete_album(album_id)
    except AlbumNotFound as e:
        raise HTTPException(status_code=404, detail="album not found") from e
    return {"ok": True, "id": album_id}


@router.post("/{album_id}/videos")
def api_album_add_video(album_id: int, payload: AlbumVideoPayload):
    target = resolve_request_path(payload.path)
    stat_regular_file(target)
    if not classifier.is_video(target.name):
        raise InvalidMediaError("not a video")
    try:
        return albums.add_video(album_id, target.relative)
    except AlbumNotFound as e:
        raise HTTPException(status_code=404, detail="album not found") from e


@router.delete("/{album_id}/videos")
def api_album_remove_video(album_id: int, path: str = Query(...)):
    target = resolve_request_path(path)
    try:
        return albums.remove_video(album_id, target.relative)
    except AlbumNotFound as e:
        raise HTTPException(status_code=404, detail="album or video not found") from e
