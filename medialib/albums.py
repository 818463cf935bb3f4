"""Album persistence: a small JSON document of albums and the video paths in them.

Paths stored here are media-root relative strings; ``on_rename`` keeps them
in sync when files or folders are renamed through the API.
"""

from __future__ import annotations

import json
import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class RenameListener(Protocol):
    def on_rename(self, old_path: str, new_path: str) -> int: ...


def _utc_now_z() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


class AlbumNotFound(KeyError):
    pass


class AlbumStore:
    def __init__(self, path: Path):
        self.path = path
        self._lock = threading.Lock()

    def _load(self) -> dict:
        if not self.path.exists():
            return {"next_id": 1, "albums": []}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("album store %s unreadable, starting empty", self.path)
            return {"next_id": 1, "albums": []}
        if not isinstance(data, dict) or not isinstance(data.get("albums"), list):
            return {"next_id": 1, "albums": []}
        albums = [a for a in data["albums"] if isinstance(a, dict) and isinstance(a.get("id"), int)]
        next_id = data.get("next_id")
        if not isinstance(next_id, int):
            next_id = max((a["id"] for a in albums), default=0) + 1
        return {"next_id": next_id, "albums": albums}

    def _save(self, data: dict):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(".tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp.replace(self.path)

    @staticmethod
    def _find(data: dict, album_id: int) -> dict:
        for album in data["albums"]:
            if album["id"] == album_id:
                return album
        raise AlbumNotFound(album_id)

    def list_albums(self) -> list[dict]:
        with self._lock:
            return self._load()["albums"]

    def get_album(self, album_id: int) -> dict:
        with self._lock:
            return self._find(self._load(), album_id)

    def create_album(self, name: str) -> dict:
        with self._lock:
            data = self._load()
            album = {
                "id": data["next_id"],
                "name": name,
                "createdAt": _utc_now_z(),
                "videos": [],
            }
            data["next_id"] += 1
            data["albums"].append(album)
            self._save(data)
        logger.info("album %s created: %s", album["id"], name)
        return album

    def rename_album(self, album_id: int, name: str) -> dict:
        with self._lock:
            data = self._load()
            album = self._find(data, album_id)
            album["name"] = name
            self._save(data)
            return album

    def delete_album(self, album_id: int):
        with self._lock:
            data = self._load()
            album = self._find(data, album_id)
            data["albums"].remove(album)
            self._save(data)
        logger.info("album %s deleted", album_id)

    def add_video(self, album_id: int, path: str) -> dict:
        with self._lock:
            data = self._load()
            album = self._find(data, album_id)
            videos = album.setdefault("videos", [])
            if not any(v.get("path") == path for v in videos):
                videos.append({"path": path, "addedAt": _utc_now_z()})
                self._save(data)
            return album

    def remove_video(self, album_id: int, path: str) -> dict:
        with self._lock:
            data = self._load()
            album = self._find(data, album_id)
            before = len(album.get("videos", []))
            album["videos"] = [v for v in album.get("videos", []) if v.get("path") != path]
            if len(album["videos"]) == before:
                raise AlbumNotFound(path)
            self._save(data)
            return album

    def on_rename(self, old_path: str, new_path: str) -> int:
        """Rewrite stored references to ``old_path`` (a file, or a folder prefix)."""
        prefix = old_path.rstrip("/") + "/"
        updated = 0
        with self._lock:
            data = self._load()
            for album in data["albums"]:
                for video in album.get("videos", []):
                    p = video.get("path", "")
                    if p == old_path:
                        video["path"] = new_path
                    elif p.startswith(prefix):
                        video["path"] = new_path.rstrip("/") + "/" + p[len(prefix):]
                    else:
                        continue
                    updated += 1
            if updated:
                self._save(data)
        if updated:
            logger.info("rename %s -> %s updated %d album entries", old_path, new_path, updated)
        return updated
