def test_rename_without_extension_appends_old_one_and_updates_albums(client, auth, sample_tree):
    album = client.post("/api/albums", json={"name": "Favourites"}, headers=auth).json()
    client.post(f"/api/albums/{album['id']}/videos", json={"path": "movies/a.mp4"}, headers=auth)

    r = client.post("/api/rename", json={"path": "movies/a.mp4", "newName": "b"}, headers=auth)
    assert r.status_code == 200
    data = r.json()
    assert data["new"] == "movies/b.mp4"
    assert data["albumsUpdated"] == 1
    assert (sample_tree / "movies" / "b.mp4").is_file()
    assert not (sample_tree / "movies" / "a.mp4").exists()

    stored = client.get(f"/api/albums/{album['id']}", headers=auth).json()
    assert [v["path"] for v in stored["videos"]] == ["movies/b.mp4"]


def test_rename_with_explicit_extension(client, auth, sample_tree):
    r = client.post("/api/rename", json={"path": "movies/a.mp4", "newName": "b.mp4"}, headers=auth)
    assert r.status_code == 200
    assert r.json()["new"] == "movies/b.mp4"
    r = client.post("/api/rename", json={"path": "movies/b.mp4", "newName": "c.MKV"}, headers=auth)
    assert r.status_code == 200
    assert (sample_tree / "movies" / "c.MKV").is_file()


def test_rename_refuses_to_change_file_type(client, auth, sample_tree):
    album = client.post("/api/albums", json={"name": "Favourites"}, headers=auth).json()
    client.post(f"/api/albums/{album['id']}/videos", json={"path": "movies/a.mp4"}, headers=auth)

    r = client.post("/api/rename", json={"path": "movies/a.mp4", "newName": "a.txt"}, headers=auth)
    assert r.status_code == 400
    assert (sample_tree / "movies" / "a.mp4").is_file()
    assert not (sample_tree / "movies" / "a.txt").exists()
    stored = client.get(f"/api/albums/{album['id']}", headers=auth).json()
    assert [v["path"] for v in stored["videos"]] == ["movies/a.mp4"]


def test_rename_folder_rewrites_album_prefix(client, auth, sample_tree):
    album = client.post("/api/albums", json={"name": "x"}, headers=auth).json()
    client.post(f"/api/albums/{album['id']}/videos", json={"path": "movies/a.mp4"}, headers=auth)

    r = client.post("/api/rename", json={"path": "movies", "newName": "films"}, headers=auth)
    assert r.status_code == 200
    assert r.json()["new"] == "films"
    stored = client.get(f"/api/albums/{album['id']}", headers=auth).json()
    assert stored["videos"][0]["path"] == "films/a.mp4"


def test_rename_conflict_409(client, auth, sample_tree):
    (sample_tree / "movies" / "b.mp4").write_bytes(b"x")
    r = client.post("/api/rename", json={"path": "movies/a.mp4", "newName": "b.mp4"}, headers=auth)
    assert r.status_code == 409


def test_rename_rejects_bad_input(client, auth, sample_tree):
    r = client.post("/api/rename", json={"path": "movies/a.mp4", "newName": "../x.mp4"}, headers=auth)
    assert r.status_code == 400
    r = client.post("/api/rename", json={"path": "../outside", "newName": "x"}, headers=auth)
    assert r.status_code == 400
    r = client.post("/api/rename", json={"path": "movies/missing.mp4", "newName": "x"}, headers=auth)
    assert r.status_code == 404


def test_upload_requires_session(client, sample_tree):
    r = client.post("/api/upload", files={"file": ("x.mp4", b"\x00" * 16, "video/mp4")})
    assert r.status_code == 401


def test_upload_video_succeeds(client, auth, sample_tree):
    r = client.post(
        "/api/upload",
        headers=auth,
        data={"path": "movies"},
        files={"file": ("new.mp4", b"\x00" * 128, "video/mp4")},
    )
    assert r.status_code == 200
    assert r.json() == {"ok": True, "path": "movies/new.mp4", "size": 128}
    assert (sample_tree / "movies" / "new.mp4").stat().st_size == 128


def test_upload_rejects_non_media_and_existing(client, auth, sample_tree):
    r = client.post(
        "/api/upload",
        headers=auth,
        files={"file": ("evil.sh", b"#!/bin/sh", "text/plain")},
    )
    assert r.status_code == 400
    r = client.post(
        "/api/upload",
        headers=auth,
        data={"path": "movies"},
        files={"file": ("a.mp4", b"\x00", "video/mp4")},
    )
    assert r.status_code == 409
    assert (sample_tree / "movies" / "a.mp4").stat().st_size == 500_000


def test_upload_traversal_folder_400(client, auth, sample_tree):
    r = client.post(
        "/api/upload",
        headers=auth,
        data={"path": "../"},
        files={"file": ("x.mp4", b"\x00", "video/mp4")},
    )
    assert r.status_code == 400
