from pathlib import Path


def test_album_crud(client, auth, sample_tree):
    assert client.get("/api/albums", headers=auth).json() == {"albums": []}

    r = client.post("/api/albums", json={"name": "  Holiday "}, headers=auth)
    assert r.status_code == 200
    album = r.json()
    assert album["name"] == "Holiday"
    assert album["videos"] == []

    r = client.patch(f"/api/albums/{album['id']}", json={"name": "Trips"}, headers=auth)
    assert r.json()["name"] == "Trips"

    r = client.post(f"/api/albums/{album['id']}/videos", json={"path": "movies/a.mp4"}, headers=auth)
    assert r.status_code == 200
    # adding twice is a no-op
    r = client.post(f"/api/albums/{album['id']}/videos", json={"path": "movies/./a.mp4"}, headers=auth)
    assert [v["path"] for v in r.json()["videos"]] == ["movies/a.mp4"]

    r = client.delete(f"/api/albums/{album['id']}/videos", params={"path": "movies/a.mp4"}, headers=auth)
    assert r.json()["videos"] == []

    assert client.delete(f"/api/albums/{album['id']}", headers=auth).status_code == 200
    assert client.get(f"/api/albums/{album['id']}", headers=auth).status_code == 404


def test_album_rejects_non_video_and_traversal(client, auth, sample_tree):
    album = client.post("/api/albums", json={"name": "a"}, headers=auth).json()
    url = f"/api/albums/{album['id']}/videos"
    assert client.post(url, json={"path": "notes.txt"}, headers=auth).status_code == 400
    assert client.post(url, json={"path": "../../etc/passwd"}, headers=auth).status_code == 400
    assert client.post(url, json={"path": "movies/none.mp4"}, headers=auth).status_code == 404
    assert client.post("/api/albums/999/videos", json={"path": "movies/a.mp4"}, headers=auth).status_code == 404


def test_album_blank_name_400(client, auth):
    assert client.post("/api/albums", json={"name": "   "}, headers=auth).status_code == 400


def test_store_on_rename_and_corrupt_file(tmp_path: Path):
    from medialib.albums import AlbumStore

    path = tmp_path / "albums.json"
    path.write_text("{not json", encoding="utf-8")
    store = AlbumStore(path)
    assert store.list_albums() == []

    album = store.create_album("x")
    store.add_video(album["id"], "shows/s1/e1.mp4")
    store.add_video(album["id"], "shows-extra/e1.mp4")
    store.add_video(album["id"], "shows")

    assert store.on_rename("shows", "series") == 2
    paths = [v["path"] for v in store.get_album(album["id"])["videos"]]
    assert paths == ["series/s1/e1.mp4", "shows-extra/e1.mp4", "series"]
    assert store.on_rename("nothing", "else") == 0
