from conftest import auth
from eventgo.core.exceptions import StorageError

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def _upload(client, token, bucket="media", name="poster.png", data=PNG, content_type="image/png", folder=None):
    form = {"folder": folder} if folder else {}
    return client.post(f"/api/storage/{bucket}", files={"file": (name, data, content_type)},
                       data=form, headers=auth(token))


def test_upload_and_public_read(client, college, storage):
    r = _upload(client, college[0], folder="events/banners")
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["bucket"] == "media"
    assert body["path"].startswith("events/banners/")
    assert body["path"].endswith(".png")
    assert body["public_url"] == f"http://testserver/storage/media/{body['path']}"

    r = client.get(f"/storage/media/{body['path']}")
    assert r.status_code == 200
    assert r.content == PNG
    assert r.headers["content-type"] == "image/png"
    assert "max-age" in r.headers["cache-control"]


def test_upload_rejections(client, student):
    assert _upload(client, student[0], name="notes.txt", data=b"hi", content_type="text/plain").status_code == 400
    assert _upload(client, student[0], data=b"").status_code == 400
    big = b"\x00" * (5 * 1024 * 1024 + 1)
    assert _upload(client, student[0], data=big).status_code == 413
    assert _upload(client, student[0], bucket="secrets").status_code == 404

    clip = _upload(client, student[0], bucket="avatars", name="clip.mp4", data=b"\x00" * 32, content_type="video/mp4")
    assert clip.status_code == 400
    assert _upload(client, student[0], name="clip.mp4", data=b"\x00" * 32, content_type="video/mp4").status_code == 201


def test_upload_requires_login(client):
    r = client.post("/api/storage/media", files={"file": ("a.png", PNG, "image/png")})
    assert r.status_code in (401, 403)


def test_delete_by_owner_or_admin(client, student, make_user, admin_token, storage):
    path = _upload(client, student[0]).json()["path"]
    other, _ = make_user("other@campus.io")

    r = client.delete(f"/api/storage/media/{path}", headers=auth(other))
    assert r.status_code == 403
    assert storage.exists("media", path)

    assert client.delete(f"/api/storage/media/{path}", headers=auth(student[0])).status_code == 200
    assert client.get(f"/storage/media/{path}").status_code == 404

    path = _upload(client, student[0]).json()["path"]
    assert client.delete(f"/api/storage/media/{path}", headers=auth(admin_token)).status_code == 200


def test_avatar_replaces_previous_object(client, student, storage):
    token, user = student
    r = client.post(f"/api/users/{user['id']}/avatar", files={"file": ("me.jpg", PNG, "image/jpeg")},
                    headers=auth(token))
    assert r.status_code == 200
    first_url = r.json()["avatar_url"]
    assert first_url.startswith("http://testserver/storage/avatars/")

    r = client.post(f"/api/users/{user['id']}/avatar", files={"file": ("me2.jpg", PNG, "image/jpeg")},
                    headers=auth(token))
    second_url = r.json()["avatar_url"]
    assert second_url != first_url
    assert [key for key in storage.objects if key[0] == "avatars"] == [
        ("avatars", second_url.split("/storage/avatars/", 1)[1])
    ]


def test_cannot_change_someone_elses_avatar(client, student, make_user):
    other, _ = make_user("other@campus.io")
    r = client.post(f"/api/users/{student[1]['id']}/avatar", files={"file": ("me.jpg", PNG, "image/jpeg")},
                    headers=auth(other))
    assert r.status_code == 403


def test_type_comes_from_extension_not_header(client, student):
    script = b"<svg xmlns='http://www.w3.org/2000/svg'><script>alert(1)</script></svg>"
    r = _upload(client, student[0], name="x.html", data=script, content_type="image/svg+xml")
    assert r.status_code == 400
    r = _upload(client, student[0], name="x.svg", data=script, content_type="image/svg+xml")
    assert r.status_code == 400

    # a known extension wins over whatever the client claims
    path = _upload(client, student[0], name="banner.png", content_type="text/html").json()["path"]
    r = client.get(f"/storage/media/{path}")
    assert r.headers["content-type"] == "image/png"
    assert r.headers["x-content-type-options"] == "nosniff"


def test_remove_avatar(client, student, make_user, storage):
    token, user = student
    client.post(f"/api/users/{user['id']}/avatar", files={"file": ("me.jpg", PNG, "image/jpeg")},
                headers=auth(token))

    other, _ = make_user("other@campus.io")
    assert client.delete(f"/api/users/{user['id']}/avatar", headers=auth(other)).status_code == 403

    r = client.delete(f"/api/users/{user['id']}/avatar", headers=auth(token))
    assert r.status_code == 200
    assert r.json()["avatar_url"] is None
    assert [key for key in storage.objects if key[0] == "avatars"] == []

    # nothing left to remove is fine
    assert client.delete(f"/api/users/{user['id']}/avatar", headers=auth(token)).status_code == 200


def test_avatar_upload_survives_failed_cleanup(client, student, storage, monkeypatch):
    token, user = student
    client.post(f"/api/users/{user['id']}/avatar", files={"file": ("me.jpg", PNG, "image/jpeg")},
                headers=auth(token))

    def refuse(bucket, paths):
        raise StorageError("Remove failed: connection reset")

    monkeypatch.setattr(storage, "remove", refuse)
    r = client.post(f"/api/users/{user['id']}/avatar", files={"file": ("new.png", PNG, "image/png")},
                    headers=auth(token))
    assert r.status_code == 200
    assert r.json()["avatar_url"].endswith(".png")
