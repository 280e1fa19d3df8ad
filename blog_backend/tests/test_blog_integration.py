from __future__ import annotations

from flask import Flask
from flask.testing import FlaskClient
from sqlalchemy import delete, func, select

from blog_backend.infrastructure.container import Container
from blog_backend.infrastructure.db.models import User, UserSession
from blog_backend.tests.support import FakeClock, login, register


def test_register_login_post_lifecycle(app: Flask, client: FlaskClient) -> None:
    assert register(client, "alice", "a@x.com").status_code == 201
    assert register(client, "bob", "b@x.com").status_code == 201

    logged_in = login(client, "a@x.com")
    assert logged_in.status_code == 200
    assert client.get_cookie("blog_session") is not None

    created = client.post("/api/posts", json={"title": "Hello", "content": "World"})
    assert created.status_code == 201
    post_id = created.get_json()["postId"]

    listing = client.get("/api/posts").get_json()["posts"]
    assert len(listing) == 1
    assert listing[0]["id"] == post_id
    assert listing[0]["title"] == "Hello"
    assert listing[0]["author"]["username"] == "alice"
    assert "content" not in listing[0]

    bob = app.test_client()
    assert login(bob, "b@x.com").status_code == 200
    forbidden = bob.put(f"/api/posts/{post_id}", json={"title": "Hacked", "content": "x"})
    assert forbidden.status_code == 403
    assert forbidden.get_json()["error"] == "forbidden"

    assert client.delete(f"/api/posts/{post_id}").status_code == 200
    missing = client.get(f"/api/posts/{post_id}")
    assert missing.status_code == 404
    assert missing.get_json()["error"] == "post_not_found"


def test_detail_returns_content_verbatim(client: FlaskClient) -> None:
    content = "  Line one\n\tLine two ünïcødé 🚀\r\n  "
    register(client, "alice", "a@x.com")
    login(client, "a@x.com")

    post_id = client.post("/api/posts", json={"title": "T", "content": content}).get_json()[
        "postId"
    ]
    detail = client.get(f"/api/posts/{post_id}").get_json()["post"]

    assert detail["content"] == content
    assert detail["author"] == {"id": 1, "username": "alice"}
    assert set(detail) == {"id", "title", "content", "author", "created_at", "updated_at"}


def test_owner_can_update_post(client: FlaskClient) -> None:
    register(client, "alice", "a@x.com")
    login(client, "a@x.com")
    post_id = client.post("/api/posts", json={"title": "Hello", "content": "World"}).get_json()[
        "postId"
    ]

    updated = client.put(f"/api/posts/{post_id}", json={"title": "Hi", "content": "There"})
    assert updated.status_code == 200

    detail = client.get(f"/api/posts/{post_id}").get_json()["post"]
    assert (detail["title"], detail["content"]) == ("Hi", "There")


def test_owner_update_with_bad_payload_is_400(client: FlaskClient) -> None:
    register(client, "alice", "a@x.com")
    login(client, "a@x.com")
    post_id = client.post("/api/posts", json={"title": "Hello", "content": "World"}).get_json()[
        "postId"
    ]

    response = client.put(f"/api/posts/{post_id}", json={"title": "only title"})

    assert response.status_code == 400
    assert response.get_json()["error"] == "validation_error"


def test_non_owner_gets_403_regardless_of_payload(app: Flask, client: FlaskClient) -> None:
    register(client, "alice", "a@x.com")
    register(client, "bob", "b@x.com")
    login(client, "a@x.com")
    post_id = client.post("/api/posts", json={"title": "Hello", "content": "World"}).get_json()[
        "postId"
    ]

    bob = app.test_client()
    login(bob, "b@x.com")

    assert bob.put(f"/api/posts/{post_id}", json={}).status_code == 403
    assert bob.put(f"/api/posts/{post_id}", data="not json").status_code == 403
    assert bob.delete(f"/api/posts/{post_id}").status_code == 403

    detail = client.get(f"/api/posts/{post_id}").get_json()["post"]
    assert (detail["title"], detail["content"]) == ("Hello", "World")


def test_missing_post_is_404_for_any_caller(client: FlaskClient) -> None:
    register(client, "alice", "a@x.com")
    login(client, "a@x.com")

    assert client.put("/api/posts/999", json={}).status_code == 404
    assert client.delete("/api/posts/999").status_code == 404
    assert client.get("/api/posts/999").status_code == 404


def test_mutations_require_session(client: FlaskClient) -> None:
    create = client.post("/api/posts", json={"title": "Hello", "content": "World"})
    update = client.put("/api/posts/1", json={"title": "Hello", "content": "World"})
    delete = client.delete("/api/posts/1")

    for response in (create, update, delete):
        assert response.status_code == 401
        assert response.get_json()["error"] == "unauthenticated"

    client.set_cookie("blog_session", "forged-session-id")
    assert client.post("/api/posts", json={"title": "a", "content": "b"}).status_code == 401


def test_create_post_validates_payload(client: FlaskClient) -> None:
    register(client, "alice", "a@x.com")
    login(client, "a@x.com")

    response = client.post("/api/posts", json={"title": "", "content": "World"})

    assert response.status_code == 400
    assert client.get("/api/posts").get_json()["posts"] == []


def test_duplicate_registration_conflicts(client: FlaskClient) -> None:
    assert register(client, "alice", "a@x.com").status_code == 201

    duplicate = register(client, "alice2", "a@x.com")

    assert duplicate.status_code == 409
    assert duplicate.get_json()["error"] == "user_already_exists"


def test_password_is_stored_hashed(client: FlaskClient, container: Container) -> None:
    register(client, "alice", "a@x.com")

    with container.session_factory() as session:
        stored = session.scalars(select(User.password_hash)).one()

    assert stored != "secret1"
    assert stored.startswith("pbkdf2:sha256:1000$")


def test_wrong_password_is_rejected(client: FlaskClient) -> None:
    register(client, "alice", "a@x.com")

    response = login(client, "a@x.com", "wrong-password")

    assert response.status_code == 401
    assert client.get_cookie("blog_session") is None


def test_me_and_logout(client: FlaskClient, container: Container) -> None:
    register(client, "alice", "a@x.com")
    login(client, "a@x.com")

    me = client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.get_json()["user"]["email"] == "a@x.com"

    assert client.post("/api/auth/logout").status_code == 200
    assert client.get_cookie("blog_session") is None
    with container.session_factory() as session:
        assert session.scalar(select(func.count()).select_from(UserSession)) == 0

    assert client.get("/api/auth/me").status_code == 401


def test_logout_does_not_invalidate_other_sessions(app: Flask, client: FlaskClient) -> None:
    register(client, "alice", "a@x.com")
    login(client, "a@x.com")
    laptop = app.test_client()
    login(laptop, "a@x.com")

    client.post("/api/auth/logout")

    assert laptop.get("/api/auth/me").status_code == 200


def test_session_expires_after_lifetime(client: FlaskClient, clock: FakeClock) -> None:
    register(client, "alice", "a@x.com")
    login(client, "a@x.com")
    assert client.get("/api/auth/me").status_code == 200

    clock.advance(hours=24, seconds=1)

    assert client.get("/api/auth/me").status_code == 401


def test_health_and_unknown_route(client: FlaskClient) -> None:
    health = client.get("/health")
    assert health.status_code == 200
    assert health.get_json()["status"] == "OK"
    assert health.get_json()["database"] == "ok"

    unknown = client.get("/api/nope")
    assert unknown.status_code == 404
    assert unknown.get_json()["error"] == "not_found"


def test_responses_carry_request_id_and_security_headers(client: FlaskClient) -> None:
    response = client.get("/api/posts", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"
    assert response.headers["X-Content-Type-Options"] == "nosniff"


def test_me_reports_deleted_user(client: FlaskClient, container: Container) -> None:
    register(client, "alice", "a@x.com")
    login(client, "a@x.com")

    with container.session_factory() as session:
        session.execute(delete(User))
        session.commit()

    response = client.get("/api/auth/me")

    assert response.status_code == 404
    assert response.get_json()["error"] == "user_not_found"
    assert client.post("/api/posts", json={"title": "a", "content": "b"}).status_code == 404
