from __future__ import annotations

import threading
from datetime import timedelta

import pytest
from sqlalchemy import delete, select

from blog_backend.domain.users.entities import AuthenticatedIdentity
from blog_backend.domain.users.exceptions import UserAlreadyExistsError, UserNotFoundError
from blog_backend.infrastructure.container import Container
from blog_backend.infrastructure.db.models import User, UserSession
from blog_backend.tests.support import FakeClock


def test_add_user_returns_generated_id(container: Container) -> None:
    users = container.user_repository

    user = users.add(username="alice", email="a@x.com", password_hash="h")

    assert user.id > 0
    assert user.created_at.tzinfo is not None
    assert users.find_by_id(user.id) == AuthenticatedIdentity(
        user_id=user.id, username="alice", email="a@x.com"
    )
    assert users.find_by_id(user.id + 1) is None
    assert users.find_by_email("a@x.com") == user
    assert users.find_by_email("A@x.com") is None


@pytest.mark.parametrize(
    ("username", "email"),
    [("alice", "other@x.com"), ("someone", "a@x.com")],
)
def test_unique_constraints(container: Container, username: str, email: str) -> None:
    users = container.user_repository
    users.add(username="alice", email="a@x.com", password_hash="h")

    with pytest.raises(UserAlreadyExistsError):
        users.add(username=username, email=email, password_hash="h")


def test_concurrent_registration_has_single_winner(container: Container) -> None:
    register = container.register_user_use_case
    barrier = threading.Barrier(4)
    outcomes: list[str] = []
    lock = threading.Lock()

    def worker(n: int) -> None:
        barrier.wait()
        try:
            register.execute(f"alice{n}", "a@x.com", "secret1")
            result = "ok"
        except UserAlreadyExistsError:
            result = "conflict"
        with lock:
            outcomes.append(result)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=30)

    assert sorted(outcomes) == ["conflict", "conflict", "conflict", "ok"]


def test_session_roundtrip_and_revoke(container: Container) -> None:
    user = container.user_repository.add(username="alice", email="a@x.com", password_hash="h")
    sessions = container.session_repository

    issued = sessions.issue(user.id)

    assert sessions.resolve(issued.token) == user.id
    assert sessions.resolve("forged") is None
    sessions.revoke(issued.token)
    assert sessions.resolve(issued.token) is None


def test_session_id_is_not_stored_in_clear(container: Container) -> None:
    user = container.user_repository.add(username="alice", email="a@x.com", password_hash="h")
    issued = container.session_repository.issue(user.id)

    with container.session_factory() as session:
        digests = session.scalars(select(UserSession.token_digest)).all()

    assert len(digests) == 1
    assert digests[0] != issued.token
    assert len(digests[0]) == 64


def test_session_expires(container: Container, clock: FakeClock) -> None:
    user = container.user_repository.add(username="alice", email="a@x.com", password_hash="h")
    sessions = container.session_repository
    issued = sessions.issue(user.id)

    clock.advance(hours=23, minutes=59)
    assert sessions.resolve(issued.token) == user.id

    clock.advance(minutes=2)
    assert sessions.resolve(issued.token) is None


def test_purge_expired_keeps_live_sessions(container: Container, clock: FakeClock) -> None:
    user = container.user_repository.add(username="alice", email="a@x.com", password_hash="h")
    sessions = container.session_repository
    stale = sessions.issue(user.id)
    clock.advance(hours=12)
    fresh = sessions.issue(user.id)
    clock.advance(hours=13)

    assert sessions.purge_expired() == 1
    assert sessions.resolve(stale.token) is None
    assert sessions.resolve(fresh.token) == user.id


def test_post_requires_existing_author(container: Container) -> None:
    with pytest.raises(UserNotFoundError):
        container.post_repository.add(title="Hello", content="World", author_id=404)


def test_post_listing_is_newest_first_without_content(container: Container) -> None:
    alice = container.user_repository.add(username="alice", email="a@x.com", password_hash="h")
    posts = container.post_repository
    first = posts.add(title="first", content="one", author_id=alice.id)
    second = posts.add(title="second", content="two", author_id=alice.id)

    summaries = posts.list_summaries()

    assert [s.id for s in summaries] == [second, first]
    assert summaries[0].author.username == "alice"
    assert not hasattr(summaries[0], "content")


def test_post_update_and_delete(container: Container, clock: FakeClock) -> None:
    alice = container.user_repository.add(username="alice", email="a@x.com", password_hash="h")
    posts = container.post_repository
    post_id = posts.add(title="Hello", content="World", author_id=alice.id)
    before = posts.find_by_id(post_id)
    assert before is not None

    clock.advance(minutes=5)
    assert posts.update(post_id, title="Hi", content="There") is True
    after = posts.find_by_id(post_id)
    assert after is not None
    assert (after.title, after.content) == ("Hi", "There")
    assert after.updated_at > before.updated_at
    assert after.updated_at == clock.now
    assert after.created_at == before.created_at
    assert posts.find_author_id(post_id) == alice.id

    assert posts.delete(post_id) is True
    assert posts.find_by_id(post_id) is None
    assert posts.update(post_id, title="x", content="y") is False
    assert posts.delete(post_id) is False


def test_post_timestamps_follow_clock(container: Container, clock: FakeClock) -> None:
    alice = container.user_repository.add(username="alice", email="a@x.com", password_hash="h")
    posts = container.post_repository
    created_at = clock.now
    post_id = posts.add(title="Hello", content="World", author_id=alice.id)

    for step in range(1, 3):
        clock.advance(hours=1)
        posts.update(post_id, title=f"Hello v{step}", content="World")

    post = posts.find_by_id(post_id)
    assert post is not None
    assert post.created_at == created_at
    assert post.updated_at == created_at + timedelta(hours=2)


def test_session_outlives_deleted_user(container: Container) -> None:
    alice = container.user_repository.add(username="alice", email="a@x.com", password_hash="h")
    issued = container.session_repository.issue(alice.id)

    with container.session_factory() as session:
        session.execute(delete(User).where(User.id == alice.id))
        session.commit()

    assert container.session_repository.resolve(issued.token) == alice.id
    assert container.user_repository.find_by_id(alice.id) is None
