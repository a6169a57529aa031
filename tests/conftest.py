import asyncio
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from auth import security
from comments import repository as comments_repository
from core import db
from core.errors import ReferenceViolation
from main import app
from posts import repository as posts_repository

TEACHER_ID = 1
STUDENT_ID = 2


class FakeStore:
    """In-memory stand-in for the posts/comments tables."""

    def __init__(self):
        self.posts = {}
        self.comments = []
        self._next_post_id = 1
        self._next_comment_id = 1

    async def insert_post(self, *, teacher_id, title, content):
        await asyncio.sleep(0)
        row = {
            "id": self._next_post_id,
            "teacher_id": teacher_id,
            "title": title,
            "content": content,
            "timestamp": datetime.now(timezone.utc),
        }
        self._next_post_id += 1
        self.posts[row["id"]] = row
        return dict(row)

    async def get_post(self, post_id):
        row = self.posts.get(post_id)
        return dict(row) if row is not None else None

    async def list_posts(self):
        return [dict(row) for row in sorted(self.posts.values(), key=lambda r: (r["timestamp"], r["id"]))]

    async def insert_comment(self, *, post_id, student_id, content, sentiment):
        await asyncio.sleep(0)
        if post_id not in self.posts:
            raise ReferenceViolation("violates foreign key constraint comments_post_id_fkey")
        row = {
            "id": self._next_comment_id,
            "post_id": post_id,
            "student_id": student_id,
            "content": content,
            "timestamp": datetime.now(timezone.utc),
            "sentiment": sentiment,
        }
        self._next_comment_id += 1
        self.comments.append(row)
        return dict(row)

    async def list_comments_for_post(self, post_id):
        return [dict(row) for row in self.comments if row["post_id"] == post_id]


@pytest.fixture
def store(monkeypatch):
    fake = FakeStore()
    monkeypatch.setattr(posts_repository, "insert_post", fake.insert_post)
    monkeypatch.setattr(posts_repository, "get_post", fake.get_post)
    monkeypatch.setattr(posts_repository, "list_posts", fake.list_posts)
    monkeypatch.setattr(comments_repository, "insert_comment", fake.insert_comment)
    monkeypatch.setattr(comments_repository, "list_comments_for_post", fake.list_comments_for_post)
    return fake


@pytest.fixture
def client(store):
    # No context manager: the lifespan (pool + schema bootstrap) is not run.
    return TestClient(app)


def _auth_headers(actor_id):
    return {"Authorization": f"Bearer {security.build_access_token(actor_id=actor_id)}"}


@pytest.fixture
def teacher_headers():
    return _auth_headers(TEACHER_ID)


@pytest.fixture
def student_headers():
    return _auth_headers(STUDENT_ID)


@pytest.fixture
def post_id(client, teacher_headers):
    resp = client.post(
        "/api/posts",
        json={"title": "Week 1", "content": "Read chapter one."},
        headers=teacher_headers,
    )
    assert resp.status_code == 201
    return resp.json()["postId"]


class FakeConnection:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    async def _run(self, name, sql, args, timeout):
        self.calls.append((name, sql, args, timeout))
        if self.error is not None:
            raise self.error
        return self.result

    async def fetchrow(self, sql, *args, timeout=None):
        return await self._run("fetchrow", sql, args, timeout)

    async def fetch(self, sql, *args, timeout=None):
        return await self._run("fetch", sql, args, timeout)

    async def fetchval(self, sql, *args, timeout=None):
        return await self._run("fetchval", sql, args, timeout)

    async def execute(self, sql, *args, timeout=None):
        return await self._run("execute", sql, args, timeout)


class FakePool:
    def __init__(self, conn):
        self.conn = conn
        self.acquired = 0
        self.released = 0
        self.acquire_timeouts = []

    def acquire(self, timeout=None):
        self.acquire_timeouts.append(timeout)
        return _Acquire(self)


class _Acquire:
    def __init__(self, pool):
        self.pool = pool

    async def __aenter__(self):
        self.pool.acquired += 1
        return self.pool.conn

    async def __aexit__(self, *exc_info):
        self.pool.released += 1
        return False


@pytest.fixture
def use_pool(monkeypatch):
    def install(conn):
        fake = FakePool(conn)
        monkeypatch.setattr(db, "_pool", fake)
        return fake

    return install
