"""Shared pytest fixtures."""

import copy
from collections.abc import AsyncIterator
from types import SimpleNamespace
from typing import Any

import pytest
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from helpdesk.app import App
from helpdesk.config import Config
from helpdesk.core.modules.session.cookie import SessionCookie

TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"


class FakeCursor:
    """Subset of AsyncCursor: sort() and async iteration."""

    def __init__(self, docs: list[dict[str, Any]]) -> None:
        self._docs = docs

    def sort(self, key: str | list[tuple[str, int]], direction: int = 1) -> "FakeCursor":
        keys = key if isinstance(key, list) else [(key, direction)]
        for field, order in reversed(keys):
            self._docs.sort(key=lambda doc: doc[field], reverse=order < 0)
        return self

    def __aiter__(self) -> AsyncIterator[dict[str, Any]]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[dict[str, Any]]:
        for doc in self._docs:
            yield copy.deepcopy(doc)


class FakeCollection:
    """In-memory stand-in for the AsyncCollection methods the services call.

    Set `error` to an exception instance to make every operation raise it.
    """

    def __init__(self) -> None:
        self.docs: list[dict[str, Any]] = []
        self.unique_fields: list[tuple[str, ...]] = []
        self.error: Exception | None = None

    def _check(self) -> None:
        if self.error is not None:
            raise self.error

    @staticmethod
    def _matches(doc: dict[str, Any], query: dict[str, Any]) -> bool:
        return all(doc.get(key) == value for key, value in query.items())

    async def create_index(self, keys: list[tuple[str, int]], unique: bool = False, **_: Any) -> str:
        self._check()
        if unique:
            self.unique_fields.append(tuple(field for field, _ in keys))
        return "_".join(field for field, _ in keys)

    async def insert_one(self, doc: dict[str, Any]) -> SimpleNamespace:
        self._check()
        for fields in self.unique_fields:
            if any(all(existing.get(f) == doc.get(f) for f in fields) for existing in self.docs):
                raise DuplicateKeyError(f"E11000 duplicate key error on {fields}")
        self.docs.append(copy.deepcopy(doc))
        return SimpleNamespace(inserted_id=doc["_id"])

    async def find_one(self, query: dict[str, Any]) -> dict[str, Any] | None:
        self._check()
        doc = next((d for d in self.docs if self._matches(d, query)), None)
        return copy.deepcopy(doc) if doc else None

    def find(self, query: dict[str, Any] | None = None) -> FakeCursor:
        self._check()
        return FakeCursor([d for d in self.docs if self._matches(d, query or {})])

    async def find_one_and_update(
        self,
        query: dict[str, Any],
        update: dict[str, Any],
        upsert: bool = False,
        return_document: ReturnDocument = ReturnDocument.BEFORE,
    ) -> dict[str, Any] | None:
        self._check()
        doc = next((d for d in self.docs if self._matches(d, query)), None)
        before = copy.deepcopy(doc)
        if doc is None:
            if not upsert:
                return None
            doc = dict(query)
            self.docs.append(doc)
        for field, amount in update.get("$inc", {}).items():
            doc[field] = doc.get(field, 0) + amount
        return copy.deepcopy(doc) if return_document == ReturnDocument.AFTER else before


class FakeDatabase:
    def __init__(self) -> None:
        self.collections: dict[str, FakeCollection] = {}
        self.error: Exception | None = None

    def get_collection(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())

    async def command(self, name: str) -> dict[str, Any]:
        if self.error is not None:
            raise self.error
        return {"ok": 1.0}


class FakeMongoClient:
    """Replaces AsyncMongoClient; every client shares the database handed out by the fixture."""

    database = FakeDatabase()

    def __init__(self, *_: Any, **__: Any) -> None:
        pass

    def get_database(self, _: str) -> FakeDatabase:
        return self.database

    async def aclose(self) -> None:
        pass


class FakeCookieStore:
    """Cookie jar recording the attributes of every write."""

    def __init__(self, cookies: dict[str, str] | None = None) -> None:
        self.cookies = dict(cookies or {})
        self.attributes: dict[str, dict[str, Any]] = {}
        self.fail_on_set = False
        self.fail_on_delete = False

    def get(self, name: str) -> str | None:
        return self.cookies.get(name)

    def set(self, name: str, value: str, **attributes: Any) -> None:
        if self.fail_on_set:
            raise RuntimeError("cookie store is read-only")
        self.cookies[name] = value
        self.attributes[name] = attributes

    def delete(self, name: str, **attributes: Any) -> None:
        if self.fail_on_delete:
            raise RuntimeError("cookie store is read-only")
        self.cookies.pop(name, None)
        self.attributes[name] = {**attributes, "deleted": True}


@pytest.fixture
def database(monkeypatch):
    """Fresh in-memory database patched in place of MongoDB."""
    db = FakeDatabase()
    monkeypatch.setattr(FakeMongoClient, "database", db)
    monkeypatch.setattr("helpdesk.core.core.AsyncMongoClient", FakeMongoClient)
    return db


@pytest.fixture
def config():
    return Config(
        database_url="mongodb://localhost:27017/helpdesk_test",
        auth_secret=TEST_SECRET,
        environment="development",
        ticket_scope="user",
    )


@pytest.fixture
async def app(database, config):
    """Started application facade backed by the in-memory database."""
    application = App(config)
    async with application.lifespan():
        yield application


@pytest.fixture
def core(app):
    return app._core


@pytest.fixture
def cookie_store():
    return FakeCookieStore()


@pytest.fixture
def session_cookie(cookie_store):
    return SessionCookie(cookie_store, secure=False)


@pytest.fixture
def new_session_cookie():
    """Factory for additional independent browser sessions."""

    def factory() -> SessionCookie:
        return SessionCookie(FakeCookieStore(), secure=False)

    return factory
