"""Signed session tokens and the store holding each session's current game."""

import json
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, NamedTuple
from uuid import uuid4

import redis.asyncio as redis
from redis.exceptions import RedisError
from itsdangerous import URLSafeTimedSerializer, BadSignature

from config import config
from eights.logger import get_logger

logger = get_logger(__name__)


class Session(NamedTuple):
    """A session id and the token handed to the client for it."""

    id: str
    token: str


class SessionTokens:
    """
    Issue and verify client session tokens.

    The token is the session id signed with itsdangerous; the store only ever
    sees the bare id. Tokens older than ``max_age`` seconds stop verifying.
    """

    def __init__(self, secret_key: str | None = None, max_age: int | None = None) -> None:
        self._serializer = URLSafeTimedSerializer(
            secret_key or config.security.secret_key,
            salt="crazy-eights-session",
        )
        self.max_age = max_age or config.session_ttl

    def issue(self) -> Session:
        session_id = uuid4().hex
        return Session(session_id, self._serializer.dumps(session_id))

    def verify(self, token: str) -> str | None:
        """Return the session id inside ``token``, or None if it is forged or stale."""
        try:
            return self._serializer.loads(token, max_age=self.max_age)
        except BadSignature:  # SignatureExpired is a subclass
            return None


class SessionStore(ABC):
    """Where session data lives. Values are JSON documents with a TTL."""

    @abstractmethod
    async def load(self, session_id: str) -> dict[str, Any] | None:
        ...

    @abstractmethod
    async def save(self, session_id: str, data: dict[str, Any]) -> None:
        ...

    @abstractmethod
    async def drop(self, session_id: str) -> None:
        ...


class InMemorySessionStore(SessionStore):
    """
    Process-local store for development and tests.

    Documents are kept serialized, like in Redis, so callers never share
    mutable state with the store. Expired entries are purged on every write.
    """

    def __init__(self, ttl: int | None = None, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl = ttl or config.session_ttl
        self._clock = clock
        self._documents: dict[str, tuple[float, str]] = {}

    async def load(self, session_id: str) -> dict[str, Any] | None:
        entry = self._documents.get(session_id)
        if entry is None:
            return None
        expires_at, document = entry
        if expires_at <= self._clock():
            del self._documents[session_id]
            return None
        return json.loads(document)

    async def save(self, session_id: str, data: dict[str, Any]) -> None:
        now = self._clock()
        self._documents = {sid: e for sid, e in self._documents.items() if e[0] > now}
        self._documents[session_id] = (now + self.ttl, json.dumps(data))

    async def drop(self, session_id: str) -> None:
        self._documents.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._documents)


class RedisSessionStore(SessionStore):
    """Sessions as ``crazy-eights:session:<id>`` keys expiring after the TTL."""

    prefix = "crazy-eights:session:"

    def __init__(self, client: redis.Redis, ttl: int | None = None) -> None:
        self._redis = client
        self.ttl = ttl or config.session_ttl

    async def load(self, session_id: str) -> dict[str, Any] | None:
        document = await self._redis.get(self.prefix + session_id)
        return json.loads(document) if document is not None else None

    async def save(self, session_id: str, data: dict[str, Any]) -> None:
        await self._redis.setex(self.prefix + session_id, self.ttl, json.dumps(data))

    async def drop(self, session_id: str) -> None:
        await self._redis.delete(self.prefix + session_id)


_tokens: SessionTokens | None = None
_store: SessionStore | None = None


def get_session_tokens() -> SessionTokens:
    global _tokens
    if _tokens is None:
        _tokens = SessionTokens()
    return _tokens


async def get_session_store() -> SessionStore:
    """Return the shared store, connecting to Redis on first use."""
    global _store
    if _store is None:
        _store = await _connect()
    return _store


async def _connect() -> SessionStore:
    client = redis.from_url(config.redis.url)
    try:
        await client.ping()
    except (RedisError, OSError) as exc:
        logger.warning("Redis unavailable at %s (%s), using in-memory sessions", config.redis.url, exc)
        await client.aclose()
        return InMemorySessionStore()
    return RedisSessionStore(client)


def set_session_store(store: SessionStore | None) -> None:
    """Replace the shared store; None makes the next request reconnect."""
    global _store
    _store = store


async def open_session() -> Session:
    """Start an empty session and return its id and client token."""
    session = get_session_tokens().issue()
    store = await get_session_store()
    await store.save(session.id, {"created_at": int(time.time())})
    return session


def resolve_session(token: str | None) -> str | None:
    """Map a client token to its session id; None for a missing or bad token."""
    if not token:
        return None
    return get_session_tokens().verify(token)


async def close_session(session_id: str) -> None:
    store = await get_session_store()
    await store.drop(session_id)
