from __future__ import annotations

import secrets
import time
from collections import OrderedDict, deque
from dataclasses import dataclass, field
from threading import Lock


@dataclass(slots=True)
class SlidingWindowRateLimiter:
    """In-memory sliding window limiter used to throttle login attempts.

    Allows up to `limit` events per key within `window_s`. The least recently
    used keys are evicted once `max_keys` is reached.
    """

    limit: int
    window_s: float
    max_keys: int = 4096
    _events: "OrderedDict[str, deque[float]]" = field(default_factory=OrderedDict)
    _lock: Lock = field(default_factory=Lock)

    def allow(self, key: str, now: float | None = None) -> bool:
        key = key or "unknown"
        if now is None:
            now = time.time()
        cutoff = now - self.window_s
        with self._lock:
            q = self._events.get(key)
            if q is None:
                while self.max_keys > 0 and len(self._events) >= self.max_keys:
                    self._events.popitem(last=False)
                q = deque()
                self._events[key] = q
            else:
                self._events.move_to_end(key)
            while q and q[0] <= cutoff:
                q.popleft()
            if len(q) >= self.limit:
                return False
            q.append(now)
            return True

    def reset(self, key: str) -> None:
        with self._lock:
            self._events.pop(key or "unknown", None)


@dataclass(slots=True)
class SessionStore:
    """Session tokens held in memory only; a restart logs everyone out."""

    ttl_s: float
    _sessions: dict[str, float] = field(default_factory=dict)
    _lock: Lock = field(default_factory=Lock)

    def create(self, now: float | None = None) -> str:
        if now is None:
            now = time.time()
        token = secrets.token_hex(32)
        with self._lock:
            self._purge(now)
            self._sessions[token] = now + self.ttl_s
        return token

    def is_valid(self, token: str | None, now: float | None = None) -> bool:
        if not token:
            return False
        if now is None:
            now = time.time()
        with self._lock:
            expires = self._sessions.get(token)
            if expires is None:
                return False
            if expires <= now:
                del self._sessions[token]
                return False
            return True

    def revoke(self, token: str | None) -> bool:
        if not token:
            return False
        with self._lock:
            return self._sessions.pop(token, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def _purge(self, now: float) -> None:
        for token in [t for t, exp in self._sessions.items() if exp <= now]:
            del self._sessions[token]


def check_password(candidate: str | None, expected: str) -> bool:
    if not candidate or not expected:
        return False
    return secrets.compare_digest(candidate.encode("utf-8"), expected.encode("utf-8"))
