from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from threading import RLock
from typing import Callable, Dict, Hashable, Iterable, List, Optional, TypeVar

from errors import SessionNotFound
from logic.board import Board
from models import Participant, PlayerBinding


logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_LIFETIME = 3600.0
DEFAULT_PERIOD = 3.0


@dataclass
class Session:
    key: Hashable
    board: Board
    binding: PlayerBinding = field(default_factory=PlayerBinding)
    created_at: float = field(default_factory=time.monotonic)
    participants: Dict[int, Participant] = field(default_factory=dict)
    started_at: Optional[float] = None
    trigger: Optional[str] = None

    def age(self, now: Optional[float] = None) -> float:
        return (time.monotonic() if now is None else now) - self.created_at


class SessionStore:
    """In-memory sessions of one game variant.

    Every read and write goes through a single lock.  Callers must not do
    network I/O while inside :meth:`with_session`; take what is needed for
    rendering out of the session and release the lock first.
    """

    def __init__(self, name: str = "", clock: Callable[[], float] = time.monotonic) -> None:
        self.name = name
        self.clock = clock
        self._lock = RLock()
        self._sessions: Dict[Hashable, Session] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._sessions

    def keys(self) -> List[Hashable]:
        with self._lock:
            return list(self._sessions)

    def get(self, key: Hashable) -> Optional[Session]:
        with self._lock:
            return self._sessions.get(key)

    def get_or_create(self, key: Hashable, factory: Callable[[], Board]) -> Session:
        with self._lock:
            session = self._sessions.get(key)
            if session is None:
                session = Session(key=key, board=factory(), created_at=self.clock())
                self._sessions[key] = session
                logger.info("Created %s session %s", self.name, key)
            return session

    def with_session(self, key: Hashable, fn: Callable[[Session], T]) -> T:
        with self._lock:
            session = self._sessions.get(key)
            if session is None:
                raise SessionNotFound(key)
            return fn(session)

    def remove(self, key: Hashable) -> Session:
        with self._lock:
            try:
                session = self._sessions.pop(key)
            except KeyError:
                raise SessionNotFound(key) from None
        logger.info("Removed %s session %s", self.name, key)
        return session

    def discard(self, key: Hashable) -> bool:
        with self._lock:
            found = self._sessions.pop(key, None) is not None
        if found:
            logger.info("Removed %s session %s", self.name, key)
        return found

    def collect_garbage(self, lifetime: float, now: Optional[float] = None) -> int:
        """Evict sessions that are at least ``lifetime`` seconds old."""
        if now is None:
            now = self.clock()
        with self._lock:
            expired = [
                key
                for key, session in self._sessions.items()
                if now - session.created_at >= lifetime
            ]
            for key in expired:
                del self._sessions[key]
        if expired:
            logger.info("Evicted %d expired %s session(s)", len(expired), self.name)
        return len(expired)


class GarbageCollector:
    """Periodically sweeps every store, bounding memory held by abandoned games."""

    def __init__(
        self,
        stores: Iterable[SessionStore],
        lifetime: float = DEFAULT_LIFETIME,
        period: float = DEFAULT_PERIOD,
    ) -> None:
        if lifetime <= 0 or period <= 0:
            raise ValueError("lifetime and period must be positive")
        self.stores = list(stores)
        self.lifetime = lifetime
        self.period = period
        self._task: Optional[asyncio.Task] = None

    def sweep(self, now: Optional[float] = None) -> int:
        return sum(store.collect_garbage(self.lifetime, now) for store in self.stores)

    async def run(self) -> None:
        logger.info(
            "Session collector running every %.1fs with lifetime %.0fs",
            self.period,
            self.lifetime,
        )
        while True:
            await asyncio.sleep(self.period)
            try:
                self.sweep()
            except Exception:
                logger.exception("Session sweep failed")

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        if not self.running:
            self._task = asyncio.get_running_loop().create_task(self.run())
        return self._task

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Session collector stopped")
