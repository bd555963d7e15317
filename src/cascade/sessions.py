"""Per-conversation state for multi-step guided commands."""

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field

import structlog

logger = structlog.get_logger()

SESSION_TIMEOUT_SECONDS = 600

SessionKey = tuple[str, str]


@dataclass
class Session:
    command: str
    step: int = 1
    data: dict = field(default_factory=dict)
    started_at: float = field(default_factory=time.time)


class SessionManager:
    """At most one session per (sender, conversation).

    Expiry, completion and cancellation all go through ``_pop`` under the
    same lock, so the background sweep and the message handler can never
    both act on one session.
    """

    def __init__(
        self,
        timeout: float = SESSION_TIMEOUT_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self.timeout = timeout
        self.clock = clock
        self._sessions: dict[SessionKey, Session] = {}
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._sweeper: threading.Thread | None = None

    def _expired(self, session: Session, now: float) -> bool:
        return now - session.started_at > self.timeout

    def _pop(self, key: SessionKey) -> Session | None:
        return self._sessions.pop(key, None)

    def start(self, key: SessionKey, command: str) -> Session | None:
        """Open a session; None if one is already active for this key."""
        now = self.clock()
        with self._lock:
            current = self._sessions.get(key)
            if current and not self._expired(current, now):
                return None
            session = Session(command=command, started_at=now)
            self._sessions[key] = session
        logger.info("session_started", command=command)
        return session

    def get(self, key: SessionKey) -> Session | None:
        now = self.clock()
        with self._lock:
            session = self._sessions.get(key)
            if session and self._expired(session, now):
                self._pop(key)
                logger.info("session_expired", command=session.command)
                return None
            return session

    def end(self, key: SessionKey) -> Session | None:
        with self._lock:
            return self._pop(key)

    def sweep(self) -> int:
        """Drop every expired session. Returns how many were removed."""
        now = self.clock()
        with self._lock:
            expired = [k for k, s in self._sessions.items() if self._expired(s, now)]
            for key in expired:
                self._pop(key)
        if expired:
            logger.info("sessions_swept", removed=len(expired))
        return len(expired)

    def __len__(self) -> int:
        return len(self._sessions)

    def start_sweeper(self, interval: float = 60.0) -> None:
        if self._sweeper and self._sweeper.is_alive():
            return
        self._stop.clear()

        def _run():
            while not self._stop.wait(interval):
                try:
                    self.sweep()
                except Exception as e:
                    logger.error("session_sweep_failed", error=str(e))

        self._sweeper = threading.Thread(target=_run, name="session-sweeper", daemon=True)
        self._sweeper.start()

    def stop_sweeper(self) -> None:
        self._stop.set()
        if self._sweeper:
            self._sweeper.join(timeout=1.0)
            self._sweeper = None
