"""
Background playback for the web API.

One Player owns one Chirpmaker and therefore one output line. A
non-blocking lock keeps at most one pulse sequence in flight on that
line; a request arriving while a job plays is refused, not queued.
"""
from __future__ import annotations

import threading
import time
from typing import Any, Callable, Dict, Optional

from flask import current_app

from chirpmaker.birds.dispatcher import Chirpmaker
from chirpmaker.errors import ChirpmakerError
from chirpmaker.util.logging import get_logger, log_exception

logger = get_logger(__name__)


class PlayerBusyError(ChirpmakerError):
    """The output line is already playing a job."""


class Player:
    def __init__(self, maker: Chirpmaker) -> None:
        self.maker = maker
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self.current_job: Optional[str] = None
        self.last_job: Optional[Dict[str, Any]] = None
        self.last_error: Optional[str] = None
        self.jobs_played = 0

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    def submit(self, name: str, job: Callable[[], Any]) -> None:
        """Start ``job`` on a worker thread, or raise PlayerBusyError."""
        if not self._lock.acquire(blocking=False):
            raise PlayerBusyError(f"output busy playing {self.current_job}")
        self.current_job = name
        thread = threading.Thread(target=self._run, args=(name, job), name=f"player-{name}", daemon=True)
        self._thread = thread
        try:
            thread.start()
        except RuntimeError:
            self.current_job = None
            self._lock.release()
            raise

    def _run(self, name: str, job: Callable[[], Any]) -> None:
        started = time.perf_counter()
        ok = False
        try:
            job()
            ok = True
            self.last_error = None
        except Exception as exc:
            self.last_error = f"{type(exc).__name__}: {exc}"
            log_exception(logger, f"Job {name} failed", error_type="playback")
        finally:
            duration_ms = (time.perf_counter() - started) * 1000
            self.last_job = {"name": name, "ok": ok, "duration_ms": round(duration_ms, 1)}
            self.jobs_played += 1
            self.current_job = None
            self._lock.release()
            logger.info("Job %s finished", name, extra={"duration_ms": round(duration_ms, 1)})

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Join the current worker; True when nothing is left playing."""
        thread = self._thread
        if thread is not None:
            thread.join(timeout)
        return not self.busy

    def status(self) -> Dict[str, Any]:
        return {
            "busy": self.busy,
            "current_job": self.current_job,
            "last_job": self.last_job,
            "last_error": self.last_error,
            "jobs_played": self.jobs_played,
        }


def get_player() -> Player:
    """Return the Player attached to the current app."""
    return current_app._player  # type: ignore[attr-defined]
