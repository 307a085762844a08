"""
In-memory fixed-window rate limiting for the generative suggestion sources.

Advisory only: state lives in process memory and is lost on restart. Denied
callers still receive gazetteer results.
"""
from dataclasses import dataclass
from typing import Dict, Mapping, Optional
import logging
import threading
import time

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT = "unknown"


@dataclass
class RateLimitRecord:
    count: int
    reset_at: float


class RateLimiter:
    """Per-client request counter over a fixed window."""

    def __init__(self, max_requests: int, window_seconds: float = 60.0, name: str = "default"):
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.name = name
        self._records: Dict[str, RateLimitRecord] = {}
        self._lock = threading.Lock()

    def admit(self, client_key: str, now: Optional[float] = None) -> bool:
        """
        Count a request for ``client_key`` and return whether it is allowed.

        Starts a fresh window when none exists or the previous one expired.
        A denied request is not counted.
        """
        if now is None:
            now = time.monotonic()

        with self._lock:
            record = self._records.get(client_key)

            if record is None or now >= record.reset_at:
                self._records[client_key] = RateLimitRecord(
                    count=1, reset_at=now + self.window_seconds
                )
                return True

            if record.count >= self.max_requests:
                logger.info(f"Rate limit '{self.name}' exceeded for client {client_key}")
                return False

            record.count += 1
            return True

    def remaining(self, client_key: str, now: Optional[float] = None) -> int:
        if now is None:
            now = time.monotonic()
        with self._lock:
            record = self._records.get(client_key)
            if record is None or now >= record.reset_at:
                return self.max_requests
            return max(0, self.max_requests - record.count)

    def reset(self):
        with self._lock:
            self._records.clear()


def resolve_client_key(headers: Mapping[str, str], client_host: Optional[str] = None) -> str:
    """Best-effort client identity; not a security boundary."""
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    real_ip = (headers.get("x-real-ip") or "").strip()
    if real_ip:
        return real_ip

    return client_host or UNKNOWN_CLIENT
