from __future__ import annotations

import logging
import threading
import time
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, List, Tuple

logger = logging.getLogger(__name__)

HIT = "hit"
MISS = "miss"
STORE = "store"
INVALIDATE = "invalidate"
FAILURE = "failure"

EVENTS: Tuple[str, ...] = (HIT, MISS, STORE, INVALIDATE, FAILURE)


@dataclass
class CacheEvent:
    event: str
    trace_tag: str
    handle_id: int
    shape: Tuple[int, int] | None
    version: int
    detail: str | None
    timestamp: float


def _shape(handle: Any) -> Tuple[int, int] | None:
    try:
        shape_attr = getattr(handle, "shape", None)
        if isinstance(shape_attr, tuple) and len(shape_attr) == 2:
            return int(shape_attr[0]), int(shape_attr[1])
    except Exception:
        pass
    return None


def _version(handle: Any) -> int:
    v = getattr(handle, "version", 0)
    try:
        return int(v() if callable(v) else v)
    except Exception:
        return 0


class CacheObservability:
    """Counts and records cache events so callers can tell hits from misses.

    Listeners registered with :meth:`subscribe` receive each event as a dict.
    A listener that raises is logged and skipped; it never breaks the cache
    operation that emitted the event.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counter = 0
        self._counts: Dict[str, int] = {name: 0 for name in EVENTS}
        self._last: dict[str, dict[str, Any]] = {}
        self._listeners: List[Callable[[dict[str, Any]], None]] = []

    def record(self, event: str, handle: Any, *, detail: str | None = None) -> dict[str, Any]:
        if event not in self._counts:
            raise ValueError(f"unknown cache event {event!r}; expected one of {EVENTS}")

        with self._lock:
            self._counter += 1
            self._counts[event] += 1
            record = CacheEvent(
                event=event,
                trace_tag=f"{event}:{self._counter}",
                handle_id=id(handle),
                shape=_shape(handle),
                version=_version(handle),
                detail=detail,
                timestamp=time.time(),
            )
            payload = asdict(record)
            self._last["__latest__"] = payload
            self._last[event] = payload
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener(dict(payload))
            except Exception:
                logger.exception("cache event listener %r failed", listener)
        return payload

    def subscribe(self, listener: Callable[[dict[str, Any]], None]) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                try:
                    self._listeners.remove(listener)
                except ValueError:
                    pass

        return _unsubscribe

    def counts(self) -> dict[str, int]:
        with self._lock:
            return dict(self._counts)

    def last(self, event: str | None = None) -> dict[str, Any] | None:
        key = event or "__latest__"
        with self._lock:
            payload = self._last.get(key)
        if payload is None:
            return None
        return dict(payload)

    def clear(self) -> None:
        with self._lock:
            self._last.clear()
            for name in self._counts:
                self._counts[name] = 0


# Module-level singleton helpers (optional convenience)
_default_observability = CacheObservability()


def default_instance() -> CacheObservability:
    return _default_observability
