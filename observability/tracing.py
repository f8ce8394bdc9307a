"""Span helper timing remote calls onto a session timeline."""
from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator

from .logger import log_event


@contextmanager
def span(state, name: str) -> Iterator[Dict[str, Any]]:
    """Time the enclosed block and append the entry to ``state.events``.

    The yielded dict may be annotated by the caller; a raised exception marks
    the entry ``ok=False`` and is re-raised.
    """

    entry: Dict[str, Any] = {"span": name, "ms": 0, "ok": True}
    start = time.perf_counter()
    try:
        yield entry
    except Exception:
        entry["ok"] = False
        raise
    finally:
        entry["ms"] = int((time.perf_counter() - start) * 1000)
        state.events.append(entry)
        log_event("span", state.session_id, **entry)


__all__ = ["span"]
