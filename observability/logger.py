"""Session event log.

Every event is rendered once as a short ``key=value`` line on stdout. With
``ENABLE_FILE_LOGS`` set, the same event is also kept on disk twice: the full
payload as one JSON object per line, and the short line in a sibling
``-human.log`` file. Both files rotate by size.
"""
from __future__ import annotations

import json
import logging
import logging.handlers
import os
import sys
import time
import uuid
from pathlib import Path
from typing import Any, Dict, Tuple

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
ENABLE_FILE_LOGS = os.getenv("ENABLE_FILE_LOGS", "0").lower() in ("1", "true", "yes")
LOG_FILE = os.getenv("LOG_FILE", "logs/interview.log")
LOG_MAX_BYTES = int(os.getenv("LOG_MAX_BYTES", str(5 * 1024 * 1024)))
LOG_BACKUP_COUNT = int(os.getenv("LOG_BACKUP_COUNT", "5"))

LINE_FORMAT = "[%(asctime)s] %(levelname)s %(name)s :: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Fields worth showing on the one-line rendering, in display order.
SUMMARY_KEYS: Tuple[str, ...] = (
    "span",
    "phase",
    "question_id",
    "index",
    "score",
    "source",
    "answered",
    "average",
    "ms",
    "ok",
    "cause",
)

_events = logging.getLogger("interview.events")
_events.setLevel(LOG_LEVEL)
_events.propagate = False


class _ChannelFilter(logging.Filter):  # Route records by their ``channel`` attribute
    def __init__(self, channel: str) -> None:
        super().__init__()
        self.channel = channel

    def filter(self, record: logging.LogRecord) -> bool:
        return getattr(record, "channel", "line") == self.channel


def _attach(handler: logging.Handler, channel: str, fmt: logging.Formatter) -> None:
    handler.setLevel(LOG_LEVEL)
    handler.setFormatter(fmt)
    handler.addFilter(_ChannelFilter(channel))
    _events.addHandler(handler)


def _rotating(path: Path) -> logging.Handler:
    return logging.handlers.RotatingFileHandler(path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT)


def _configure() -> None:
    if _events.handlers:
        return
    line_fmt = logging.Formatter(LINE_FORMAT, datefmt=DATE_FORMAT)
    _attach(logging.StreamHandler(stream=sys.stdout), "line", line_fmt)
    if not ENABLE_FILE_LOGS:
        return
    json_path = Path(LOG_FILE)
    json_path.parent.mkdir(parents=True, exist_ok=True)
    _attach(_rotating(json_path), "json", logging.Formatter("%(message)s"))
    _attach(_rotating(json_path.with_name(f"{json_path.stem}-human.log")), "line", line_fmt)


def _format_human(evt: Dict[str, Any]) -> str:
    parts = [f"session={evt.get('session_id')}", f"kind={evt.get('kind')}"]
    parts.extend(f"{key}={evt[key]}" for key in SUMMARY_KEYS if key in evt)
    return " ".join(parts)


def _emit(channel: str, message: str) -> None:
    _events.info(message, extra={"channel": channel})


def log_event(kind: str, session_id: str, **fields: Any) -> None:
    """Record one session event; ``fields`` are kept verbatim in the JSON file."""

    _configure()
    evt: Dict[str, Any] = {
        "ts": time.time(),
        "trace": uuid.uuid4().hex,
        "kind": kind,
        "session_id": session_id,
        **fields,
    }
    _emit("line", _format_human(evt))
    if ENABLE_FILE_LOGS:
        _emit("json", json.dumps(evt, ensure_ascii=False, default=str))


__all__ = ["log_event"]
