import logging
from types import SimpleNamespace

import pytest

from observability import log_event, span
from observability.logger import _ChannelFilter, _format_human


def _state():
    return SimpleNamespace(session_id="s-1", events=[])


def test_span_records_successful_call():
    state = _state()
    with span(state, "evaluate_answer") as entry:
        entry["score"] = 81
    assert len(state.events) == 1
    recorded = state.events[0]
    assert recorded["span"] == "evaluate_answer"
    assert recorded["ok"] is True
    assert recorded["score"] == 81
    assert recorded["ms"] >= 0


def test_span_marks_failures_and_reraises():
    state = _state()
    with pytest.raises(RuntimeError):
        with span(state, "generate_follow_up"):
            raise RuntimeError("boom")
    assert state.events[0]["ok"] is False


def test_human_format_keeps_known_keys_only():
    line = _format_human({"session_id": "s-1", "kind": "answer_evaluated", "score": 70, "secret": "x"})
    assert line == "session=s-1 kind=answer_evaluated score=70"


def test_channel_filter_routes_records():
    line_only = _ChannelFilter("line")
    json_only = _ChannelFilter("json")
    plain = logging.LogRecord("interview.events", logging.INFO, "", 0, "msg", (), None)
    tagged = logging.LogRecord("interview.events", logging.INFO, "", 0, "{}", (), None)
    tagged.channel = "json"
    assert line_only.filter(plain) and not json_only.filter(plain)
    assert json_only.filter(tagged) and not line_only.filter(tagged)


def test_log_event_accepts_arbitrary_fields():
    log_event("questions_loaded", "s-1", source="default", count=5, extra={"nested": True})
