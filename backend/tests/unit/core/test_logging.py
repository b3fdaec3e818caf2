"""Unit tests for the contextual logger and JSON formatter."""

import json
import logging

from finshare.core.logging import ContextualLogger, build_formatter


class _ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record):
        self.records.append(record)


def _make_logger(name: str) -> tuple[ContextualLogger, _ListHandler]:
    base = logging.getLogger(name)
    base.handlers.clear()
    base.propagate = False
    base.setLevel(logging.DEBUG)
    handler = _ListHandler()
    base.addHandler(handler)
    return ContextualLogger(base), handler


class TestContextualLogger:
    def test_with_context_stacks_dimensions(self):
        log, handler = _make_logger("finshare.test.stack")

        child = log.with_context(owner_id=1).with_context(requester_id=2)
        child.info("hello")

        record = handler.records[0]
        assert record.owner_id == 1
        assert record.requester_id == 2

    def test_parent_is_unchanged(self):
        log, handler = _make_logger("finshare.test.parent")

        log.with_context(owner_id=1)
        log.info("plain")

        assert not hasattr(handler.records[0], "owner_id")

    def test_per_call_extra_wins(self):
        log, handler = _make_logger("finshare.test.extra")

        log.with_context(owner_id=1).info("x", extra={"owner_id": 9, "record_id": 5})

        record = handler.records[0]
        assert (record.owner_id, record.record_id) == (9, 5)


class TestBuildFormatter:
    def test_json_output_carries_dimensions(self):
        log, handler = _make_logger("finshare.test.json")
        log.with_context(owner_id=1).warning("bad scope")

        payload = json.loads(build_formatter(json_output=True).format(handler.records[0]))

        assert payload["level"] == "warning"
        assert payload["event"] == "bad scope"
        assert payload["logger"] == "finshare.test.json"
        assert payload["owner_id"] == 1
        assert "timestamp" in payload

    def test_console_output_appends_dimensions(self):
        log, handler = _make_logger("finshare.test.console")
        log.with_context(requester_id=2).info("loaded grant")

        line = build_formatter(json_output=False).format(handler.records[0])

        assert "loaded grant" in line
        assert "requester_id=2" in line
