"""Tests for request-scoped logging context."""

import contextvars
import json
import logging

from flowsim.core.logging import (
    RequestContextFilter,
    StructuredFormatter,
    get_logging_context,
    reset_logging_context,
    set_logging_context,
)


def make_record(message="hello"):
    return logging.LogRecord("flowsim.test", logging.INFO, __file__, 1, message, None, None)


class TestRequestContext:
    """Test cases for the context bound to log records."""

    def test_overlapping_requests_keep_their_own_ids(self):
        """Two interleaved requests each see their own request id."""
        context_filter = RequestContextFilter()
        request_a = contextvars.Context()
        request_b = contextvars.Context()

        request_a.run(set_logging_context, request_id="A")
        request_b.run(set_logging_context, request_id="B")

        record = make_record()
        request_a.run(context_filter.filter, record)

        assert record.request_id == "A"
        assert record.context == {"request_id": "A"}

    def test_reset_restores_previous_context(self):
        """Resetting one request does not clear fields bound outside it."""
        def run():
            outer = set_logging_context(service="flowsim")
            inner = set_logging_context(request_id="r1", path="/simulate")
            assert get_logging_context() == {"service": "flowsim", "request_id": "r1", "path": "/simulate"}

            reset_logging_context(inner)
            assert get_logging_context() == {"service": "flowsim"}

            reset_logging_context(outer)
            assert get_logging_context() == {}

        contextvars.Context().run(run)

    def test_record_without_context(self):
        """Records outside any request get a placeholder id."""
        record = make_record()
        contextvars.Context().run(RequestContextFilter().filter, record)

        assert record.request_id == "-"


class TestStructuredFormatter:
    """Test cases for JSON log lines."""

    def test_includes_context_and_extra_fields(self):
        record = make_record("Request started")

        def filter_in_request():
            set_logging_context(request_id="r9")
            RequestContextFilter().filter(record)

        contextvars.Context().run(filter_in_request)
        record.extra_fields = {"status": 200}

        entry = json.loads(StructuredFormatter().format(record))

        assert entry["message"] == "Request started"
        assert entry["request_id"] == "r9"
        assert entry["status"] == 200
        assert entry["level"] == "INFO"
