"""
Tests for the log formatters.
"""

import json
import logging
import uuid

from pipeline_tracker.core.logging_config import ContextTextFormatter, CustomJsonFormatter


def make_record(level=logging.INFO, **extra):
    record = logging.LogRecord(
        name="pipeline_tracker.test",
        level=level,
        pathname=__file__,
        lineno=42,
        msg="Moved candidate",
        args=(),
        exc_info=None,
        func="move_candidate",
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJsonFormatter:
    def test_context_fields_promoted(self):
        candidate_id = uuid.uuid4()
        formatter = CustomJsonFormatter('%(timestamp)s %(level)s %(logger)s %(message)s')

        data = json.loads(formatter.format(make_record(candidate_id=candidate_id)))

        assert data["message"] == "Moved candidate"
        assert data["level"] == "INFO"
        assert data["candidate_id"] == str(candidate_id)
        assert "line" not in data

    def test_warning_includes_location(self):
        formatter = CustomJsonFormatter('%(timestamp)s %(level)s %(message)s')

        data = json.loads(formatter.format(make_record(level=logging.WARNING)))

        assert data["line"] == 42


class TestTextFormatter:
    def test_appends_context(self):
        formatter = ContextTextFormatter('%(levelname)s %(message)s')

        line = formatter.format(make_record(organization_id="org-1", candidate_id="cand-1"))

        assert line == "INFO Moved candidate [organization_id=org-1 candidate_id=cand-1]"

    def test_plain_without_context(self):
        formatter = ContextTextFormatter('%(levelname)s %(message)s')

        assert formatter.format(make_record()) == "INFO Moved candidate"
