"""JSON log formatter — ledger identifiers surface as top-level fields."""

import json
import logging

from payouts.infrastructure.observability import JSONFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "payouts.test", logging.INFO, __file__, 1, "hello %s", ("world",), None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formats_base_fields():
    data = json.loads(JSONFormatter().format(_record()))
    assert data["level"] == "INFO"
    assert data["logger"] == "payouts.test"
    assert data["message"] == "hello world"
    assert "timestamp" in data


def test_includes_ledger_extras_when_present():
    data = json.loads(JSONFormatter().format(
        _record(restaurant_id="r-1", withdrawal_request_id="w-1", amount=12.5),
    ))
    assert data["restaurant_id"] == "r-1"
    assert data["withdrawal_request_id"] == "w-1"
    assert data["amount"] == 12.5
    assert "admin_id" not in data


def test_unknown_extras_are_not_emitted():
    data = json.loads(JSONFormatter().format(_record(something_else="x")))
    assert "something_else" not in data
