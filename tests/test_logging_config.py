import json
import logging

from qa_pricing.logging_config import StructuredFormatter, get_trace_id, set_trace_id


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("qa_pricing.calculator", logging.INFO, __file__, 10, "Calculated %s", ("quote",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_structured_formatter_emits_json_with_extra_fields():
    set_trace_id(None)
    formatted = json.loads(StructuredFormatter(service="pricing-api").format(make_record(final_hours=171.85)))

    assert formatted["message"] == "Calculated quote"
    assert formatted["severity"] == "INFO"
    assert formatted["service"] == "pricing-api"
    assert formatted["logger"] == "qa_pricing.calculator"
    assert formatted["final_hours"] == 171.85
    assert "logging.googleapis.com/trace" not in formatted


def test_trace_id_is_attached_when_set():
    set_trace_id("abc123/1;o=1")
    try:
        formatted = json.loads(StructuredFormatter().format(make_record()))
        assert get_trace_id() == "abc123/1;o=1"
        assert formatted["logging.googleapis.com/trace"] == "abc123/1;o=1"
    finally:
        set_trace_id(None)
