"""Observability — JSON log shape and idempotent setup."""

import json
import logging

from catalog_api.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "catalog_api.test", logging.INFO, __file__, 1, "Product created: %s", ("widget",), None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_emits_base_fields():
    line = json.loads(JSONFormatter().format(_record()))
    assert line["level"] == "INFO"
    assert line["logger"] == "catalog_api.test"
    assert line["message"] == "Product created: widget"
    assert "timestamp" in line


def test_formatter_surfaces_only_set_extras():
    line = json.loads(JSONFormatter().format(_record(slug="widget", status_code=201)))
    assert line["slug"] == "widget"
    assert line["status_code"] == 201
    assert "product_id" not in line


def test_setup_logging_is_idempotent():
    root = logging.getLogger()
    setup_logging("DEBUG", "json")
    setup_logging("WARNING", "text")
    ours = [h for h in root.handlers if h.get_name() == "catalog-api"]
    assert len(ours) == 1
    assert root.level == logging.WARNING
    root.removeHandler(ours[0])
