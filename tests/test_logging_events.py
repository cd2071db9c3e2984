from __future__ import annotations

import logging

import pytest

from assethash.logging import LOG_FORMAT, configure_logging, get_logger
from assethash.logging_events import log_event


def test_log_event_emits_structured_record(caplog: pytest.LogCaptureFixture) -> None:
    logger = get_logger("assethash.tests")

    with caplog.at_level(logging.INFO, logger="assethash.tests"):
        log_event(logger, "assets.warmed", count=3, meta={"paths": ["a.css", "b.js"]})

    record = caplog.records[-1]
    assert record.getMessage() == "assets.warmed"
    assert record.levelno == logging.INFO
    assert record.event == "assets.warmed"  # type: ignore[attr-defined]
    assert record.count == 3  # type: ignore[attr-defined]
    assert record.meta == {"paths": ["a.css", "b.js"]}  # type: ignore[attr-defined]


def test_log_event_honours_level(caplog: pytest.LogCaptureFixture) -> None:
    logger = get_logger("assethash.tests")

    with caplog.at_level(logging.INFO, logger="assethash.tests"):
        log_event(logger, "static.error", level=logging.ERROR, status=500)

    assert caplog.records[-1].levelno == logging.ERROR


@pytest.mark.parametrize("event", ["", "   "])
def test_log_event_requires_event_name(event: str) -> None:
    with pytest.raises(ValueError):
        log_event(get_logger("assethash.tests"), event)


def test_log_event_rejects_nested_fields() -> None:
    with pytest.raises(TypeError):
        log_event(get_logger("assethash.tests"), "bad", payload={"nested": True})


def test_log_event_rejects_unserialisable_meta() -> None:
    with pytest.raises(TypeError):
        log_event(get_logger("assethash.tests"), "bad", meta={"value": object()})


def test_configure_logging_sets_level_and_file(tmp_path) -> None:
    log_file = tmp_path / "assethash.log"

    configure_logging("warning", str(log_file))
    try:
        root = logging.getLogger()
        assert root.level == logging.WARNING
        file_handlers = [h for h in root.handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].formatter is not None
        assert file_handlers[0].formatter._fmt == LOG_FORMAT
    finally:
        for handler in logging.getLogger().handlers:
            handler.close()
        configure_logging("INFO")


def test_configure_logging_falls_back_on_unknown_level(tmp_path) -> None:
    log_file = tmp_path / "logs" / "assethash.log"

    configure_logging("chatty", log_file)
    try:
        assert logging.getLogger().level == logging.INFO
    finally:
        for handler in logging.getLogger().handlers:
            handler.close()
        configure_logging("INFO")

    assert "Unknown log level 'chatty'; using INFO" in log_file.read_text(encoding="utf-8")
