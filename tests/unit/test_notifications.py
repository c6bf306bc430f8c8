import logging

import pytest

from src.infrastructure.notifications import LoggingNotificationSink, RecordingNotificationSink


def test_logging_sink_uses_matching_levels(caplog: pytest.LogCaptureFixture) -> None:
    sink = LoggingNotificationSink()

    with caplog.at_level(logging.INFO, logger="src.infrastructure.notifications"):
        sink.success("Successfully Created Project")
        sink.error("Failed to Create Project")

    assert [(record.levelno, record.getMessage()) for record in caplog.records] == [
        (logging.INFO, "[notification] Successfully Created Project"),
        (logging.ERROR, "[notification] Failed to Create Project"),
    ]


def test_recording_sink_keeps_order() -> None:
    sink = RecordingNotificationSink()
    sink.error("first")
    sink.success("second")
    assert sink.notifications == [("error", "first"), ("success", "second")]
