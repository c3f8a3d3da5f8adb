import logging

import pytest

from app.settings import settings
from shared.config.logging_config import _parse_size, add_service_context, configure_logging


def test_service_context_added_to_events():
    event = add_service_context(None, "info", {"event": "detection_finished"})
    assert event["service"] == settings.app_name
    assert event["version"] == settings.app_version
    assert event["event"] == "detection_finished"


def test_service_context_keeps_explicit_values():
    event = add_service_context(None, "info", {"event": "x", "service": "other"})
    assert event["service"] == "other"


def test_configure_logging_creates_log_file_and_quiets_transport(tmp_path):
    log_file = tmp_path / "logs" / "detect.log"
    configure_logging(log_level="DEBUG", log_format="json", log_file_path=log_file)

    logging.getLogger("services.detector").info("hello")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert log_file.exists()
    assert "hello" in log_file.read_text(encoding="utf-8")
    assert logging.getLogger("httpx").level == logging.WARNING


@pytest.mark.parametrize("size, expected", [
    ("512", 512),
    ("10KB", 10 * 1024),
    ("10mb", 10 * 1024 * 1024),
    ("1GB", 1024 ** 3),
])
def test_parse_size(size, expected):
    assert _parse_size(size) == expected
