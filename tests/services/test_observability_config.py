"""Logging & Settings — JSON log lines and environment-driven configuration.

Tests cover:
    - JSONFormatter emits one JSON object with extra task fields
    - setup_logging does not stack handlers on repeated calls
    - Settings converts postgresql:// to the asyncpg driver URL
"""

import json
import logging
from uuid import uuid4

from taskshare.config import Settings
from taskshare.infrastructure.observability import JSONFormatter, setup_logging


def test_json_formatter_includes_extra_fields():
    task_id = uuid4()
    record = logging.LogRecord(
        "taskshare.test", logging.INFO, __file__, 1, "Task patched", None, None,
    )
    record.task_id = task_id
    record.version = 3

    line = json.loads(JSONFormatter().format(record))

    assert line["message"] == "Task patched"
    assert line["level"] == "INFO"
    assert line["task_id"] == str(task_id)
    assert line["version"] == 3
    assert "user_id" not in line


def test_setup_logging_is_idempotent():
    setup_logging("INFO", "json")
    setup_logging("DEBUG", "text")
    named = [h for h in logging.root.handlers if h.get_name() == "taskshare"]
    assert len(named) == 1
    assert logging.root.level == logging.DEBUG


def test_settings_convert_postgres_url():
    settings = Settings(database_url="postgresql://u:p@host:5432/db")
    assert settings.database_url == "postgresql+asyncpg://u:p@host:5432/db"


def test_settings_identity_header_default():
    assert Settings().identity_header == "X-User-Id"
