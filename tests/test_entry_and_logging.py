from __future__ import annotations

import json
import logging
from datetime import timezone

import pytest

from conftest import BASE_TIME
from filehistory.git.entry import HistoryEntry
from filehistory.log import PACKAGE_LOGGER, JsonFormatter, configure_logging


def test_history_entry_from_commit(scenario_repo) -> None:
    entry = HistoryEntry.from_commit(scenario_repo.c3)

    assert entry.commit_id == scenario_repo.c3.hexsha
    assert entry.short_id == scenario_repo.c3.hexsha[:8]
    assert entry.parent_commit_ids == [scenario_repo.c2.hexsha]
    assert entry.author == "Test Author"
    assert entry.author_email == "author@example.com"
    assert entry.summary == "C3: change a"
    assert entry.timestamp.timestamp() == BASE_TIME + 200
    assert entry.timestamp.utcoffset() == timezone.utc.utcoffset(None)


def test_history_entry_to_dict_is_json_safe(scenario_repo) -> None:
    payload = HistoryEntry.from_commit(scenario_repo.c1).to_dict()

    assert json.loads(json.dumps(payload))["parents"] == []
    assert payload["timestamp"].startswith("2020-09-13T12:26:40")


@pytest.fixture
def restore_package_logger():
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    saved = (list(package_logger.handlers), package_logger.level, package_logger.propagate)
    yield
    package_logger.handlers[:] = saved[0]
    package_logger.setLevel(saved[1])
    package_logger.propagate = saved[2]


def test_configure_logging_replaces_handler(restore_package_logger) -> None:
    configure_logging("info")
    package_logger = configure_logging("debug", json_format=True)

    assert len(package_logger.handlers) == 1
    assert isinstance(package_logger.handlers[0].formatter, JsonFormatter)
    assert package_logger.level == logging.DEBUG


def test_json_formatter_fields() -> None:
    record = logging.LogRecord(
        "filehistory.git.history", logging.INFO, __file__, 1, "found %d", (3,), None
    )

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "INFO"
    assert payload["message"] == "found 3"
    assert payload["logger"] == "filehistory.git.history"
