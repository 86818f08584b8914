import logging

import pytest

from site_harvest.logger import LOGGER_NAME, NOISY_LOGGERS, configure, get_logger, init_logging


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    init_logging()


def test_component_loggers_are_children():
    assert get_logger().name == LOGGER_NAME
    assert get_logger("crawler").name == f"{LOGGER_NAME}.crawler"
    assert get_logger("crawler").parent is get_logger()


def test_component_messages_reach_log_file(tmp_path):
    log_file = tmp_path / "logs" / "harvest.log"
    configure(level="debug", log_file=log_file, log_format="%(name)s %(message)s")

    get_logger("fetcher").debug("loaded %s", "https://example.com")
    for handler in get_logger().handlers:
        handler.flush()

    assert "SiteHarvest.fetcher loaded https://example.com" in log_file.read_text(encoding="utf-8")


def test_configure_replaces_handlers(tmp_path):
    configure(log_file=tmp_path / "a.log")
    configure(log_file=tmp_path / "b.log")
    lg = get_logger()
    assert len(lg.handlers) == 2
    assert lg.propagate is False

    configure(replace_handlers=False)
    assert len(lg.handlers) == 3


@pytest.mark.parametrize("level,expected", [("INFO", logging.WARNING), ("DEBUG", logging.DEBUG)])
def test_library_loggers_follow_project_level(level, expected):
    configure(level=level)
    for name in NOISY_LOGGERS:
        assert logging.getLogger(name).level == expected
