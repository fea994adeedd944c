import pytest
from loguru import logger

from core.logs import LOG_FILE_NAME, LogSink, normalize_level, open_log


def read_log(sink: LogSink) -> str:
    return sink.path.read_text() if sink.path.exists() else ""


@pytest.mark.parametrize(
    "raw,expected",
    [("debug", "debug"), ("INFO", "info"), (" warn ", "warn"), ("None", "none")],
)
def test_normalize_level(raw, expected):
    assert normalize_level(raw) == expected


def test_normalize_level_rejects_unknown():
    with pytest.raises(ValueError, match="invalid log level"):
        normalize_level("verbose")


def test_default_level_filters_debug(data_dir):
    sink = LogSink(data_dir / "logs")
    logger.debug("debug-hidden-message")
    logger.warning("warn-shown-message")
    sink.close()

    content = read_log(sink)
    assert sink.path.name == LOG_FILE_NAME
    assert "warn-shown-message" in content
    assert "debug-hidden-message" not in content


def test_set_level_debug(data_dir):
    sink = LogSink(data_dir / "logs")
    sink.set_level("debug")
    logger.debug("now-visible-debug")
    sink.close()

    assert sink.level == "debug"
    assert "now-visible-debug" in read_log(sink)


def test_level_none_disables_sink(data_dir):
    sink = LogSink(data_dir / "logs", level="none")
    logger.error("should-not-be-written")
    sink.close()

    assert "should-not-be-written" not in read_log(sink)


def test_invalid_level_keeps_current_handler(data_dir):
    sink = LogSink(data_dir / "logs", level="info")

    with pytest.raises(ValueError):
        sink.set_level("loud")

    logger.info("still-logging-at-info")
    sink.close()

    assert sink.level == "info"
    assert "still-logging-at-info" in read_log(sink)


def test_close_is_idempotent(data_dir):
    sink = LogSink(data_dir / "logs")
    sink.close()
    sink.close()


def test_open_log_context_manager(data_dir):
    with open_log(data_dir / "logs", "error") as sink:
        logger.warning("below-error-threshold")
        logger.error("error-level-entry")

    content = read_log(sink)
    assert "error-level-entry" in content
    assert "below-error-threshold" not in content
