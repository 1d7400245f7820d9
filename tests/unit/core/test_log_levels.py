"""Test log level filtering in the file sink."""

import pytest

from relbisect.core.log import (
    LEVELS,
    ConsoleSink,
    FileSink,
    OTLPSink,
    level_name,
    setup_logger,
)

MESSAGES = ["trace", "debug", "info", "warn", "error"]


def log_all_levels(tmp_path, level):
    log_file = tmp_path / f"{level}.log"
    logger = setup_logger(
        log_root=tmp_path,
        run_name="test",
        console=ConsoleSink(enabled=False),
        otlp=OTLPSink(enabled=False),
        file=FileSink(enabled=True, level=level, path=str(log_file)),
    )
    for name in MESSAGES:
        getattr(logger, name)(f"{name.upper()} message")
    logger.close()
    return log_file.read_text()


@pytest.mark.parametrize("level", MESSAGES)
def test_file_sink_keeps_level_and_above(tmp_path, level):
    content = log_all_levels(tmp_path, level)

    threshold = MESSAGES.index(level)
    for i, name in enumerate(MESSAGES):
        present = f"{name.upper()} message" in content
        assert present == (i >= threshold), name


def test_level_ordering():
    """Lower severity number means more verbose."""
    ordered = [LEVELS[n] for n in ('trace', 'debug', 'info', 'warn', 'error', 'fatal')]

    assert ordered == sorted(ordered)
    assert LEVELS['trace'] == 1
    assert LEVELS['info'] == 9


def test_level_name_round_trip():
    for name, number in LEVELS.items():
        assert level_name(number) == name
    assert level_name(0) == 'trace'
