"""Tests for logger cleanup cascade via BaseCloseable."""

import pytest

from relbisect.core.log import ConsoleSink, FileSink, Logger, OTLPSink


def make_logger(log_file):
    return Logger(
        console=ConsoleSink(enabled=False),
        file=FileSink(enabled=True, path=str(log_file)),
        otlp=OTLPSink(enabled=False),
    )


def test_logger_closes_file_via_context_manager(tmp_path):
    logger = make_logger(tmp_path / "test.log")
    logger.setup(log_root=tmp_path, run_name="test")

    assert not logger.file._file.closed

    with logger:
        logger.info("test message")

    assert logger.file._file.closed


def test_logger_closes_on_exception(tmp_path):
    logger = make_logger(tmp_path / "test.log")
    logger.setup(log_root=tmp_path, run_name="test")

    with pytest.raises(ValueError), logger:
        logger.info("before exception")
        raise ValueError("test exception")

    assert logger.file._file.closed


def test_config_close_cascades_to_logger(tmp_path):
    """Config.close() → Logger.close() → FileSink.close()."""
    from relbisect.core.config import Config

    config = Config(
        logger=make_logger(tmp_path / "cascade.log"),
        log_root=tmp_path,
        run_name="cascade",
    )

    assert not config.logger.file._file.closed
    config.close()
    assert config.logger.file._file.closed


def test_file_written_and_flushed_on_close(tmp_path):
    log_file = tmp_path / "written.log"
    logger = make_logger(log_file)
    logger.setup(log_root=tmp_path, run_name="write-test")

    with logger:
        logger.info("test message to file", version="1.2.0")

    content = log_file.read_text()
    assert "test message to file" in content
    assert "version='1.2.0'" in content


def test_file_path_template(tmp_path):
    logger = Logger(
        console=ConsoleSink(enabled=False),
        file=FileSink(enabled=True),
    )
    logger.setup(log_root=tmp_path, run_name="templated")
    logger.close()

    assert (tmp_path / "templated" / "relbisect.log").exists()


def test_sink_level_inherits_logger_level():
    logger = Logger(level="warn", console=ConsoleSink(enabled=False))

    assert logger.console.level == "warn"
    assert logger.file.level == "warn"


def test_close_error_does_not_stop_cascade(tmp_path, capsys):
    from relbisect.core.base import BaseCloseable

    class Broken(BaseCloseable):
        def close(self):
            raise OSError("disk gone")

    class Holder(BaseCloseable):
        broken: Broken
        logger: Logger

    holder = Holder(broken=Broken(), logger=make_logger(tmp_path / "h.log"))
    holder.logger.setup(log_root=tmp_path, run_name="holder")

    holder.close()

    assert holder.logger.file._file.closed
    assert "disk gone" in capsys.readouterr().err
