"""
Integration tests for file logging through the Logger.

These tests exercise the formatter, the output fan-out and the file stream
together against real files.
"""

from pathlib import Path

import pytest

from prettylog import Logger, OnDropPolicy


@pytest.fixture
def file_logger(log_path: Path):
    logger = Logger()
    logger.toggle_console(False)
    logger.toggle_header_color(False)
    logger.set_log_file_path(log_path)
    logger.enable_file_logging()
    yield logger
    logger.close()


@pytest.mark.integration
class TestThresholdFlush:
    """Automatic flushing at the buffer size limit."""

    def test_exact_threshold(self, file_logger: Logger, log_path: Path):
        file_logger.set_max_buffer_size(3)
        for i in range(3):
            file_logger.info(f"m{i}")
        assert log_path.read_text() == "[INF] m0\n[INF] m1\n[INF] m2\n"

    def test_one_past_threshold(self, file_logger: Logger, log_path: Path):
        file_logger.set_max_buffer_size(3)
        for i in range(4):
            file_logger.info(f"m{i}")
        assert log_path.read_text() == "[INF] m0\n[INF] m1\n[INF] m2\n"
        assert file_logger.output.file.buffer == ["[INF] m3\n"]

    def test_filtered_events_never_reach_file(self, file_logger: Logger, log_path: Path):
        file_logger.debug("hidden")
        file_logger.info("shown")
        file_logger.flush()
        assert log_path.read_text() == "[INF] shown\n"


@pytest.mark.integration
class TestLockCoordination:
    """Advisory lock shared with an external reader."""

    def test_reader_sees_nothing_while_locked(self, file_logger: Logger, log_path: Path):
        file_logger.set_max_buffer_size(2)
        file_logger.lock_file()
        for i in range(5):
            file_logger.info(f"m{i}")
        assert log_path.read_text() == ""
        assert len(file_logger.output.file.buffer) == 5

        file_logger.unlock_file()
        file_logger.flush()
        assert log_path.read_text().count("\n") == 5

    def test_close_while_locked_discards(self, log_path: Path):
        logger = Logger()
        logger.toggle_console(False)
        logger.set_log_file_path(log_path)
        logger.enable_file_logging()
        logger.info("lost")
        logger.lock_file()
        logger.close()
        assert log_path.read_text() == ""

    def test_close_while_locked_ignore_lock(self, log_path: Path):
        logger = Logger()
        logger.toggle_console(False)
        logger.toggle_header_color(False)
        logger.set_on_drop_policy(OnDropPolicy.IGNORE_LOCK)
        logger.set_log_file_path(log_path)
        logger.enable_file_logging()
        logger.info("kept")
        logger.lock_file()
        logger.close()
        assert log_path.read_text() == "[INF] kept\n"


@pytest.mark.integration
def test_broken_file_degrades_silently(temp_dir: Path, capsys):
    target = temp_dir / "sub" / "app.log"
    target.parent.mkdir()
    logger = Logger()
    logger.toggle_header_color(False)
    logger.set_log_file_path(target)
    logger.enable_file_logging()
    logger.set_max_buffer_size(1)
    target.unlink()
    target.parent.rmdir()

    logger.info("one")
    logger.info("two")

    assert capsys.readouterr().err == "[INF] one\n[INF] two\n"
    assert not logger.output.file.is_enabled
