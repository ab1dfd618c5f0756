import os

import msgspec
import pytest

from hyperplace.logging import Entry, Log, Logger, LoggerStream, LogLevel
from hyperplace.logging.config.logging_config import LoggingConfig


class TestEntryTemplates:
    def test_to_template_renders_fields(self, sample_entry: Entry):
        rendered = sample_entry.to_template(
            "{level} - {message} - {caller}",
            context={"caller": "test"},
        )

        assert rendered == "INFO - Test log message - test"


class TestLogLevels:
    def test_to_level(self):
        assert LogLevel.to_level("warn") == LogLevel.WARN
        assert LogLevel.to_level("DEBUG") == LogLevel.DEBUG

    def test_enabled_respects_level(self):
        config = LoggingConfig()
        config.update(log_level="warn")

        assert config.enabled("default", LogLevel.ERROR) is True
        assert config.enabled("default", LogLevel.INFO) is False


class TestStreamOutput:
    @pytest.mark.asyncio
    async def test_log_to_stdout(self, sample_entry: Entry, capsys):
        stream = LoggerStream(name="test_stdout", template="{level}:{message}")
        await stream.initialize()

        await stream.log(sample_entry)
        await stream.close()

        assert "INFO:Test log message" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_entries_below_level_dropped(self, capsys):
        LoggingConfig().update(log_level="error")
        stream = LoggerStream(name="test_filtered", template="{message}")
        await stream.initialize()

        await stream.log(Entry(message="dropped", level=LogLevel.DEBUG))
        await stream.close()

        assert "dropped" not in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_log_to_file_writes_json_lines(
        self,
        sample_entry: Entry,
        temp_log_directory: str,
    ):
        stream = LoggerStream(
            name="test_file",
            filename="test.json",
            directory=temp_log_directory,
        )
        await stream.initialize()

        await stream.log(sample_entry)
        await stream.log(Entry(message="second", level=LogLevel.WARN))
        await stream.close()

        with open(os.path.join(temp_log_directory, "test.json"), "rb") as logfile:
            lines = logfile.read().splitlines()

        assert len(lines) == 2

        first = msgspec.json.decode(lines[0], type=Log)
        assert first.entry.message == "Test log message"
        assert first.function_name == "test_log_to_file_writes_json_lines"


class TestLogger:
    @pytest.mark.asyncio
    async def test_configured_logger_writes_to_path(self, temp_log_directory: str):
        logger = Logger()
        logger.configure(
            name="isolation",
            path=os.path.join(temp_log_directory, "isolation.json"),
        )

        await logger.log(
            Entry(message="configured", level=LogLevel.INFO),
            name="isolation",
        )
        await logger.close()

        with open(os.path.join(temp_log_directory, "isolation.json"), "rb") as logfile:
            lines = logfile.read().splitlines()

        assert len(lines) == 1
        assert b"configured" in lines[0]
