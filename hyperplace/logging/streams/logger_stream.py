import asyncio
import datetime
import io
import os
import pathlib
import sys
import threading
from collections import defaultdict
from typing import Dict, TypeVar

import msgspec

from hyperplace.logging.config.logging_config import LoggingConfig
from hyperplace.logging.config.stream_type import StreamType
from hyperplace.logging.models import Entry, Log

T = TypeVar('T', bound=Entry)


class LoggerStream:
    def __init__(
        self,
        name: str | None = None,
        template: str | None = None,
        filename: str | None = None,
        directory: str | None = None,
    ) -> None:
        if name is None:
            name = "default"

        self._name = name
        self._default_template = template
        self._default_logfile = filename
        self._default_log_directory = directory

        self._init_lock = asyncio.Lock()
        self._loop: asyncio.AbstractEventLoop | None = None

        self._files: Dict[str, io.FileIO] = {}
        self._file_locks: Dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)
        self._cwd: str | None = None

        self._config = LoggingConfig()
        self._initialized: bool = False

    async def initialize(self):

        async with self._init_lock:

            if self._initialized:
                return

            if self._loop is None:
                self._loop = asyncio.get_running_loop()

            if self._cwd is None:
                self._cwd = await self._loop.run_in_executor(
                    None,
                    os.getcwd,
                )

            self._initialized = True

    async def open_file(
        self,
        filename: str,
        directory: str | None = None,
    ):
        if self._cwd is None:
            await self.initialize()

        logfile_path = self._to_logfile_path(filename, directory=directory)
        async with self._file_locks[logfile_path]:
            if self._files.get(logfile_path) is None or self._files[logfile_path].closed:
                self._files[logfile_path] = await self._loop.run_in_executor(
                    None,
                    self._open_file,
                    logfile_path,
                )

    def _open_file(self, logfile_path: str):
        resolved_path = pathlib.Path(logfile_path).absolute().resolve()
        resolved_path.parent.mkdir(parents=True, exist_ok=True)

        return open(resolved_path, "ab+")

    def _to_logfile_path(
        self,
        filename: str,
        directory: str | None = None,
    ):
        if directory is None:
            directory = self._config.directory or os.path.join(self._cwd, "logs")

        return os.path.join(directory, filename)

    async def close(self):
        for logfile_path in list(self._files.keys()):
            await self.close_file(logfile_path)

        self._initialized = False

    async def close_file(self, logfile_path: str):
        async with self._file_locks[logfile_path]:
            logfile = self._files.pop(logfile_path, None)
            if logfile and logfile.closed is False:
                await self._loop.run_in_executor(None, logfile.close)

    async def log(self, entry: T | Log[T]):
        if self._default_logfile or self._default_log_directory:
            await self._log_to_file(
                entry,
                filename=self._default_logfile,
                directory=self._default_log_directory,
            )

        else:
            await self._log(entry)

    async def _log(self, entry_or_log: T | Log[T]):
        entry: Entry = None
        if isinstance(entry_or_log, Log):
            entry = entry_or_log.entry

        else:
            entry = entry_or_log

        if self._config.enabled(self._name, entry.level) is False:
            return

        if self._initialized is False:
            await self.initialize()

        template = self._default_template
        if template is None:
            template = "{timestamp} - {level} - {thread_id} - {filename}:{function_name}.{line_number} - {message}"

        if isinstance(entry_or_log, Log):
            log_file = entry_or_log.filename
            line_number = entry_or_log.line_number
            function_name = entry_or_log.function_name

        else:
            log_file, line_number, function_name = self._find_caller()

        stream = sys.stdout if self._config.output == StreamType.STDOUT else sys.stderr

        line = entry.to_template(
            template,
            context={
                "filename": log_file,
                "function_name": function_name,
                "line_number": line_number,
                "thread_id": threading.get_native_id(),
                "timestamp": datetime.datetime.now(datetime.UTC).isoformat(),
            },
        )

        await self._loop.run_in_executor(
            None,
            self._write_to_stream,
            stream,
            line,
        )

    def _write_to_stream(self, stream: io.TextIOBase, line: str):
        stream.write(line + "\n")
        stream.flush()

    async def _log_to_file(
        self,
        entry_or_log: T | Log[T],
        filename: str | None = None,
        directory: str | None = None,
    ):
        entry: Entry = None
        if isinstance(entry_or_log, Log):
            entry = entry_or_log.entry

        else:
            entry = entry_or_log

        if self._config.enabled(self._name, entry.level) is False:
            return

        if self._initialized is False:
            await self.initialize()

        if filename is None:
            filename = "logs.json"

        logfile_path = self._to_logfile_path(filename, directory=directory)
        if self._files.get(logfile_path) is None:
            await self.open_file(filename, directory=directory)

        if isinstance(entry_or_log, Log):
            log = entry_or_log

        else:
            log_file, line_number, function_name = self._find_caller()
            log = Log(
                entry=entry,
                filename=log_file,
                function_name=function_name,
                line_number=line_number,
            )

        async with self._file_locks[logfile_path]:
            await self._loop.run_in_executor(
                None,
                self._write_to_file,
                log,
                logfile_path,
            )

    def _write_to_file(
        self,
        log: Log,
        logfile_path: str,
    ):
        logfile = self._files.get(logfile_path)
        if logfile is None or logfile.closed:
            return

        logfile.write(msgspec.json.encode(log) + b"\n")
        logfile.flush()

    def _find_caller(self):
        """Find the first frame outside the logging package."""
        frame = sys._getframe(1)
        package_path = str(pathlib.Path(__file__).parent.parent)

        while frame.f_back is not None and frame.f_code.co_filename.startswith(package_path):
            frame = frame.f_back

        code = frame.f_code
        return (
            code.co_filename,
            frame.f_lineno,
            code.co_name,
        )
