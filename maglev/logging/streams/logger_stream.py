from __future__ import annotations

import datetime
import io
import os
import pathlib
import sys
import threading
from typing import Callable, TypeVar

import msgspec

from maglev.logging.config import LoggingConfig, StreamType
from maglev.logging.models import Entry, Log, TemplateContext

T = TypeVar('T', bound=Entry)

DEFAULT_TEMPLATE = "{timestamp} - {level} - {thread_id} - {filename}:{function_name}.{line_number} - {message}"
ERROR_TEMPLATE = "{timestamp} - {level} - {thread_id}.{filename}:{function_name}.{line_number} - {error}"


class LoggerStream:
    """
    Synchronous structured log stream.

    Entries are rendered through a format template to stdout or stderr
    (chosen by the active LoggingConfig) and, when a log path is set,
    appended to that file as one msgspec-encoded JSON Log per line.
    """

    def __init__(
        self,
        name: str | None = None,
        template: str | None = None,
        path: str | None = None,
        stdout: io.TextIOBase | None = None,
        stderr: io.TextIOBase | None = None,
    ) -> None:
        if name is None:
            name = 'default'

        self._name = name
        self._default_template = template or DEFAULT_TEMPLATE
        self._config = LoggingConfig()
        self._path = path
        self._stdout = stdout
        self._stderr = stderr
        self._lock = threading.Lock()
        self._encoder = msgspec.json.Encoder()

    @property
    def name(self):
        return self._name

    @property
    def path(self) -> str | None:
        return self._path or self._config.path

    def log(
        self,
        entry_or_log: T | Log[T],
        template: str | None = None,
        filter: Callable[[T], bool] | None = None,
    ):
        entry: Entry = None
        if isinstance(entry_or_log, Log):
            entry = entry_or_log.entry

        else:
            entry = entry_or_log

        if self._config.enabled(self._name, entry.level) is False:
            return

        if filter and filter(entry) is False:
            return

        if template is None:
            template = self._default_template

        if isinstance(entry_or_log, Log):
            log = entry_or_log

        else:
            log_file, line_number, function_name = self._find_caller()
            log = Log(
                entry=entry,
                logger=self._name,
                filename=log_file,
                function_name=function_name,
                line_number=line_number,
                thread_id=threading.get_native_id(),
                timestamp=datetime.datetime.now(datetime.UTC).isoformat(),
            )

        context: TemplateContext = {
            "filename": log.filename,
            "function_name": log.function_name,
            "line_number": log.line_number,
            "thread_id": log.thread_id,
            "timestamp": log.timestamp,
        }

        stream = self._get_stream(self._config.output)

        try:
            with self._lock:
                stream.write(entry.to_template(template, context=context) + "\n")
                stream.flush()

        except (KeyError, IndexError, ValueError) as err:
            self._get_stream(StreamType.STDERR).write(
                entry.to_template(
                    ERROR_TEMPLATE,
                    context={
                        **context,
                        "error": f"unable to render log template: {err}",
                    },
                ) + "\n"
            )

        if logfile_path := self.path:
            self._write_to_file(log, logfile_path)

    def _get_stream(self, stream_type: StreamType) -> io.TextIOBase:
        if stream_type == StreamType.STDOUT:
            return self._stdout or sys.stdout

        return self._stderr or sys.stderr

    def _write_to_file(
        self,
        log: Log,
        logfile_path: str,
    ):
        path = pathlib.Path(logfile_path)
        if not path.parent.exists():
            os.makedirs(path.parent, exist_ok=True)

        with self._lock, open(path, "ab") as logfile:
            logfile.write(self._encoder.encode(log) + b"\n")

    def _find_caller(self):
        """
        Find the stack frame of the caller so that we can note the source
        file name, line number and function name.
        """
        frame = sys._getframe(2)
        code = frame.f_code

        return (
            code.co_filename,
            frame.f_lineno,
            code.co_name,
        )
