from __future__ import annotations

import json
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from windowed_sieve.observability.domain.logging import LogMessage

if TYPE_CHECKING:
    from windowed_sieve.ports.log_sink import LogSink


class StderrLogSink:
    # Diagnostic stream sink: one compact JSON object per line on stderr.
    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def emit(self, message: LogMessage) -> None:
        stream = self._stream if self._stream is not None else sys.stderr
        print(_to_json(message), file=stream)


class JsonlLogSink:
    # File-backed sink; appends so repeated runs keep their history.
    def __init__(self, path: Path) -> None:
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._file: TextIO | None = self._path.open("a", encoding="utf-8")

    def emit(self, message: LogMessage) -> None:
        if self._file is None:
            raise ValueError(f"JsonlLogSink for {self._path} is closed")
        self._file.write(_to_json(message) + "\n")
        self._file.flush()

    def close(self) -> None:
        if self._file is None:
            return
        self._file.close()
        self._file = None


class FanoutLogSink:
    # Delivers each message to every wrapped sink in order.
    def __init__(self, sinks: Iterable[LogSink]) -> None:
        self._sinks = list(sinks)

    def emit(self, message: LogMessage) -> None:
        for sink in self._sinks:
            sink.emit(message)


def _to_json(message: LogMessage) -> str:
    return json.dumps(_log_to_dict(message), separators=(",", ":"), ensure_ascii=False)


def _log_to_dict(message: LogMessage) -> dict[str, object]:
    return {
        "level": message.level,
        "message": message.message,
        "timestamp": message.timestamp.isoformat().replace("+00:00", "Z"),
        "fields": message.fields,
    }
