from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from windowed_sieve.ports.output_sink import OutputSink


@dataclass
class FileOutputSink(OutputSink):
    # File-based OutputSink adapter: newline-terminated text, optionally committed atomically.
    path: Path
    encoding: str = "utf-8"
    atomic_replace: bool = False
    _handle: TextIO | None = field(default=None, init=False, repr=False)
    _temp_path: Path | None = field(default=None, init=False, repr=False)
    _closed: bool = field(default=False, init=False, repr=False)

    def write_line(self, line: str) -> None:
        if self._closed:
            raise ValueError(f"Output sink for {self.path} is closed")
        # Open lazily so construction does not touch filesystem.
        if self._handle is None:
            self._open()
        assert self._handle is not None
        self._handle.write(line + "\n")

    def close(self) -> None:
        # Close is idempotent; an export with zero records still produces an empty file.
        if self._closed:
            return
        if self._handle is None:
            self._open()
        assert self._handle is not None
        self._handle.flush()
        self._handle.close()
        self._handle = None

        if self.atomic_replace and self._temp_path is not None:
            # Atomic replace commits the temp file to the final path.
            self._temp_path.replace(self.path)
            self._temp_path = None
        self._closed = True

    def discard(self) -> None:
        # Abandon a failed export: close the handle without committing; a temp file is removed.
        if self._closed:
            return
        if self._handle is not None:
            self._handle.close()
            self._handle = None
        if self._temp_path is not None:
            self._temp_path.unlink(missing_ok=True)
            self._temp_path = None
        self._closed = True

    def _open(self) -> None:
        if self.atomic_replace:
            self._temp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            self._handle = self._temp_path.open("w", encoding=self.encoding)
        else:
            self._handle = self.path.open("w", encoding=self.encoding)
