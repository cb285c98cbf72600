from __future__ import annotations

from typing import Protocol, runtime_checkable


# Text destination for exported records; one call per "p,nextval" line, in store order.
@runtime_checkable
class OutputSink(Protocol):
    def write_line(self, line: str) -> None:
        """Append one exported line; the sink adds the newline."""
        raise NotImplementedError("OutputSink is a port; use a concrete adapter.")

    def close(self) -> None:
        """Flush and commit everything written so far."""
        raise NotImplementedError("OutputSink is a port; use a concrete adapter.")
