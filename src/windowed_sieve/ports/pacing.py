from __future__ import annotations

from typing import Literal, Protocol, runtime_checkable

# Operation kinds that may be paced; pacing never changes what gets computed.
PaceEvent = Literal["mark", "discover", "export"]


@runtime_checkable
class PacingPolicy(Protocol):
    def advance(self, event: PaceEvent, operations: int = 1) -> None:
        """Account for `operations` completed operations of the given kind."""
        raise NotImplementedError("PacingPolicy is a port; use a concrete adapter.")
