# statespace_lab/core/trace.py
# Structured step events for an external viewer; the drivers only ever append.
from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class TraceEvent:
    step: int
    subject: Any          # node id (tree searches) or vertex id (coloring)
    outcome: str          # e.g. "trying", "success", "backtrack", "pruned", "incumbent"
    value: Any = None     # attempted color, bound, f-score ...
    detail: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class TraceRecorder:
    """Append-only log of TraceEvents. `enabled=False` turns recording into a no-op."""

    def __init__(self, enabled: bool = True, limit: Optional[int] = None):
        self.enabled = enabled
        self.limit = limit
        self.events: List[TraceEvent] = []
        self.dropped = 0

    def record(self, subject, outcome: str, value=None, **detail) -> None:
        if not self.enabled:
            return
        if self.limit is not None and len(self.events) >= self.limit:
            self.dropped += 1
            return
        self.events.append(TraceEvent(len(self.events), subject, outcome, value, detail))

    def __len__(self):
        return len(self.events)

    def outcomes(self, outcome: str) -> List[TraceEvent]:
        return [e for e in self.events if e.outcome == outcome]
