"""
Rewrite Trace.

Structured record of one `DedentEngine.run`:

- phases (``Parsing``, ``Dedent Rewrite``) as nested start/end pairs,
- one ``rewrite`` event per dedented template, with the code before and after,
- ``skip`` events for markers that carried no template,
- ``warning`` events (e.g. the parse error of a failed run).

Events export to plain dicts for JSON dumps. A logger belongs to a single run.
"""

import time
import uuid
from contextlib import contextmanager
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional


class TraceEventType(str, Enum):
  PHASE_START = "phase_start"
  PHASE_END = "phase_end"
  REWRITE = "rewrite"
  SKIP = "skip"
  WARNING = "warning"


@dataclass
class TraceEvent:
  type: TraceEventType
  description: str
  parent_id: Optional[str] = None
  metadata: Dict[str, Any] = field(default_factory=dict)
  id: str = field(default_factory=lambda: str(uuid.uuid4()))
  timestamp: float = field(default_factory=time.time)


class TraceLogger:
  """
  Collects trace events, parenting each one to the innermost open phase.
  """

  def __init__(self) -> None:
    self._events: List[TraceEvent] = []
    self._open: List[str] = []

  def _append(
    self,
    event_type: TraceEventType,
    description: str,
    parent_id: Optional[str] = None,
    **metadata: Any,
  ) -> TraceEvent:
    if parent_id is None and self._open:
      parent_id = self._open[-1]
    event = TraceEvent(type=event_type, description=description, parent_id=parent_id, metadata=metadata)
    self._events.append(event)
    return event

  def start_phase(self, name: str, description: str = "") -> str:
    """
    Opens a phase nested in the current one.

    Args:
        name: Phase name, e.g. ``"Parsing"``.
        description: Free-form detail stored as ``metadata["detail"]``.

    Returns:
        str: The phase id, the parent of events logged until it ends.
    """
    event = self._append(TraceEventType.PHASE_START, name, detail=description)
    self._open.append(event.id)
    return event.id

  def end_phase(self) -> None:
    """Closes the innermost phase. No-op when none is open."""
    if self._open:
      self._append(TraceEventType.PHASE_END, "End Phase", parent_id=self._open.pop())

  @contextmanager
  def phase(self, name: str, description: str = "") -> Iterator[str]:
    """Runs the enclosed block as a phase."""
    phase_id = self.start_phase(name, description)
    try:
      yield phase_id
    finally:
      self.end_phase()

  def log_rewrite(self, node_type: str, before: str, after: str) -> None:
    self._append(TraceEventType.REWRITE, f"Dedented {node_type}", before=before, after=after)

  def log_skip(self, code: str, reason: str) -> None:
    """Records a matched marker that was left unchanged."""
    self._append(TraceEventType.SKIP, f"Skipped '{code}'", reason=reason)

  def log_warning(self, message: str) -> None:
    self._append(TraceEventType.WARNING, message)

  def export(self) -> List[Dict[str, Any]]:
    """Returns the events as dicts, oldest first."""
    return [asdict(e) for e in self._events]
