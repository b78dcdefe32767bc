"""
Dedent Engine.

Rewrites the literal text segments of one template in place. The pipeline is
fixed and runs in this order:

1.  **Right trim**: drop the trailing newline + indent-only run of the last segment.
    The run may be empty, so a bare trailing newline is dropped as well.
2.  **Common indent detection**: the shortest ``\\n[\\t ]+`` run across all segments.
3.  **Strip**: remove exactly that many whitespace characters after every newline.
4.  **Left trim**: drop the leading newline of the first segment.

Right trim runs before detection so the closing line's indentation never lowers
the common indent. Tabs and spaces both count as one column.
"""

import re
from typing import Optional, Sequence

from dedentify.config import DedentConfig
from dedentify.core.errors import SegmentInvariantError
from dedentify.core.segments import Segment

_INDENT_RE = re.compile(r"\n([\t ]+)")
_TRAILING_RE = re.compile(r"\r?\n([\t ]*)\Z")
_LEADING_RE = re.compile(r"^\r?\n")


def dedent(segments: Sequence[Segment], config: Optional[DedentConfig] = None) -> None:
  """
  Normalizes indentation of a template's segments in place.

  Args:
      segments: Ordered literal text segments of one template (never empty).
      config: Trim toggles. Defaults to `DedentConfig()`.

  Raises:
      SegmentInvariantError: If any element is not a `Segment`.
  """
  if not segments or not all(isinstance(s, Segment) for s in segments):
    raise SegmentInvariantError(f"dedent() expects a non-empty sequence of Segment, got {segments!r}")

  config = config or DedentConfig()

  if config.trim_right:
    _trim_right(segments[-1])

  size = common_indent(segments)
  if size:
    pattern = re.compile(f"\n[\t ]{{{size}}}")
    for segment in segments:
      segment.replace(pattern, "\n")

  if config.trim_left:
    _trim_left(segments[0])


def common_indent(segments: Sequence[Segment]) -> int:
  """
  Finds the shortest whitespace run following a newline across all segments.

  Args:
      segments: Segments to scan (raw text only).

  Returns:
      int: The common indent width, or 0 if no line is indented.
  """
  widths = [len(m.group(1)) for s in segments for m in _INDENT_RE.finditer(s.raw)]
  return min(widths) if widths else 0


def _trim_right(segment: Segment) -> None:
  """Removes a final newline and the tabs/spaces after it, zero of them included."""
  match = _TRAILING_RE.search(segment.raw)
  if match is None:
    return
  width = len(match.group(1))
  segment.replace(re.compile(f"\r?\n[\t ]{{{width}}}\\Z"), "")


def _trim_left(segment: Segment) -> None:
  if _LEADING_RE.match(segment.raw):
    segment.replace(_LEADING_RE, "")
