"""
Error types raised by the dedent core.
"""


class SegmentInvariantError(AssertionError):
  """
  Raised when the dedent engine receives something that is not a `Segment`.

  This signals a bug in the caller (the wrong node type was passed in), not a
  recoverable condition. No segment is edited when it is raised.
  """


class UnclosableLiteralError(ValueError):
  """
  Raised when dedented text of a raw literal would end in an unescapable
  quote character or backslash. The rewriter leaves such templates unchanged.
  """
