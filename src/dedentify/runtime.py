"""
Runtime Dedent Marker.

`dedent` is the marker the rewriter looks for, usable at runtime too, so code
behaves the same whether or not it went through the source rewrite (or was
rewritten with ``keep_function_call``)::

    from dedentify import dedent

    query = dedent('''
        SELECT *
          FROM users
        ''')
    assert query == "SELECT *\\n  FROM users"

    same = dedent['''
        SELECT *
          FROM users
        ''']

At runtime the marker sees the evaluated string, so ``\\n`` escapes count as
line breaks. The source rewrite works on the literal as written.
"""

from typing import Any

from dedentify.config import DedentConfig
from dedentify.core.dedent import dedent as dedent_segments
from dedentify.core.segments import Segment


class Dedent:
  """
  Callable and subscriptable dedent marker.

  Args:
      **options: Trim options (``trim_left``/``trimLeft``, ``trim_right``/``trimRight``).
  """

  def __init__(self, **options: Any) -> None:
    self.config = DedentConfig.from_options(options)

  def __call__(self, text: str) -> str:
    return self._apply(text)

  def __getitem__(self, text: str) -> str:
    return self._apply(text)

  def _apply(self, text: str) -> str:
    if not isinstance(text, str):
      raise TypeError(f"dedent expects a str, got {type(text).__name__}")
    segment = Segment(raw=text, cooked=text)
    dedent_segments([segment], self.config)
    return segment.raw

  def __repr__(self) -> str:
    return f"Dedent(trim_left={self.config.trim_left}, trim_right={self.config.trim_right})"


dedent = Dedent()
