"""
Marker Matching.

Decides whether a candidate expression (the callee of a call, or the tag of a
tag-like subscript) marks a template for dedenting.
"""

from typing import Optional

import libcst as cst

from dedentify.config import DedentConfig


def is_named_identifier(expression: cst.CSTNode, name: str) -> bool:
  """
  Checks whether an expression is a bare identifier with the given name.

  Args:
      expression: Candidate expression.
      name: Identifier to compare against.

  Returns:
      bool: True if `expression` is a `Name` node spelled `name`.
  """
  return isinstance(expression, cst.Name) and expression.value == name


def matches(candidate: cst.CSTNode, config: Optional[DedentConfig] = None) -> bool:
  """
  Decides whether a callee or tag expression is a dedent marker.

  A configured `should_dedent` predicate is the sole authority when present;
  the name set is then ignored.

  Args:
      candidate: The callee or tag expression.
      config: Match configuration. Defaults to `DedentConfig()`.

  Returns:
      bool: True if the template behind `candidate` should be dedented.
  """
  config = config or DedentConfig()

  if config.should_dedent is not None:
    return bool(config.should_dedent(candidate, is_named_identifier))

  return isinstance(candidate, cst.Name) and candidate.value in config.names
