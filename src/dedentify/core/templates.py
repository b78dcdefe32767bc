"""
Template Classification and Extraction.

Python has no tagged template literals, so the rewriter works with two node
shapes:

- **CallLike**: ``dedent("...")``. The callee is the marker candidate and the
  first positional argument carries the template.
- **TagLike**: ``dedent["..."]``. The subscripted value is the marker candidate
  and the single index element is the template literal.

Everything else is ``Other``. A call-like marker may wrap a tag-like expression
(``dedent(sql["..."])``); `extract_template` unwraps exactly one such level.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Union

import libcst as cst

from dedentify.core.segments import TemplateLiteral, is_template_literal


@dataclass(frozen=True)
class CallLike:
  """A call with a positional first argument."""

  node: cst.Call
  callee: cst.BaseExpression
  argument: cst.BaseExpression


@dataclass(frozen=True)
class TagLike:
  """A subscript whose only index element is a template literal."""

  node: cst.Subscript
  tag: cst.BaseExpression
  literal: TemplateLiteral


@dataclass(frozen=True)
class Other:
  """Any node the rewriter does not consider."""

  node: cst.CSTNode


Candidate = Union[CallLike, TagLike, Other]


@dataclass(frozen=True)
class Extraction:
  """
  The literal found inside a marker argument.

  Attributes:
      literal: The template literal whose segments get dedented.
      rebuild: Returns the argument expression with a replacement literal.
  """

  literal: TemplateLiteral
  rebuild: Callable[[TemplateLiteral], cst.BaseExpression]


def classify(node: cst.CSTNode) -> Candidate:
  """
  Sorts a node into the closed variant set {CallLike, TagLike, Other}.

  Args:
      node: Any CST node.

  Returns:
      Candidate: The matching variant wrapping `node`.
  """
  if isinstance(node, cst.Call) and node.args:
    first = node.args[0]
    if first.keyword is None and first.star == "":
      return CallLike(node=node, callee=node.func, argument=first.value)

  if isinstance(node, cst.Subscript):
    literal = tagged_literal(node)
    if literal is not None:
      return TagLike(node=node, tag=node.value, literal=literal)

  return Other(node=node)


def tagged_literal(node: cst.Subscript) -> Optional[TemplateLiteral]:
  """
  Returns the template literal of a ``tag["..."]`` expression.

  Args:
      node: Subscript node.

  Returns:
      Optional[TemplateLiteral]: The literal, or None for slices, tuples and non-literals.
  """
  if len(node.slice) != 1:
    return None

  element = node.slice[0]
  if isinstance(element.comma, cst.Comma):
    return None

  index = element.slice
  if not isinstance(index, cst.Index) or index.star is not None:
    return None

  if is_template_literal(index.value):
    return index.value
  return None


def replace_tagged_literal(node: cst.Subscript, literal: TemplateLiteral) -> cst.Subscript:
  """Returns `node` with its index literal swapped for `literal`."""
  element = node.slice[0]
  index = element.slice.with_changes(value=literal)
  return node.with_changes(slice=[element.with_changes(slice=index)])


def extract_template(argument: cst.BaseExpression) -> Optional[Extraction]:
  """
  Finds the template literal carried by a call-like marker's argument.

  Two cases are supported:

  1. The argument is a template literal itself.
  2. The argument is a tag-like expression; its literal is used and the tag
     is kept when rebuilding.

  Args:
      argument: First positional argument of the marker call.

  Returns:
      Optional[Extraction]: The literal and its rebuild function, or None.
  """
  if is_template_literal(argument):
    return Extraction(literal=argument, rebuild=lambda literal: literal)

  if isinstance(argument, cst.Subscript):
    literal = tagged_literal(argument)
    if literal is not None:
      return Extraction(literal=literal, rebuild=lambda new: replace_tagged_literal(argument, new))

  return None
