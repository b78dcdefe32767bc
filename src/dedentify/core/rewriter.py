"""
Dedent Rewriter.

This module provides the ``DedentRewriter``, a LibCST transformer that finds
marked templates and normalizes their indentation:

1.  **Classification**: each ``Call`` and ``Subscript`` is sorted into
    CallLike / TagLike / Other (see ``dedentify.core.templates``).
2.  **Matching**: the callee or tag is checked against the configured marker.
3.  **Extraction**: the template literal is pulled out of the marker, unwrapping
    one nested tag for call-like markers.
4.  **Dedent**: the literal's segments are rewritten by the dedent engine.
5.  **Unwrapping**: unless ``keep_function_call`` is set, the marker is replaced
    by the template expression.

Example::

    text = dedent('''
        hello
          world
        ''')

becomes::

    text = '''hello
      world'''
"""

import logging
from typing import Any, Dict, Optional

import libcst as cst

from dedentify.config import DedentConfig
from dedentify.core.dedent import dedent
from dedentify.core.errors import UnclosableLiteralError
from dedentify.core.matcher import matches
from dedentify.core.segments import TemplateLiteral, literal_with_segments, segments_from_literal
from dedentify.core.templates import CallLike, TagLike, classify, extract_template, replace_tagged_literal
from dedentify.core.tracer import TraceLogger

logger = logging.getLogger(__name__)

_EMPTY_MODULE = cst.Module(body=[])


def _code(node: cst.CSTNode) -> str:
  return _EMPTY_MODULE.code_for_node(node)


def _adopt_parens(wrapper: cst.BaseExpression, expression: cst.BaseExpression) -> cst.BaseExpression:
  """Moves the wrapper's own parentheses onto its replacement."""
  if not wrapper.lpar:
    return expression
  return expression.with_changes(
    lpar=[*wrapper.lpar, *expression.lpar],
    rpar=[*expression.rpar, *wrapper.rpar],
  )


class DedentRewriter(cst.CSTTransformer):
  """
  Rewrites dedent-marked string templates in a CST.

  Attributes:
      config: Match configuration and edit toggles.
      tracer: Optional trace logger receiving one mutation event per rewrite.
      rewrites: Number of templates rewritten so far.
  """

  def __init__(self, config: Optional[DedentConfig] = None, tracer: Optional[TraceLogger] = None) -> None:
    """
    Initializes the rewriter.

    Args:
        config: The configuration object. Defaults to `DedentConfig()`.
        tracer: Trace logger owned by the calling engine run.
    """
    super().__init__()
    self.config = config or DedentConfig()
    self.tracer = tracer
    self.rewrites = 0

  def _dedent_literal(self, literal: TemplateLiteral) -> TemplateLiteral:
    segments = segments_from_literal(literal)
    dedent(segments, self.config)
    return literal_with_segments(literal, segments)

  def _record(self, kind: str, before: cst.CSTNode, after: cst.CSTNode) -> None:
    self.rewrites += 1
    if self.tracer:
      self.tracer.log_rewrite(kind, _code(before), _code(after))

  def _skip(self, node: cst.CSTNode, reason: str) -> None:
    logger.debug("Skipping marker %s: %s", _code(node), reason)
    if self.tracer:
      self.tracer.log_skip(_code(node), reason)

  def leave_Call(self, original_node: cst.Call, updated_node: cst.Call) -> cst.BaseExpression:
    """
    Dedents ``marker(<template>)`` and ``marker(tag[<template>])``.

    The call is kept when ``keep_function_call`` is set or when it has more
    than one argument, so no argument is ever dropped.
    """
    candidate = classify(updated_node)
    if not isinstance(candidate, CallLike) or not matches(candidate.callee, self.config):
      return updated_node

    extraction = extract_template(candidate.argument)
    if extraction is None:
      self._skip(original_node, "argument is not a string template")
      return updated_node

    try:
      literal = self._dedent_literal(extraction.literal)
    except UnclosableLiteralError as e:
      self._skip(original_node, str(e))
      return updated_node

    new_argument = extraction.rebuild(literal)

    if self.config.keep_function_call or len(updated_node.args) > 1:
      first, *rest = updated_node.args
      result: cst.BaseExpression = updated_node.with_changes(args=[first.with_changes(value=new_argument), *rest])
    else:
      result = _adopt_parens(updated_node, new_argument)

    self._record("Call", original_node, result)
    return result

  def leave_Subscript(self, original_node: cst.Subscript, updated_node: cst.Subscript) -> cst.BaseExpression:
    """
    Dedents ``marker[<template>]``.
    """
    candidate = classify(updated_node)
    if not isinstance(candidate, TagLike) or not matches(candidate.tag, self.config):
      return updated_node

    try:
      literal = self._dedent_literal(candidate.literal)
    except UnclosableLiteralError as e:
      self._skip(original_node, str(e))
      return updated_node

    if self.config.keep_function_call:
      result: cst.BaseExpression = replace_tagged_literal(updated_node, literal)
    else:
      result = _adopt_parens(updated_node, literal)

    self._record("Subscript", original_node, result)
    return result


def use_dedent_plugin(options: Optional[Dict[str, Any]] = None, **kwargs: Any) -> DedentRewriter:
  """
  Builds a configured rewriter from plugin-style options.

  Example::

      rewriter = use_dedent_plugin({"tagName": "md", "trimLeft": False})
      new_tree = tree.visit(rewriter)

  Args:
      options: Options mapping; camelCase and snake_case keys are accepted.
      **kwargs: Additional options, overriding `options`.

  Returns:
      DedentRewriter: A rewriter ready to be passed to ``Module.visit``.
  """
  return DedentRewriter(DedentConfig.from_options(options, **kwargs))
