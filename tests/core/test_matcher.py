"""
Tests for marker matching.
"""

import libcst as cst
import pytest

from dedentify.config import DedentConfig
from dedentify.core.matcher import is_named_identifier, matches


def expr(code: str) -> cst.BaseExpression:
  return cst.parse_expression(code)


def test_default_marker_name():
  assert matches(expr("dedent")) is True
  assert matches(expr("dedent"), DedentConfig()) is True


@pytest.mark.parametrize("code", ["other", "Dedent", "dedent_", "textwrap.dedent", "dedent()", "'dedent'"])
def test_default_rejects_everything_else(code):
  assert matches(expr(code)) is False


def test_configured_single_name():
  config = DedentConfig(tag_name="md")
  assert matches(expr("md"), config) is True
  assert matches(expr("dedent"), config) is False


def test_configured_name_set():
  config = DedentConfig(tag_name=["md", "sql"])
  assert matches(expr("md"), config) is True
  assert matches(expr("sql"), config) is True
  assert matches(expr("html"), config) is False


def test_predicate_overrides_names_both_ways():
  always = DedentConfig(should_dedent=lambda e, is_named: True)
  never = DedentConfig(should_dedent=lambda e, is_named: False)

  assert matches(expr("whatever"), always) is True
  assert matches(expr("dedent"), never) is False


def test_predicate_ignores_configured_names():
  config = DedentConfig(tag_name="md", should_dedent=lambda e, is_named: is_named(e, "html"))
  assert matches(expr("html"), config) is True
  assert matches(expr("md"), config) is False


def test_predicate_receives_expression_and_helper():
  seen = []

  def predicate(expression, helper):
    seen.append((expression, helper))
    return isinstance(expression, cst.Attribute) and helper(expression.attr, "dedent")

  config = DedentConfig(should_dedent=predicate)
  candidate = expr("textwrap.dedent")

  assert matches(candidate, config) is True
  assert seen == [(candidate, is_named_identifier)]


def test_predicate_result_coerced_to_bool():
  config = DedentConfig(should_dedent=lambda e, is_named: "yes")
  assert matches(expr("x"), config) is True


def test_is_named_identifier():
  assert is_named_identifier(cst.Name("dedent"), "dedent") is True
  assert is_named_identifier(cst.Name("dedent"), "md") is False
  assert is_named_identifier(expr("a.dedent"), "dedent") is False
  assert is_named_identifier(cst.SimpleString('"dedent"'), "dedent") is False
