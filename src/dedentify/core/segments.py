"""
Literal Text Segments.

This module defines the `Segment` value type consumed by the dedent engine and
the helpers that convert LibCST string literals to and from segment sequences.

A segment holds two representations of one static text chunk:

- ``raw``: the text exactly as written in source, escapes unresolved.
- ``cooked``: the escape-resolved text, or ``None`` if ``raw`` contains an
  escape that cannot be resolved.

A literal with ``n`` interpolations always produces ``n + 1`` segments.
Adjacent interpolations (``f"{a}{b}"``) yield empty segments between them.
"""

import warnings
from ast import literal_eval
from dataclasses import dataclass
from typing import List, Optional, Pattern, Sequence, Union

import libcst as cst

from dedentify.core.errors import UnclosableLiteralError

TemplateLiteral = Union[cst.SimpleString, cst.FormattedString]


@dataclass
class Segment:
  """
  One static text chunk of a template.

  Attributes:
      raw: Source text, escapes unresolved.
      cooked: Escape-resolved text, or None if unresolvable.
  """

  raw: str
  cooked: Optional[str] = None

  def replace(self, pattern: Pattern[str], replacement: str) -> None:
    """
    Applies the same regex substitution to both text forms.

    Args:
        pattern: Compiled regular expression.
        replacement: Replacement text.
    """
    self.raw = pattern.sub(replacement, self.raw)
    if self.cooked is not None:
      self.cooked = pattern.sub(replacement, self.cooked)


def is_template_literal(node: cst.CSTNode) -> bool:
  """
  Checks whether a node is a string literal the engine can dedent.

  Bytes literals and implicitly concatenated strings are excluded.

  Args:
      node: Any CST node.

  Returns:
      bool: True for str `SimpleString` and `FormattedString` nodes.
  """
  if isinstance(node, cst.FormattedString):
    return True
  if isinstance(node, cst.SimpleString):
    return "b" not in node.prefix
  return False


def cook(raw: str, prefix: str, quote: str) -> Optional[str]:
  """
  Resolves escape sequences of a raw segment.

  Args:
      raw: Segment text as written.
      prefix: Lowercased literal prefix (e.g. 'r', 'f', 'fr').
      quote: Quote token of the enclosing literal.

  Returns:
      Optional[str]: The resolved text, or None if `raw` does not evaluate.
  """
  is_fstring = "f" in prefix
  if "r" in prefix:
    cooked = raw
  else:
    # Segment boundaries may leave a dangling quote char next to the delimiter.
    if raw.endswith(quote[0]) or raw.startswith(quote[0]):
      quote = "'''" if quote[0] == '"' else '"""'
    try:
      with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        value = literal_eval(f"{quote}{raw}{quote}")
    except (SyntaxError, ValueError):
      return None
    if not isinstance(value, str):
      return None
    cooked = value

  if is_fstring:
    cooked = cooked.replace("{{", "{").replace("}}", "}")
  return cooked


def segments_from_literal(node: TemplateLiteral) -> List[Segment]:
  """
  Splits a string literal into its ordered literal text segments.

  Args:
      node: A `SimpleString` or `FormattedString`.

  Returns:
      List[Segment]: Segments in source order, interpolation count + 1 long.
  """
  prefix = node.prefix
  quote = node.quote

  if isinstance(node, cst.SimpleString):
    raw_parts = [node.raw_value]
  else:
    raw_parts = [""]
    for part in node.parts:
      if isinstance(part, cst.FormattedStringText):
        raw_parts[-1] += part.value
      else:
        raw_parts.append("")

  return [Segment(raw=raw, cooked=cook(raw, prefix, quote)) for raw in raw_parts]


def escape_closing_text(text: str, prefix: str, quote: str) -> str:
  """
  Keeps the end of a literal's text from running into its closing quote.

  Right trim can leave the last line ending in the delimiter's quote character
  (a last line `say "hi"` in a double-quoted literal) or in half of a
  `\\<newline>` escape. A trailing quote character is escaped, and so is a
  dangling backslash. The string value stays the same for the quote and gains
  a literal backslash for the dangling escape.

  Args:
      text: Raw text of the segment that ends at the closing quote.
      prefix: Lowercased literal prefix.
      quote: Quote token of the literal.

  Returns:
      str: Text that can be followed by `quote`.

  Raises:
      UnclosableLiteralError: If the literal is raw, where no escape is possible.
  """
  ends_in_quote = text.endswith(quote[0])
  body = text[:-1] if ends_in_quote else text
  backslashes = len(body) - len(body.rstrip("\\"))
  quote_is_bare = ends_in_quote and backslashes % 2 == 0
  backslash_dangles = not ends_in_quote and backslashes % 2 == 1

  if not (quote_is_bare or backslash_dangles):
    return text
  if "r" in prefix:
    raise UnclosableLiteralError(f"raw literal text {text!r} cannot be followed by {quote}")
  if quote_is_bare:
    return f"{body}\\{quote[0]}"
  return f"{text}\\"


def literal_with_segments(node: TemplateLiteral, segments: Sequence[Segment]) -> TemplateLiteral:
  """
  Writes segment text back into a copy of the literal.

  Prefix, quotes, parentheses and interpolations are preserved. Empty text
  parts are dropped from f-strings. The last segment goes through
  `escape_closing_text`.

  Args:
      node: The literal the segments were taken from.
      segments: The (possibly edited) segments of that literal.

  Returns:
      TemplateLiteral: A new literal node carrying the segment text.

  Raises:
      UnclosableLiteralError: If a raw literal can no longer be closed.
  """
  raws = [s.raw for s in segments]
  raws[-1] = escape_closing_text(raws[-1], node.prefix, node.quote)

  if isinstance(node, cst.SimpleString):
    head = node.value[: len(node.prefix) + len(node.quote)]
    return node.with_changes(value=f"{head}{raws[0]}{node.quote}")

  parts: List[cst.BaseFormattedStringContent] = []
  texts = iter(raws)

  def push_text() -> None:
    text = next(texts)
    if text:
      parts.append(cst.FormattedStringText(value=text))

  push_text()
  for part in node.parts:
    if isinstance(part, cst.FormattedStringExpression):
      parts.append(part)
      push_text()

  return node.with_changes(parts=parts)
