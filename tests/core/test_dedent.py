"""
Tests for the Dedent Engine.

Verifies:
1. The four-step pipeline (right trim, detect, strip, left trim) and its order.
2. Trim toggles.
3. Raw/cooked handling, including absent cooked forms.
4. The Segment invariant check.
"""

import pytest

from dedentify.config import DedentConfig
from dedentify.core.dedent import common_indent, dedent
from dedentify.core.errors import SegmentInvariantError
from dedentify.core.segments import Segment


def seg(text: str) -> Segment:
  """Builds a segment without escapes (raw == cooked)."""
  return Segment(raw=text, cooked=text)


def raws(segments):
  return [s.raw for s in segments]


def test_single_segment_all_defaults():
  segments = [seg("\n  hello\n  world\n  ")]
  dedent(segments)

  assert raws(segments) == ["hello\nworld"]
  assert segments[0].cooked == "hello\nworld"


def test_two_segments_golden():
  """
  Worked by hand:
  1. last segment "\\n    bar\\n  " -> "\\n    bar"
  2. runs {4, 2, 4} -> size 2
  3. ["\\n  foo\\n", "\\n  bar"]
  4. leading newline of the first segment removed
  """
  segments = [seg("\n    foo\n  "), seg("\n    bar\n  ")]
  dedent(segments)

  assert raws(segments) == ["  foo\n", "\n  bar"]


def test_trailing_line_removed_exactly():
  original = "text\n    "
  segments = [seg(original)]
  dedent(segments)

  assert segments[0].raw == "text"
  assert original == segments[0].raw + "\n    "


def test_trailing_bare_newline_removed():
  segments = [seg("\n    a\n")]
  dedent(segments)
  assert segments[0].raw == "a"


def test_trailing_pattern_absent_keeps_last_line():
  segments = [seg("\n    a\n    b  ")]
  dedent(segments)
  assert segments[0].raw == "a\nb  "


def test_right_trim_runs_before_detection():
  """The closing line's shallower indent must not lower the common indent."""
  segments = [seg("\n    a\n  ")]
  dedent(segments)
  assert segments[0].raw == "a"


def test_right_trim_only_touches_last_segment():
  segments = [seg("\n  a\n  "), seg("b\n  ")]
  dedent(segments)
  assert raws(segments) == ["a\n", "b"]


def test_leading_newline_removed_only():
  segments = [seg("\nabc")]
  dedent(segments)
  assert segments[0].raw == "abc"


def test_leading_crlf_removed():
  segments = [seg("\r\nabc")]
  dedent(segments)
  assert segments[0].raw == "abc"


def test_crlf_template():
  segments = [seg("\r\n  a\r\n  ")]
  dedent(segments)
  assert segments[0].raw == "a"


def test_left_trim_only_touches_first_segment():
  segments = [seg("a"), seg("\nb")]
  dedent(segments)
  assert raws(segments) == ["a", "\nb"]


@pytest.mark.parametrize(
  "segments",
  [
    ["a\nb"],
    ["a\nb", "c"],
    ["plain"],
    [""],
    ["", ""],
  ],
)
def test_idempotent_on_dedented_input(segments):
  subject = [seg(s) for s in segments]
  dedent(subject)
  assert raws(subject) == segments


def test_applying_twice_changes_nothing_more():
  segments = [seg("\n    one\n    two\n    ")]
  dedent(segments)
  first = raws(segments)
  dedent(segments)
  assert raws(segments) == first == ["one\ntwo"]


@pytest.mark.parametrize(
  "widths",
  [
    [2, 4, 6],
    [3, 3],
    [1, 5],
    [8, 4, 12, 4],
  ],
)
def test_minimum_indent_correctness(widths):
  text = "".join(f"\n{' ' * w}line{i}" for i, w in enumerate(widths))
  segments = [seg(text)]
  dedent(segments)

  lines = segments[0].raw.split("\n")
  smallest = min(widths)
  assert len(lines) == len(widths)
  for i, (line, w) in enumerate(zip(lines, widths)):
    assert line == " " * (w - smallest) + f"line{i}"


def test_unindented_anchor_line_survives():
  segments = [seg("\n    a\nb\n    c")]
  dedent(segments)
  assert segments[0].raw == "a\nb\nc"


def test_tabs_count_as_one_column():
  segments = [seg("\n\t\ta\n\t\t\tb\n\t")]
  dedent(segments)
  assert segments[0].raw == "a\n\tb"


def test_mixed_tabs_and_spaces_strip_by_count():
  segments = [seg("\n\t  a\n  b")]
  dedent(segments)
  assert segments[0].raw == " a\nb"


def test_trim_toggles_disabled():
  segments = [seg("\n  hello\n  ")]
  dedent(segments, DedentConfig(trim_left=False, trim_right=False))
  assert segments[0].raw == "\nhello\n"


def test_trim_left_disabled():
  segments = [seg("\n  hello\n  ")]
  dedent(segments, DedentConfig(trim_left=False))
  assert segments[0].raw == "\nhello"


def test_trim_right_disabled_keeps_closing_indent_in_minimum():
  segments = [seg("\n    hello\n  ")]
  dedent(segments, DedentConfig(trim_right=False))
  assert segments[0].raw == "  hello\n"


def test_absent_cooked_stays_absent():
  segments = [Segment(raw="\n  \\N{NOPE}\n  ", cooked=None)]
  dedent(segments)

  assert segments[0].raw == "\\N{NOPE}"
  assert segments[0].cooked is None


def test_cooked_follows_raw_edits():
  segments = [
    Segment(raw="\n    a\\tb\n      c\n    ", cooked="\n    a\tb\n      c\n    "),
  ]
  dedent(segments)

  assert segments[0].raw == "a\\tb\n  c"
  assert segments[0].cooked == "a\tb\n  c"
  assert segments[0].cooked == segments[0].raw.replace("\\t", "\t")


def test_invariant_rejects_non_segments():
  good = seg("\n  a\n  ")
  with pytest.raises(SegmentInvariantError):
    dedent([good, "\n  b"])

  # Nothing was edited.
  assert good.raw == "\n  a\n  "


def test_invariant_is_an_assertion():
  with pytest.raises(AssertionError):
    dedent([])


def test_common_indent():
  assert common_indent([seg("no newline")]) == 0
  assert common_indent([seg("a\nb")]) == 0
  assert common_indent([seg("\n   a"), seg("\n  b")]) == 2
