"""
Tests for the top-level `dedentify.transform` API.
"""

import pytest

import dedentify
from dedentify import DedentConfig


def test_transform_defaults():
  code = 'x = dedent("""\n    a\n      b\n    """)\n'
  assert dedentify.transform(code) == 'x = """a\n  b"""\n'


def test_transform_options():
  code = 'x = md("""\n  a\n  """)\n'
  assert dedentify.transform(code, tagName="md", keepFunctionCall=True) == 'x = md("""a""")\n'


def test_transform_config_object():
  code = 'x = md["""\n  a\n  """]\n'
  assert dedentify.transform(code, config=DedentConfig(tag_name="md")) == 'x = """a"""\n'


def test_transform_raises_on_bad_code():
  with pytest.raises(ValueError, match="Dedent failed"):
    dedentify.transform("def (:\n")


def test_version():
  assert isinstance(dedentify.__version__, str)


def test_docstring_example():
  code = "x = dedent('''\n    a\n      b\n    ''')"
  assert dedentify.transform(code) == "x = '''a\n  b'''"
  assert "transform" in dedentify.__doc__
