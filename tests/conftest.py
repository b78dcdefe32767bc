"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Console isolation so tests that swap the rich console do not leak.
- Helpers for rendering detached CST nodes.
"""

import sys
from pathlib import Path

import libcst as cst
import pytest

# Add src to path so we can import 'dedentify' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from dedentify.utils.console import reset_console  # noqa: E402


@pytest.fixture(autouse=True)
def clean_console():
  """Ensures console is reset to stdout after every test."""
  yield
  reset_console()


@pytest.fixture
def render():
  """Returns a function that renders a detached CST node to source."""
  module = cst.Module(body=[])

  def _render(node: cst.CSTNode) -> str:
    return module.code_for_node(node)

  return _render
