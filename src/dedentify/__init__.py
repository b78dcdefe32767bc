"""
dedentify Package.

Strips incidental indentation from multi-line string templates marked with
``dedent(...)`` or ``dedent[...]``, rewriting Python source with LibCST so the
emitted literal carries only the intended indentation.

Usage
-----

Source Rewrite
^^^^^^^^^^^^^^

.. code-block:: python

    import dedentify

    code = "x = dedent('''\\n    a\\n      b\\n    ''')"
    print(dedentify.transform(code))
    # x = '''a
    #   b'''

Advanced Usage (Engine)
^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from dedentify import DedentConfig, DedentEngine

    engine = DedentEngine(DedentConfig(tag_name=["md", "sql"], keep_function_call=True))
    res = engine.run(source)

    if res.success:
        print(res.code)
    else:
        print(f"Errors: {res.errors}")

Runtime Marker
^^^^^^^^^^^^^^

.. code-block:: python

    from dedentify import dedent

    text = dedent('''
        hello
        ''')
"""

from typing import Any, Optional

from dedentify.config import DedentConfig
from dedentify.core.conversion_result import ConversionResult
from dedentify.core.engine import DedentEngine, transform_file
from dedentify.core.rewriter import DedentRewriter, use_dedent_plugin
from dedentify.core.segments import Segment
from dedentify.runtime import Dedent, dedent

__version__ = "0.1.0"


def transform(code: str, config: Optional[DedentConfig] = None, **options: Any) -> str:
  """
  Dedents every marked template in a string of Python code.

  Args:
      code (str): The source code to rewrite.
      config (DedentConfig, optional): Full configuration; `options` are ignored if given.
      **options: Configuration options (e.g. ``tag_name="md"``, ``trimLeft=False``).

  Returns:
      str: The rewritten source code.

  Raises:
      ValueError: If the code cannot be parsed.
  """
  engine = DedentEngine(config or DedentConfig.from_options(options))
  result = engine.run(code)

  if not result.success:
    error_msg = "\n".join(result.errors)
    raise ValueError(f"Dedent failed:\n{error_msg}")

  return result.code


__all__ = [
  "ConversionResult",
  "Dedent",
  "DedentConfig",
  "DedentEngine",
  "DedentRewriter",
  "Segment",
  "dedent",
  "transform",
  "transform_file",
  "use_dedent_plugin",
  "__version__",
]
