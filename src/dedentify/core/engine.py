"""
Orchestration Engine for Dedent Rewrites.

This module provides the `DedentEngine`, the driver that turns Python source
into Python source with every marked template dedented.

The Engine pipeline consists of:

1.  **Parsing**: source code -> LibCST Module. Syntax errors produce a failed
    `ConversionResult` carrying the original code.
2.  **Dedent Rewrite**: a single `DedentRewriter` traversal.
3.  **Output Generation**: the Module is rendered back to source, untouched
    regions byte-for-byte identical.
"""

from pathlib import Path
from typing import List, Optional

import libcst as cst
from rich.markup import escape

from dedentify.config import DedentConfig
from dedentify.core.conversion_result import ConversionResult
from dedentify.core.rewriter import DedentRewriter
from dedentify.core.tracer import TraceLogger
from dedentify.utils.console import log_error, log_info, log_success


class DedentEngine:
  """
  The main compilation unit.

  Holds the configuration; each `run` owns a fresh `TraceLogger` and rewriter,
  so one engine may serve many files.
  """

  def __init__(self, config: Optional[DedentConfig] = None) -> None:
    """
    Initializes the Engine.

    Args:
        config (DedentConfig, optional): Match configuration. Defaults to `DedentConfig()`.
    """
    self.config = config or DedentConfig()

  def parse(self, code: str) -> cst.Module:
    """
    Parses source string into a LibCST Module.

    Args:
        code (str): Python source code.

    Returns:
        cst.Module: The parsed syntax tree.

    Raises:
        libcst.ParserSyntaxError: If the input code is invalid Python.
    """
    return cst.parse_module(code)

  def to_source(self, tree: cst.Module) -> str:
    """
    Converts CST back to source string.

    Args:
        tree (cst.Module): The modified syntax tree.

    Returns:
        str: Generated Python code.
    """
    return tree.code

  def run(self, code: str) -> ConversionResult:
    """
    Executes the full dedent pipeline.

    Args:
        code (str): The input source string.

    Returns:
        ConversionResult: Object containing transformed code and error logs.
    """
    tracer = TraceLogger()
    rewriter = DedentRewriter(self.config, tracer=tracer)
    errors: List[str] = []
    tree: Optional[cst.Module] = None

    with tracer.phase("Dedent Pipeline", f"markers: {sorted(self.config.names)}"):
      with tracer.phase("Parsing", "Raw Source -> CST"):
        try:
          tree = self.parse(code)
        except cst.ParserSyntaxError as e:
          tracer.log_warning(f"Parse Error: {e}")
          errors.append(f"Parse Error: {e}")

      if tree is not None:
        with tracer.phase("Dedent Rewrite", "Visitor Traversal"):
          tree = tree.visit(rewriter)

    return ConversionResult(
      code=self.to_source(tree) if tree is not None else code,
      errors=errors,
      success=not errors,
      rewrites=rewriter.rewrites,
      trace_events=tracer.export(),
    )


def transform_file(
  input_path: Path,
  output_path: Optional[Path] = None,
  config: Optional[DedentConfig] = None,
) -> ConversionResult:
  """
  Dedents marked templates in a source file.

  If no config is given, it is loaded from the nearest pyproject.toml.
  The result is written to `output_path`, or back to `input_path` when the
  run changed something. Failed runs write nothing.

  Args:
      input_path: Source file path.
      output_path: Destination file path. Defaults to rewriting in place.
      config: Configuration object.

  Returns:
      ConversionResult: Result object containing status and code.
  """
  if config is None:
    config = DedentConfig.load(search_path=input_path.parent)

  code = input_path.read_text(encoding="utf-8")
  result = DedentEngine(config).run(code)

  if not result.success:
    log_error(f"Failed to transform [path]{input_path}[/path]: {escape('; '.join(result.errors))}")
    return result

  destination = output_path or input_path
  if output_path is None and not result.changed:
    log_info(f"No marked templates in [path]{input_path}[/path]")
    return result

  destination.parent.mkdir(parents=True, exist_ok=True)
  destination.write_text(result.code, encoding="utf-8")
  log_success(f"Dedented {result.rewrites} template(s): [path]{input_path}[/path] -> [path]{destination}[/path]")
  return result
