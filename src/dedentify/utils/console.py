"""
Console and Logging Helpers.

User-facing messages (file written, nothing to do, parse failure) go through the
``dedentify`` logger and are rendered by a `rich` handler. The logger does not
propagate, so applications embedding the rewriter keep their own root logging.

The Rich Console is reached through ``console``, a proxy whose backend can be
replaced with `set_console` (e.g. by a recording console in tests). The handler
follows the swap.
"""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

# Between INFO (20) and WARNING (30).
SUCCESS_LEVEL_NUM = 25
logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")

LOGGER_NAME = "dedentify"

_THEME = Theme(
  {
    "logging.level.success": "green",
    "path": "bold blue",
  }
)

_ICONS = {
  logging.INFO: "ℹ️ ",
  SUCCESS_LEVEL_NUM: "✅",
  logging.WARNING: "⚠️ ",
  logging.ERROR: "❌",
}


def _new_console() -> Console:
  return Console(theme=_THEME)


class _ConsoleProxy:
  """
  Stable handle to the active `rich.console.Console`.

  Attribute access is delegated to the backend, so ``console.print(...)`` and
  ``console.width`` behave like the real console.
  """

  def __init__(self) -> None:
    self._backend = _new_console()
    self._handler = None
    self._attach_handler()

  @property
  def backend(self) -> Console:
    return self._backend

  def swap(self, backend: Console) -> None:
    self._backend = backend
    self._attach_handler()

  def _attach_handler(self) -> None:
    logger = logging.getLogger(LOGGER_NAME)
    if self._handler is not None:
      logger.removeHandler(self._handler)

    self._handler = RichHandler(
      console=self._backend,
      show_time=False,
      show_path=False,
      markup=True,
      rich_tracebacks=True,
    )
    logger.addHandler(self._handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False

  def __getattr__(self, name: str) -> Any:
    return getattr(self._backend, name)


console = _ConsoleProxy()


def set_console(new_console: Console) -> None:
  """
  Sends console output and dedentify log records to another Rich console.

  Args:
      new_console (Console): The console to use from now on.
  """
  console.swap(new_console)


def reset_console() -> None:
  """Returns to a fresh console writing to standard output."""
  console.swap(_new_console())


def get_console() -> Console:
  """
  Returns the active console backend.

  Returns:
      Console: The Rich Console currently behind ``console``.
  """
  return console.backend


def _emit(level: int, msg: str) -> None:
  logging.getLogger(LOGGER_NAME).log(level, f"{_ICONS[level]} {msg}", extra={"markup": True})


def log_info(msg: str) -> None:
  """
  Logs an informational message.

  Args:
      msg (str): Message text. Rich markup such as ``[path]`` is allowed.
  """
  _emit(logging.INFO, msg)


def log_success(msg: str) -> None:
  """Logs a completed file rewrite at the SUCCESS level."""
  _emit(SUCCESS_LEVEL_NUM, msg)


def log_warning(msg: str) -> None:
  _emit(logging.WARNING, msg)


def log_error(msg: str) -> None:
  """
  Logs a failure. Callers escape untrusted text with `rich.markup.escape`.

  Args:
      msg (str): Message text.
  """
  _emit(logging.ERROR, msg)
