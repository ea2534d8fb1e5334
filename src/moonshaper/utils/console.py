"""
Central Logging and Console Utilities.

Output goes through the standard `logging` library, rendered by `rich`.
The Rich console sits behind a proxy so the destination (terminal or an
in-memory capture used by tests) can be swapped with `set_console` while
modules keep importing the same `console` object.

Verbosity follows the CLI ``-v`` counter: warnings only by default, then
info, then debug traces from the library loggers.

Attributes:
    console (_ConsoleProxy): A global, stable reference to the active Rich Console.
"""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

_VERBOSITY_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]

_THEME = Theme(
  {
    "info": "dim cyan",
    "warning": "yellow",
    "error": "bold red",
    "path": "bold blue",
    "code": "bold magenta",
  }
)


class _ConsoleProxy:
  """
  Forwards printing to a swappable `rich.console.Console` backend and keeps
  the root logging handler bound to that backend.

  Attributes:
      _backend (Console): The active Rich Console instance.
      _level (int): The root logger level currently applied.
  """

  def __init__(self) -> None:
    self._backend: Console = Console(theme=_THEME)
    self._level = logging.WARNING
    self._configure_logging()

  def set_backend(self, new_console: Console) -> None:
    self._backend = new_console
    self._configure_logging()

  def reset(self) -> None:
    self._backend = Console(theme=_THEME)
    self._level = logging.WARNING
    self._configure_logging()

  def set_level(self, level: int) -> None:
    self._level = level
    logging.getLogger().setLevel(level)

  @property
  def backend(self) -> Console:
    return self._backend

  def _configure_logging(self) -> None:
    """
    Replaces any RichHandler on the root logger with one writing to the
    current backend.
    """
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
      if isinstance(handler, RichHandler):
        root_logger.removeHandler(handler)

    rich_handler = RichHandler(
      console=self._backend,
      show_time=False,
      omit_repeated_times=False,
      show_path=False,
      markup=True,
      rich_tracebacks=True,
    )

    root_logger.setLevel(self._level)
    root_logger.addHandler(rich_handler)

  def print(self, *args: Any, **kwargs: Any) -> None:
    self._backend.print(*args, **kwargs)

  def export_text(self, **kwargs: Any) -> str:
    return self._backend.export_text(**kwargs)

  def __getattr__(self, name: str) -> Any:
    return getattr(self._backend, name)


console = _ConsoleProxy()


def set_console(new_console: Console) -> None:
  """
  Injects a specific console instance for both printing and logging.

  Args:
      new_console (Console): The configured Rich console to use globally.
  """
  console.set_backend(new_console)


def reset_console() -> None:
  """Resets logging and console to standard output at the default level."""
  console.reset()


def set_verbosity(count: int) -> None:
  """
  Maps a ``-v`` repetition count to a logging level.

  Args:
      count (int): 0 for warnings, 1 for info, 2 or more for debug.
  """
  index = min(max(count, 0), len(_VERBOSITY_LEVELS) - 1)
  console.set_level(_VERBOSITY_LEVELS[index])


def log_info(msg: str) -> None:
  """
  Logs an informational message via standard logging.

  Args:
      msg (str): The message content. Can include rich markup like [bold].
  """
  logging.info(f"ℹ️  {msg}", extra={"markup": True})


def log_warning(msg: str) -> None:
  """
  Logs a warning message via standard logging.

  Args:
      msg (str): The message content.
  """
  logging.warning(f"⚠️  {msg}", extra={"markup": False})


def log_error(msg: str) -> None:
  logging.error(f"❌ {msg}", extra={"markup": False})
