"""
Require Resolution Errors.

A locator returns ``None`` when a call is simply not a reference it
understands. The exceptions below are reserved for references that look like
module paths but cannot be resolved safely. The rule pipeline turns them into
per-call warnings.
"""

from pathlib import Path


class RequireResolutionError(Exception):
  """
  Base error for a module reference that could not be resolved.

  Attributes:
      reference (str): The require argument as written.
      source (Path): The file containing the call.
      reason (str): Human-readable explanation.
  """

  def __init__(self, reference: str, source: Path, reason: str):
    self.reference = reference
    self.source = source
    self.reason = reason
    super().__init__(f"unable to resolve require `{reference}` from {source}: {reason}")


class UnknownRequireSourceError(RequireResolutionError):
  """The reference starts with an alias that is not configured."""


class RequireEscapeError(RequireResolutionError):
  """The reference resolves outside of the configured root directory."""
