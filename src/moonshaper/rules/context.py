"""
Rule Context Module.

This module provides the `RuleContext` container holding the per-file state
shared by the rules of one pipeline run.
"""

from pathlib import Path
from typing import List, Optional


class RuleContext:
  """
  Shared state for processing a single file.
  """

  def __init__(self, current_path: Path, output_path: Optional[Path] = None):
    """
    Initializes the context.

    Args:
        current_path: Where the file being processed lives now.
        output_path: Where the processed file will be written. Defaults to
            `current_path` when the file is rewritten in place.
    """
    self.current_path = current_path
    self.output_path = output_path if output_path is not None else current_path

    # Non-fatal diagnostics collected while rules run
    self.warnings: List[str] = []

  @property
  def is_relocated(self) -> bool:
    return self.output_path != self.current_path

  def warn(self, message: str) -> None:
    self.warnings.append(message)
