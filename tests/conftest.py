"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Console capture for CLI output assertions.
"""

import io
import sys
from pathlib import Path

import pytest
from rich.console import Console

# Add src to path so we can import 'moonshaper' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from moonshaper.utils.console import reset_console, set_console  # noqa: E402


@pytest.fixture
def captured_console():
  """
  Routes console printing and logging into an in-memory recorder.

  Yields:
      Console: The recording console. Use ``export_text()`` to read it.
  """
  recorder = Console(file=io.StringIO(), width=300, record=True)
  set_console(recorder)
  yield recorder
  reset_console()
