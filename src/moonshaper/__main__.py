"""
Entry point for module execution (``python -m moonshaper``).

This module delegates execution to the CLI handler in ``moonshaper.cli.__main__``.
"""

import sys
from moonshaper.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
