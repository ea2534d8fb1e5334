"""
moonshaper Package.

Source transformation tools for Lua: a literal-preserving model of number
literals and pluggable strategies for resolving and rewriting ``require``
calls when files move.

Usage
-----

Number Literals
^^^^^^^^^^^^^^^

.. code-block:: python

    from moonshaper import parse_number

    number = parse_number("0x12p4")
    number.compute_value()  # 288.0
    number.set_uppercase(True)
    number.to_text()  # "0X12P4"

Require Rewriting
^^^^^^^^^^^^^^^^^

.. code-block:: python

    from pathlib import Path
    from moonshaper import RuntimeConfig
    from moonshaper.rules import RuleContext

    config = RuntimeConfig(require_mode="path")
    pipeline = config.build_pipeline(relocations={Path("/src/a.lua"): Path("/src/lib/a.lua")})
    block = pipeline.run(block, RuleContext(Path("/src/main.lua")))
"""

from moonshaper.config import RuntimeConfig
from moonshaper.nodes.number import (
  DecimalNumber,
  HexNumber,
  NumberExpression,
  NumberParsingError,
  compute_value,
  parse_number,
)

__version__ = "0.0.1"

__all__ = [
  "DecimalNumber",
  "HexNumber",
  "NumberExpression",
  "NumberParsingError",
  "RuntimeConfig",
  "__version__",
  "compute_value",
  "parse_number",
]
