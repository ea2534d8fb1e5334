"""
Enumerations for moonshaper.

This module defines the enumerations shared by the literal model, the
require resolution strategies and the configuration layer.
"""

from enum import Enum


class NumberErrorKind(str, Enum):
  """
  Categories of numeric literal parse failures.
  """

  INVALID_DECIMAL_NUMBER = "invalid_decimal_number"
  INVALID_DECIMAL_EXPONENT = "invalid_decimal_exponent"
  INVALID_HEXADECIMAL_NUMBER = "invalid_hexadecimal_number"
  INVALID_HEXADECIMAL_EXPONENT = "invalid_hexadecimal_exponent"


class RequireModeName(str, Enum):
  """
  Names of the registered require path locators.
  Used as the discriminator of the `require_mode` configuration.
  """

  PATH = "path"  # require("./sibling")
  MODULE = "module"  # require("pkg.sub")


class LiteralCase(str, Enum):
  """Target case for exponent and hexadecimal markers."""

  LOWER = "lower"
  UPPER = "upper"
