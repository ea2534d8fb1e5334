"""
Numeric Literal Model.

Lua number literals come in two shapes which are kept apart so that every
source-visible detail survives a rewrite:

- ``DecimalNumber``: ``123``, ``.5``, ``10.e8``, ``1E-3``.
- ``HexNumber``: ``0x1F``, ``0XABp3``. Hexadecimal exponents use ``p`` (the
  letter ``e`` is a hex digit) and are always unsigned.

``NumberExpression`` is the closed union of the two. Literals are parsed with
``parse_number`` which raises ``NumberParsingError`` on malformed text.
"""

import math
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple, Union

from moonshaper.enums import NumberErrorKind
from moonshaper.nodes.base import LuaNode

I64_MIN = -(2**63)
I64_MAX = 2**63 - 1
U32_MAX = 2**32 - 1
U64_MAX = 2**64 - 1

# Largest binary exponent a finite double can carry.
_FLOAT_MAX_BITS = 1024

_DECIMAL_MANTISSA = re.compile(r"[0-9]+\.?[0-9]*|\.[0-9]+")
_DECIMAL_EXPONENT = re.compile(r"[+-]?[0-9]+")
_HEX_DIGITS = re.compile(r"[0-9a-fA-F]+")
_UNSIGNED_DIGITS = re.compile(r"[0-9]+")
_DECIMAL_MARKER = re.compile(r"[eE]")
_HEX_MARKER = re.compile(r"[pP]")


class NumberParsingError(ValueError):
  """
  Raised when a literal does not follow the Lua number grammar.

  Attributes:
      kind (NumberErrorKind): Which part of the literal was rejected.
      text (Optional[str]): The offending literal, when known.
  """

  MESSAGES = {
    NumberErrorKind.INVALID_DECIMAL_NUMBER: "could not parse decimal number",
    NumberErrorKind.INVALID_DECIMAL_EXPONENT: "could not parse decimal exponent",
    NumberErrorKind.INVALID_HEXADECIMAL_NUMBER: "could not parse hexadecimal number",
    NumberErrorKind.INVALID_HEXADECIMAL_EXPONENT: "could not parse hexadecimal exponent",
  }

  def __init__(self, kind: NumberErrorKind, text: Optional[str] = None):
    self.kind = kind
    self.text = text
    message = self.MESSAGES[kind]
    if text is not None:
      message = f"{message} `{text}`"
    super().__init__(message)


@dataclass
class DecimalNumber(LuaNode):
  """
  A base-10 literal.

  Attributes:
      value: The mantissa as written, fractional part included.
      exponent: ``(exponent, is_uppercase)`` when the literal has an exponent.
          The flag records ``E`` versus ``e``.
  """

  value: float
  exponent: Optional[Tuple[int, bool]] = None

  def with_exponent(self, exponent: int, is_uppercase: bool) -> "DecimalNumber":
    self.exponent = (exponent, is_uppercase)
    return self

  def set_uppercase(self, is_uppercase: bool) -> None:
    """
    Changes the exponent marker case. Without an exponent there is no marker
    to change, so this does nothing.
    """
    if self.exponent is not None:
      self.exponent = (self.exponent[0], is_uppercase)

  def get_raw_float(self) -> float:
    return self.value

  def get_exponent(self) -> Optional[int]:
    return self.exponent[0] if self.exponent is not None else None

  def is_uppercase(self) -> Optional[bool]:
    return self.exponent[1] if self.exponent is not None else None

  def compute_value(self) -> float:
    """
    Evaluates ``value * 10^exponent``.

    The scaling is done on the decimal digits of the mantissa and converted
    once, so the result is the correctly rounded double of the written
    literal. Out-of-range results saturate to ``inf`` or ``0.0``. This can
    differ in the last bit from ``value * 10.0 ** exponent``, which rounds twice.

    Returns:
        float: The numeric value of the literal.
    """
    if self.exponent is None:
      return self.value
    if not math.isfinite(self.value) or self.value == 0.0:
      return self.value

    sign, digits, digits_exponent = Decimal(repr(self.value)).as_tuple()
    mantissa = "".join(str(digit) for digit in digits)
    prefix = "-" if sign else ""
    return float(f"{prefix}{mantissa}e{digits_exponent + self.exponent[0]}")

  def to_text(self) -> str:
    text = _format_float(self.value)
    if self.exponent is not None:
      exponent, is_uppercase = self.exponent
      text += ("E" if is_uppercase else "e") + str(exponent)
    return text


@dataclass
class HexNumber(LuaNode):
  """
  A base-16 literal.

  Attributes:
      integer: The unsigned mantissa.
      uppercase_x: Whether the prefix was written ``0X``.
      exponent: ``(exponent, is_uppercase)`` for binary exponents (``p``/``P``).
  """

  integer: int
  uppercase_x: bool = False
  exponent: Optional[Tuple[int, bool]] = None

  def with_exponent(self, exponent: int, is_uppercase: bool) -> "HexNumber":
    self.exponent = (exponent, is_uppercase)
    return self

  def set_uppercase(self, is_uppercase: bool) -> None:
    """
    Changes the prefix case and, when present, the exponent marker case.
    """
    self.uppercase_x = is_uppercase
    if self.exponent is not None:
      self.exponent = (self.exponent[0], is_uppercase)

  def is_x_uppercase(self) -> bool:
    return self.uppercase_x

  def is_exponent_uppercase(self) -> Optional[bool]:
    return self.exponent[1] if self.exponent is not None else None

  def get_raw_integer(self) -> int:
    return self.integer

  def get_exponent(self) -> Optional[int]:
    return self.exponent[0] if self.exponent is not None else None

  def compute_value(self) -> float:
    """
    Evaluates ``integer * 2^exponent``.

    The product is formed exactly as an integer and converted to float once.
    Values beyond the double range saturate to ``inf``; the bit length check
    keeps huge exponents from materialising enormous integers.

    Returns:
        float: The numeric value of the literal.
    """
    if self.exponent is None:
      return float(self.integer)
    if self.integer == 0:
      return 0.0

    exponent = self.exponent[0]
    if self.integer.bit_length() + exponent > _FLOAT_MAX_BITS:
      return math.inf
    try:
      return float(self.integer << exponent)
    except OverflowError:
      return math.inf

  def to_text(self) -> str:
    text = ("0X" if self.uppercase_x else "0x") + format(self.integer, "x")
    if self.exponent is not None:
      exponent, is_uppercase = self.exponent
      text += ("P" if is_uppercase else "p") + str(exponent)
    return text


NumberExpression = Union[DecimalNumber, HexNumber]


def parse_number(text: str) -> NumberExpression:
  """
  Parses the text of a Lua number literal.

  Args:
      text: Literal source such as ``"1e10"`` or ``"0xFFp2"``.

  Returns:
      NumberExpression: A ``HexNumber`` for ``0x``/``0X`` prefixed text,
      a ``DecimalNumber`` otherwise.

  Raises:
      NumberParsingError: If the mantissa or the exponent is malformed or
          out of range.
  """
  if text.startswith(("0x", "0X")):
    return _parse_hex(text)
  return _parse_decimal(text)


def compute_value(number: NumberExpression) -> float:
  """Returns the numeric value of either literal variant."""
  if isinstance(number, (DecimalNumber, HexNumber)):
    return number.compute_value()
  raise TypeError(f"Not a number literal: {type(number).__name__}")


def set_uppercase(number: NumberExpression, is_uppercase: bool) -> None:
  """Sets the marker case of either literal variant in place."""
  if isinstance(number, (DecimalNumber, HexNumber)):
    number.set_uppercase(is_uppercase)
    return
  raise TypeError(f"Not a number literal: {type(number).__name__}")


def _parse_decimal(text: str) -> DecimalNumber:
  marker = _DECIMAL_MARKER.search(text)
  if marker is None:
    return DecimalNumber(_parse_decimal_mantissa(text, text))

  index = marker.start()
  exponent_text = text[index + 1 :]
  if not _DECIMAL_EXPONENT.fullmatch(exponent_text):
    raise NumberParsingError(NumberErrorKind.INVALID_DECIMAL_EXPONENT, text)
  exponent = int(exponent_text)
  if not I64_MIN <= exponent <= I64_MAX:
    raise NumberParsingError(NumberErrorKind.INVALID_DECIMAL_EXPONENT, text)

  mantissa = _parse_decimal_mantissa(text[:index], text)
  return DecimalNumber(mantissa).with_exponent(exponent, marker.group() == "E")


def _parse_decimal_mantissa(mantissa: str, text: str) -> float:
  if not _DECIMAL_MANTISSA.fullmatch(mantissa):
    raise NumberParsingError(NumberErrorKind.INVALID_DECIMAL_NUMBER, text)
  value = float(mantissa)
  # Mantissas beyond the double range could not be rendered back.
  if not math.isfinite(value):
    raise NumberParsingError(NumberErrorKind.INVALID_DECIMAL_NUMBER, text)
  return value


def _parse_hex(text: str) -> HexNumber:
  uppercase_x = text[1] == "X"
  body = text[2:]

  marker = _HEX_MARKER.search(body)
  if marker is None:
    return HexNumber(_parse_hex_integer(body, text), uppercase_x)

  index = marker.start()
  exponent_text = body[index + 1 :]
  # A sign is never valid here, even in front of well-formed digits.
  if not _UNSIGNED_DIGITS.fullmatch(exponent_text):
    raise NumberParsingError(NumberErrorKind.INVALID_HEXADECIMAL_EXPONENT, text)
  exponent = int(exponent_text)
  if exponent > U32_MAX:
    raise NumberParsingError(NumberErrorKind.INVALID_HEXADECIMAL_EXPONENT, text)

  integer = _parse_hex_integer(body[:index], text)
  return HexNumber(integer, uppercase_x).with_exponent(exponent, marker.group() == "P")


def _parse_hex_integer(digits: str, text: str) -> int:
  if not _HEX_DIGITS.fullmatch(digits):
    raise NumberParsingError(NumberErrorKind.INVALID_HEXADECIMAL_NUMBER, text)
  integer = int(digits, 16)
  if integer > U64_MAX:
    raise NumberParsingError(NumberErrorKind.INVALID_HEXADECIMAL_NUMBER, text)
  return integer


def _format_float(value: float) -> str:
  """
  Renders a mantissa without scientific notation, dropping redundant zeros.
  """
  if not math.isfinite(value):
    raise ValueError(f"Cannot render non-finite mantissa: {value!r}")
  text = format(Decimal(repr(value)), "f")
  if "." in text:
    text = text.rstrip("0").rstrip(".")
  if text.startswith("0."):
    text = text[1:]
  return text
