"""
Tests for Number Marker Case Toggling.

Verifies:
1.  Decimal literals without an exponent have no marker to change.
2.  Hexadecimal prefixes always follow the requested case.
3.  Values never change.
"""

import pytest

from moonshaper.nodes.base import StringExpression
from moonshaper.nodes.number import DecimalNumber, HexNumber, parse_number, set_uppercase


def test_decimal_without_exponent_is_left_alone():
  number = DecimalNumber(1.0)
  number.set_uppercase(True)
  number.set_uppercase(False)

  assert number.is_uppercase() is None
  assert number == DecimalNumber(1.0)


def test_decimal_exponent_case_change():
  number = DecimalNumber(1.0).with_exponent(2, True)

  number.set_uppercase(False)

  assert number.is_uppercase() is False
  assert number.get_exponent() == 2
  assert number.get_raw_float() == 1.0


def test_hex_prefix_case_change_without_exponent():
  number = HexNumber(1, True)

  number.set_uppercase(False)

  assert number.is_x_uppercase() is False
  assert number.is_exponent_uppercase() is None


def test_hex_prefix_and_exponent_change_together():
  number = parse_number("0x12p4")

  set_uppercase(number, True)

  assert number.is_x_uppercase() is True
  assert number.is_exponent_uppercase() is True
  assert number.compute_value() == 288.0
  assert number.to_text() == "0X12P4"


@pytest.mark.parametrize("text", ["1E5", "0XABP3", "2.5e-3", "0x1f"])
def test_case_change_keeps_value(text):
  number = parse_number(text)
  before = number.compute_value()

  set_uppercase(number, False)

  assert number.compute_value() == before


def test_set_uppercase_rejects_other_nodes():
  with pytest.raises(TypeError):
    set_uppercase(StringExpression("1"), True)
