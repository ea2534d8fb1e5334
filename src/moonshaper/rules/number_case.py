"""
Number Marker Case Rule.

Normalises the case of hexadecimal prefixes (``0x``/``0X``) and exponent
markers (``e``/``E``, ``p``/``P``) in every number literal of a file.
"""

from moonshaper.nodes.base import Block, walk
from moonshaper.nodes.number import DecimalNumber, HexNumber, set_uppercase
from moonshaper.rules.context import RuleContext
from moonshaper.rules.interface import Rule


class NumberCaseRule(Rule):
  """
  Rewrites literal markers to one case. Values are never changed.
  """

  def __init__(self, uppercase: bool = False) -> None:
    self.uppercase = uppercase

  def process(self, block: Block, context: RuleContext) -> Block:
    for node in walk(block):
      if isinstance(node, (DecimalNumber, HexNumber)):
        set_uppercase(node, self.uppercase)
    return block
