"""
Interface definition for Rules.

This module defines the abstract base class that all rewrite rules must
implement to be compatible with the ``RulePipeline``.
"""

from abc import ABC, abstractmethod

from moonshaper.nodes.base import Block
from moonshaper.rules.context import RuleContext


class Rule(ABC):
  """
  Abstract contract for a transformation applied to the tree of one file.
  """

  @abstractmethod
  def process(self, block: Block, context: RuleContext) -> Block:
    """
    Executes the rule on the given tree.

    Args:
        block: The file body to transform.
        context: The per-file context.

    Returns:
        The transformed block.
    """
    pass
