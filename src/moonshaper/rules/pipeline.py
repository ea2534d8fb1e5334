"""
Orchestration logic for executing sequential rules.

This module provides the ``RulePipeline``, which applies a list of ``Rule``
instances in order over a shared ``RuleContext``.
"""

import logging
from typing import List

from moonshaper.nodes.base import Block
from moonshaper.rules.context import RuleContext
from moonshaper.rules.interface import Rule

logger = logging.getLogger(__name__)


class RulePipeline:
  """
  Manages a sequence of rules and executes them in order.
  """

  def __init__(self, rules: List[Rule]) -> None:
    """
    Initializes the pipeline with a list of rules.

    Args:
        rules: Sequenced list of rules to execute.
    """
    self.rules = rules

  def run(self, block: Block, context: RuleContext) -> Block:
    """
    Executes all rules sequentially on the block.

    Args:
        block: The file body to transform.
        context: Per-file state; warnings raised by rules accumulate there.

    Returns:
        The fully transformed block.
    """
    current = block
    for rule in self.rules:
      logger.debug(f"Applying {type(rule).__name__} to {context.current_path}")
      current = rule.process(current, context)

    return current
