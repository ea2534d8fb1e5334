"""
Rewrite rules and the pipeline that runs them.
"""

from moonshaper.rules.context import RuleContext
from moonshaper.rules.interface import Rule
from moonshaper.rules.number_case import NumberCaseRule
from moonshaper.rules.pipeline import RulePipeline
from moonshaper.rules.require import RequirePathRule

__all__ = [
  "NumberCaseRule",
  "RequirePathRule",
  "Rule",
  "RuleContext",
  "RulePipeline",
]
