"""
Require Path Rewriting Rule.

Keeps module-loading calls pointing at the right files when sources move:

- the file being processed is written somewhere else (``context.output_path``);
- required modules are relocated (the ``relocations`` mapping, old → new).

Each call is resolved from the file's current location with the configured
locator, mapped through ``relocations``, and rewritten from the file's output
location. Calls the locator does not understand stay untouched.
"""

import logging
from pathlib import Path
from typing import Dict, Optional

from moonshaper.nodes.base import Block, LuaNode, transform
from moonshaper.rules.context import RuleContext
from moonshaper.rules.interface import Rule
from moonshaper.rules.require.descriptor import DEFAULT_REQUIRE_IDENTIFIER, RequireCall, is_require_call
from moonshaper.rules.require.errors import RequireResolutionError
from moonshaper.rules.require.filesystem import normalize_path
from moonshaper.rules.require.locator import RequireLocator
from moonshaper.utils.console import log_warning

logger = logging.getLogger(__name__)


class RequirePathRule(Rule):
  """
  Rewrites require arguments after files are moved.

  Attributes:
      locator (RequireLocator): The active resolution strategy.
      relocations (Dict[Path, Path]): Module file moves, keyed by old path.
      identifier (str): Name of the module loading function.
  """

  def __init__(
    self,
    locator: RequireLocator,
    relocations: Optional[Dict[Path, Path]] = None,
    identifier: str = DEFAULT_REQUIRE_IDENTIFIER,
  ) -> None:
    self.locator = locator
    self.relocations = {normalize_path(old): normalize_path(new) for old, new in (relocations or {}).items()}
    self.identifier = identifier

  def process(self, block: Block, context: RuleContext) -> Block:
    if not self.relocations and not context.is_relocated:
      return block

    def visit(node: LuaNode) -> LuaNode:
      if not is_require_call(node, self.identifier):
        return node
      return self._rewrite(RequireCall(node, context.current_path), context) or node

    return transform(block, visit)

  def _rewrite(self, require: RequireCall, context: RuleContext) -> Optional[LuaNode]:
    try:
      target = self.locator.locate_call(require)
    except RequireResolutionError as e:
      self._warn(context, str(e))
      return None

    if target is None:
      logger.debug(f"Leaving `{require.call.to_text()}` unchanged in {context.current_path}")
      return None

    new_target = self.relocations.get(target, target)
    if new_target == target and not context.is_relocated:
      return None

    rewritten = self.locator.rewrite_call(require.with_source(context.output_path), new_target)
    if rewritten is None:
      self._warn(
        context,
        f"unable to rewrite `{require.call.to_text()}` in {context.current_path} to load {new_target}",
      )
      return None

    logger.debug(f"Rewrote `{require.call.to_text()}` to `{rewritten.to_text()}`")
    return rewritten

  def _warn(self, context: RuleContext, message: str) -> None:
    context.warn(message)
    log_warning(message)
