"""
Module Reference Descriptors.

A ``RequireCall`` pairs a module-loading call node with the path of the file
it was found in. It is a view over the tree used during one rewrite pass.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from moonshaper.nodes.base import FunctionCall, IdentifierExpression, LuaNode, StringExpression, walk

DEFAULT_REQUIRE_IDENTIFIER = "require"


@dataclass(frozen=True)
class RequireCall:
  """A module-loading call site and the file that holds it."""

  call: FunctionCall
  source: Path

  @property
  def literal_argument(self) -> Optional[str]:
    """
    The first argument when it is a string literal.

    Returns:
        Optional[str]: The string content, or None for computed arguments.
    """
    values = self.call.argument_values()
    if values and isinstance(values[0], StringExpression):
      return values[0].value
    return None

  def with_source(self, source: Path) -> "RequireCall":
    return RequireCall(self.call, source)


def is_require_call(node: LuaNode, identifier: str = DEFAULT_REQUIRE_IDENTIFIER) -> bool:
  """
  Checks whether `node` is a call to the module loading function.

  Args:
      node: Any tree node.
      identifier: Name of the loader function.

  Returns:
      bool: True for ``identifier(...)`` calls with at least one argument.
  """
  return (
    isinstance(node, FunctionCall)
    and isinstance(node.prefix, IdentifierExpression)
    and node.prefix.name == identifier
    and len(node.argument_values()) > 0
  )


def find_require_calls(
  root: LuaNode, source: Path, identifier: str = DEFAULT_REQUIRE_IDENTIFIER
) -> List[RequireCall]:
  """
  Collects every module-loading call below `root`.

  Args:
      root: Tree to search, usually a file ``Block``.
      source: Path of the file the tree was parsed from.
      identifier: Name of the loader function.

  Returns:
      List[RequireCall]: Descriptors in source order.
  """
  return [RequireCall(node, source) for node in walk(root) if is_require_call(node, identifier)]
