"""
Lua Syntax Tree Nodes.

This module defines the data structures the rewrite rules operate on. Parsing
raw Lua text into these nodes is the job of an external front end; here the
tree only needs to carry statements, module-loading calls and literals, and to
render itself back to source text.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields, replace
from typing import Callable, Iterator, List, Union


@dataclass
class LuaNode(ABC):
  """Abstract base class for all Lua tree nodes."""

  @abstractmethod
  def to_text(self) -> str:
    pass

  def children(self) -> List["LuaNode"]:
    """
    Collects the direct child nodes in field order.

    Returns:
        List[LuaNode]: Nodes held directly or inside list fields.
    """
    found: List[LuaNode] = []
    for f in fields(self):
      value = getattr(self, f.name)
      if isinstance(value, LuaNode):
        found.append(value)
      elif isinstance(value, list):
        found.extend(item for item in value if isinstance(item, LuaNode))
    return found


_STRING_ESCAPES = {
  "\\": "\\\\",
  '"': '\\"',
  "\n": "\\n",
  "\r": "\\r",
  "\0": "\\0",
}


@dataclass
class IdentifierExpression(LuaNode):
  """A bare name such as `require` or `math`."""

  name: str

  def to_text(self) -> str:
    return self.name


@dataclass
class StringExpression(LuaNode):
  """A string literal. `value` holds the unescaped content."""

  value: str

  def to_text(self) -> str:
    escaped = "".join(_STRING_ESCAPES.get(char, char) for char in self.value)
    return f'"{escaped}"'


@dataclass
class TupleArguments(LuaNode):
  """Parenthesised call arguments: `f(a, b)`."""

  values: List[LuaNode] = field(default_factory=list)

  def to_text(self) -> str:
    return "(" + ", ".join(value.to_text() for value in self.values) + ")"


@dataclass
class StringArguments(LuaNode):
  """Single string call argument without parentheses: `f "a"`."""

  value: StringExpression

  def to_text(self) -> str:
    return self.value.to_text()


Arguments = Union[TupleArguments, StringArguments]


@dataclass
class FunctionCall(LuaNode):
  """A call expression, also usable as a statement."""

  prefix: LuaNode
  arguments: Arguments = field(default_factory=TupleArguments)

  def to_text(self) -> str:
    return self.prefix.to_text() + self.arguments.to_text()

  def argument_values(self) -> List[LuaNode]:
    """
    Returns the call arguments regardless of the call syntax used.

    Returns:
        List[LuaNode]: The argument expressions in order.
    """
    if isinstance(self.arguments, StringArguments):
      return [self.arguments.value]
    return list(self.arguments.values)

  def with_first_string(self, value: str) -> "FunctionCall":
    """
    Builds a copy of this call whose first argument is the string `value`.

    The original argument syntax (parenthesised or bare string) is kept.

    Args:
        value: New content of the first argument.

    Returns:
        FunctionCall: The replacement call node.
    """
    new_string = StringExpression(value)
    if isinstance(self.arguments, StringArguments):
      return replace(self, arguments=StringArguments(new_string))
    rest = list(self.arguments.values[1:])
    return replace(self, arguments=TupleArguments([new_string, *rest]))


@dataclass
class LocalAssignStatement(LuaNode):
  """`local a, b = x, y`"""

  variables: List[str]
  values: List[LuaNode] = field(default_factory=list)

  def to_text(self) -> str:
    text = "local " + ", ".join(self.variables)
    if self.values:
      text += " = " + ", ".join(value.to_text() for value in self.values)
    return text


@dataclass
class ReturnStatement(LuaNode):
  """`return x, y`"""

  values: List[LuaNode] = field(default_factory=list)

  def to_text(self) -> str:
    if not self.values:
      return "return"
    return "return " + ", ".join(value.to_text() for value in self.values)


@dataclass
class Block(LuaNode):
  """A sequence of statements, i.e. the body of a file."""

  statements: List[LuaNode] = field(default_factory=list)

  def to_text(self) -> str:
    return "\n".join(statement.to_text() for statement in self.statements)


def walk(node: LuaNode) -> Iterator[LuaNode]:
  """
  Iterates over `node` and all its descendants, parents first.

  Args:
      node: Root of the traversal.

  Yields:
      LuaNode: Each node of the tree.
  """
  yield node
  for child in node.children():
    yield from walk(child)


def transform(node: LuaNode, visitor: Callable[[LuaNode], LuaNode]) -> LuaNode:
  """
  Rebuilds a tree bottom-up, letting `visitor` replace each node.

  Children are transformed before their parent so the visitor always
  receives a node whose subtree has already been processed.

  Args:
      node: Root of the tree to rebuild.
      visitor: Callable returning the node to keep in place of its argument.

  Returns:
      LuaNode: The rebuilt root.
  """
  changes = {}
  for f in fields(node):
    value = getattr(node, f.name)
    if isinstance(value, LuaNode):
      new_value = transform(value, visitor)
      if new_value is not value:
        changes[f.name] = new_value
    elif isinstance(value, list) and any(isinstance(item, LuaNode) for item in value):
      new_items = [transform(item, visitor) if isinstance(item, LuaNode) else item for item in value]
      if any(new is not old for new, old in zip(new_items, value)):
        changes[f.name] = new_items

  rebuilt = replace(node, **changes) if changes else node
  return visitor(rebuilt)
