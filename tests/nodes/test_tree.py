"""
Tests for Lua Tree Nodes.

Verifies rendering, traversal order and bottom-up rebuilding.
"""

from moonshaper.nodes import (
  Block,
  DecimalNumber,
  FunctionCall,
  HexNumber,
  IdentifierExpression,
  LocalAssignStatement,
  ReturnStatement,
  StringArguments,
  StringExpression,
  TupleArguments,
  transform,
  walk,
)


def _require(path: str) -> FunctionCall:
  return FunctionCall(IdentifierExpression("require"), TupleArguments([StringExpression(path)]))


def test_render_block():
  block = Block(
    [
      LocalAssignStatement(["json"], [_require("./json")]),
      LocalAssignStatement(["mask", "scale"], [HexNumber(255, True), DecimalNumber(1.5).with_exponent(3, False)]),
      FunctionCall(IdentifierExpression("print"), StringArguments(StringExpression('say "hi"\n'))),
      ReturnStatement([IdentifierExpression("json")]),
    ]
  )

  assert block.to_text() == (
    'local json = require("./json")\n'
    "local mask, scale = 0Xff, 1.5e3\n"
    'print"say \\"hi\\"\\n"\n'
    "return json"
  )


def test_render_empty_forms():
  assert LocalAssignStatement(["x"]).to_text() == "local x"
  assert ReturnStatement().to_text() == "return"
  assert FunctionCall(IdentifierExpression("f")).to_text() == "f()"


def test_walk_visits_parents_first():
  call = _require("./a")
  block = Block([LocalAssignStatement(["a"], [call])])

  kinds = [type(node).__name__ for node in walk(block)]

  assert kinds == [
    "Block",
    "LocalAssignStatement",
    "FunctionCall",
    "IdentifierExpression",
    "TupleArguments",
    "StringExpression",
  ]


def test_transform_replaces_nodes_and_keeps_untouched_ones():
  kept = LocalAssignStatement(["b"], [DecimalNumber(2.0)])
  block = Block([LocalAssignStatement(["a"], [StringExpression("old")]), kept])

  def visit(node):
    if isinstance(node, StringExpression):
      return StringExpression("new")
    return node

  result = transform(block, visit)

  assert result.to_text() == 'local a = "new"\nlocal b = 2'
  assert result.statements[1] is kept
  assert block.statements[0].values[0].value == "old"


def test_transform_without_changes_returns_same_tree():
  block = Block([_require("./a")])

  assert transform(block, lambda node: node) is block


def test_with_first_string_keeps_call_syntax():
  string_call = FunctionCall(IdentifierExpression("require"), StringArguments(StringExpression("./a")))
  tuple_call = FunctionCall(
    IdentifierExpression("require"), TupleArguments([StringExpression("./a"), IdentifierExpression("extra")])
  )

  assert string_call.with_first_string("./b").to_text() == 'require"./b"'
  assert tuple_call.with_first_string("./b").to_text() == 'require("./b", extra)'
  assert string_call.to_text() == 'require"./a"'
