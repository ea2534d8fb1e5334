"""
Lua syntax tree nodes and the numeric literal model.
"""

from moonshaper.nodes.base import (
  Arguments,
  Block,
  FunctionCall,
  IdentifierExpression,
  LocalAssignStatement,
  LuaNode,
  ReturnStatement,
  StringArguments,
  StringExpression,
  TupleArguments,
  transform,
  walk,
)
from moonshaper.nodes.number import (
  DecimalNumber,
  HexNumber,
  NumberExpression,
  NumberParsingError,
  compute_value,
  parse_number,
  set_uppercase,
)

__all__ = [
  "Arguments",
  "Block",
  "DecimalNumber",
  "FunctionCall",
  "HexNumber",
  "IdentifierExpression",
  "LocalAssignStatement",
  "LuaNode",
  "NumberExpression",
  "NumberParsingError",
  "ReturnStatement",
  "StringArguments",
  "StringExpression",
  "TupleArguments",
  "compute_value",
  "parse_number",
  "set_uppercase",
  "transform",
  "walk",
]
