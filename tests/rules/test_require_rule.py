"""
Tests for the Require Path Rewriting Rule.

Verifies:
1.  Calls follow relocated modules and relocated requiring files.
2.  Calls the locator does not understand are left untouched.
3.  Resolution failures and impossible rewrites become context warnings.
"""

from pathlib import Path

import pytest

from moonshaper.nodes import (
  Block,
  FunctionCall,
  IdentifierExpression,
  LocalAssignStatement,
  StringExpression,
  TupleArguments,
)
from moonshaper.rules import RequirePathRule, RuleContext
from moonshaper.rules.require import MemoryFileSystem, ModuleLocator, PathLocator, find_require_calls

SOURCE = Path("/p/src/main.lua")


def _call(name: str, argument) -> FunctionCall:
  return FunctionCall(IdentifierExpression(name), TupleArguments([argument]))


def _block(*references: str) -> Block:
  return Block(
    [LocalAssignStatement([f"m{i}"], [_call("require", StringExpression(ref))]) for i, ref in enumerate(references)]
  )


@pytest.fixture
def fs():
  return MemoryFileSystem(["/p/src/main.lua", "/p/src/util.lua", "/p/src/lib/util.lua", "/p/lib/json.lua"])


def test_follows_relocated_module(fs):
  block = Block(
    [
      LocalAssignStatement(["util"], [_call("require", StringExpression("./util"))]),
      _call("print", StringExpression("./util")),
      LocalAssignStatement(["dyn"], [_call("require", IdentifierExpression("name"))]),
    ]
  )
  rule = RequirePathRule(PathLocator(file_system=fs), {Path("/p/src/util.lua"): Path("/p/src/lib/util.lua")})
  context = RuleContext(SOURCE)

  result = rule.process(block, context)

  assert result.to_text() == 'local util = require("./lib/util")\nprint("./util")\nlocal dyn = require(name)'
  assert context.warnings == []


def test_follows_relocated_source(fs):
  context = RuleContext(SOURCE, output_path=Path("/p/out/main.lua"))
  rule = RequirePathRule(PathLocator(file_system=fs))

  result = rule.process(_block("./util", "../lib/json"), context)

  assert result.to_text() == 'local m0 = require("../src/util")\nlocal m1 = require("../lib/json")'


def test_untouched_when_nothing_moves(fs):
  block = _block("./util")
  rule = RequirePathRule(PathLocator(file_system=fs))

  assert rule.process(block, RuleContext(SOURCE)) is block


def test_unrelated_relocation_keeps_calls(fs):
  block = _block("./util", "socket", "./missing")
  rule = RequirePathRule(PathLocator(file_system=fs), {Path("/p/other.lua"): Path("/p/new.lua")})
  context = RuleContext(SOURCE)

  result = rule.process(block, context)

  assert result.to_text() == block.to_text()
  assert context.warnings == []


def test_unknown_alias_becomes_warning(fs):
  context = RuleContext(SOURCE, output_path=Path("/p/out/main.lua"))
  rule = RequirePathRule(PathLocator(file_system=fs))

  result = rule.process(_block("@pkg/json", "./util"), context)

  assert result.to_text() == 'local m0 = require("@pkg/json")\nlocal m1 = require("../src/util")'
  assert len(context.warnings) == 1
  assert "@pkg/json" in context.warnings[0]


def test_unaddressable_target_becomes_warning(fs):
  locator = PathLocator(root=Path("/p/src"), file_system=fs)
  rule = RequirePathRule(locator, {Path("/p/src/util.lua"): Path("/p/lib/json.lua")})
  context = RuleContext(SOURCE)

  result = rule.process(_block("./util"), context)

  assert result.to_text() == 'local m0 = require("./util")'
  assert len(context.warnings) == 1
  assert "unable to rewrite" in context.warnings[0]


def test_module_locator_rule():
  fs = MemoryFileSystem(["/p/main.lua", "/p/net/http.lua", "/p/web/http.lua"])
  locator = ModuleLocator(search_paths=[Path("/p")], file_system=fs)
  rule = RequirePathRule(locator, {Path("/p/net/http.lua"): Path("/p/web/http.lua")})

  result = rule.process(_block("net.http"), RuleContext(Path("/p/main.lua")))

  assert result.to_text() == 'local m0 = require("web.http")'


def test_custom_loader_identifier(fs):
  block = Block([_call("import", StringExpression("./util")), _call("require", StringExpression("./util"))])
  rule = RequirePathRule(PathLocator(file_system=fs), identifier="import")

  result = rule.process(block, RuleContext(SOURCE, output_path=Path("/p/src/sub/main.lua")))

  assert result.to_text() == 'import("../util")\nrequire("./util")'


def test_find_require_calls():
  block = _block("./a", "./b")
  block.statements.append(_call("require", IdentifierExpression("x")))
  block.statements.append(FunctionCall(IdentifierExpression("require")))

  found = find_require_calls(block, SOURCE)

  assert [r.literal_argument for r in found] == ["./a", "./b", None]
  assert all(r.source == SOURCE for r in found)
