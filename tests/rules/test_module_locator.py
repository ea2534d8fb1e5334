"""
Tests for the Module Name Based Require Locator.
"""

from pathlib import Path

import pytest

from moonshaper.nodes import FunctionCall, IdentifierExpression, StringExpression, TupleArguments
from moonshaper.rules.require import MemoryFileSystem, ModuleLocator, RequireCall

SOURCE = Path("/p/main.lua")

FILES = [
  "/p/main.lua",
  "/p/net/http.lua",
  "/p/net/init.lua",
  "/p/lib/json.luau",
  "/p/vendor/lpeg/init.lua",
  "/p/my-mod.lua",
]


def _call(reference: str) -> FunctionCall:
  return FunctionCall(IdentifierExpression("require"), TupleArguments([StringExpression(reference)]))


@pytest.fixture
def fs():
  return MemoryFileSystem(FILES)


@pytest.fixture
def locator(fs):
  return ModuleLocator(search_paths=[Path("/p"), Path("/p/vendor")], file_system=fs)


@pytest.mark.parametrize(
  "reference, expected",
  [
    ("net.http", "/p/net/http.lua"),
    ("net", "/p/net/init.lua"),
    ("net.init", "/p/net/init.lua"),
    ("lib.json", "/p/lib/json.luau"),
    ("lpeg", "/p/vendor/lpeg/init.lua"),
  ],
)
def test_locate(locator, reference, expected):
  assert locator.locate(reference, SOURCE) == Path(expected)


@pytest.mark.parametrize("reference", ["./net", "net..http", "1net", "", "net/http", "missing.mod", "my-mod"])
def test_locate_miss_returns_none(locator, reference):
  assert locator.locate(reference, SOURCE) is None


def test_default_search_path_is_requiring_directory(fs):
  locator = ModuleLocator(file_system=fs)

  assert locator.search_paths == [Path(".")]
  assert locator.locate("http", Path("/p/net/init.lua")) == Path("/p/net/http.lua")
  assert locator.locate("net.http", Path("/p/net/init.lua")) is None


def test_custom_module_folder_name():
  fs = MemoryFileSystem(["/p/ui/index.lua"])
  locator = ModuleLocator(module_folder_name="index", search_paths=[Path("/p")], file_system=fs)

  assert locator.locate("ui", SOURCE) == Path("/p/ui/index.lua")


def test_rewrite_to_folder_module(locator):
  rewritten = locator.rewrite_call(RequireCall(_call("net.http"), SOURCE), Path("/p/net/init.lua"))

  assert rewritten.to_text() == 'require("net")'


def test_rewrite_uses_first_search_path(locator):
  rewritten = locator.rewrite_call(RequireCall(_call("lpeg"), SOURCE), Path("/p/vendor/lpeg/init.lua"))

  assert rewritten.to_text() == 'require("vendor.lpeg")'


def test_rewrite_avoids_shadowed_folder_form(fs, locator):
  fs.add("/p/net.lua")

  rewritten = locator.rewrite_call(RequireCall(_call("net.http"), SOURCE), Path("/p/net/init.lua"))

  assert rewritten.to_text() == 'require("net.init")'


def test_rewrite_luau_module(locator):
  rewritten = locator.rewrite_call(RequireCall(_call("net"), SOURCE), Path("/p/lib/json.luau"))

  assert rewritten.to_text() == 'require("lib.json")'


@pytest.mark.parametrize("target", ["/q/outside.lua", "/p/my-mod.lua", "/p/net/readme.txt"])
def test_rewrite_unaddressable_target_is_none(locator, target):
  assert locator.rewrite_call(RequireCall(_call("net"), SOURCE), Path(target)) is None


def test_rewrite_computed_argument_is_none(locator):
  call = FunctionCall(IdentifierExpression("require"), TupleArguments([IdentifierExpression("name")]))

  assert locator.rewrite_call(RequireCall(call, SOURCE), Path("/p/net/http.lua")) is None
