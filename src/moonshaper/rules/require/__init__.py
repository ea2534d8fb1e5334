"""
Require path resolution.

Importing this package registers the built-in locators.
"""

from moonshaper.rules.require.descriptor import RequireCall, find_require_calls, is_require_call
from moonshaper.rules.require.errors import (
  RequireEscapeError,
  RequireResolutionError,
  UnknownRequireSourceError,
)
from moonshaper.rules.require.filesystem import FileSystem, MemoryFileSystem, OsFileSystem, normalize_path
from moonshaper.rules.require.locator import (
  LUA_EXTENSIONS,
  RequireLocator,
  available_locators,
  get_locator_class,
  register_locator,
)
from moonshaper.rules.require.module_locator import ModuleLocator
from moonshaper.rules.require.path_locator import PathLocator
from moonshaper.rules.require.rule import RequirePathRule

__all__ = [
  "FileSystem",
  "LUA_EXTENSIONS",
  "MemoryFileSystem",
  "ModuleLocator",
  "OsFileSystem",
  "PathLocator",
  "RequireCall",
  "RequireEscapeError",
  "RequireLocator",
  "RequirePathRule",
  "RequireResolutionError",
  "UnknownRequireSourceError",
  "available_locators",
  "find_require_calls",
  "get_locator_class",
  "is_require_call",
  "normalize_path",
  "register_locator",
]
