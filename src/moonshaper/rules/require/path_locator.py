"""
Path Based Require Locator.

Handles file-path style references:

- ``require("./sibling")`` and ``require("../shared/util")`` are resolved from
  the directory of the requiring file.
- ``require("/abs/module")`` is used as written.
- ``require("@lib/json")`` goes through the configured ``sources`` aliases.

A reference may omit the extension (``.lua`` then ``.luau`` are tried) and may
name a directory, which stands for the module folder file inside it
(``init.lua`` by default).
"""

import os
import posixpath
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from moonshaper.enums import RequireModeName
from moonshaper.rules.require.descriptor import RequireCall
from moonshaper.rules.require.errors import RequireEscapeError, UnknownRequireSourceError
from moonshaper.rules.require.filesystem import FileSystem, is_within, normalize_path
from moonshaper.rules.require.locator import (
  DEFAULT_MODULE_FOLDER_NAME,
  LUA_EXTENSIONS,
  RequireLocator,
  register_locator,
)

RELATIVE_PREFIXES = ("./", "../")
ALIAS_PREFIX = "@"


@register_locator(RequireModeName.PATH.value)
class PathLocator(RequireLocator):
  """
  Resolves require arguments as file paths.

  Attributes:
      sources (Dict[str, Path]): Alias name (e.g. ``@lib``) to directory.
      root (Optional[Path]): When set, references may not resolve outside it.
  """

  def __init__(
    self,
    module_folder_name: str = DEFAULT_MODULE_FOLDER_NAME,
    sources: Optional[Dict[str, Path]] = None,
    root: Optional[Path] = None,
    file_system: Optional[FileSystem] = None,
  ) -> None:
    super().__init__(module_folder_name, file_system)
    self.sources = {name: normalize_path(path) for name, path in (sources or {}).items()}
    self.root = normalize_path(root) if root is not None else None

  def locate(self, reference: str, source: Path) -> Optional[Path]:
    base = self._base_path(reference, source)
    if base is None:
      return None
    if self.root is not None and not is_within(base, self.root):
      raise RequireEscapeError(reference, source, f"path leaves the root directory {self.root}")
    # "./", "../" and "dir/" name a directory, never a sibling "dir.lua"
    return self._find_module_file(base, folder_only=reference.endswith("/"))

  def _base_path(self, reference: str, source: Path) -> Optional[Path]:
    if reference.startswith(RELATIVE_PREFIXES):
      return normalize_path(source.parent / reference)
    if reference.startswith("/"):
      return normalize_path(reference)

    head, _, rest = reference.partition("/")
    if head in self.sources:
      directory = self.sources[head]
      return normalize_path(directory / rest) if rest else directory
    if head.startswith(ALIAS_PREFIX):
      raise UnknownRequireSourceError(reference, source, f"no source is configured for `{head}`")
    return None

  def _rewrite_candidates(self, require: RequireCall, target: Path) -> Iterator[str]:
    for reference in self._full_references(require, target):
      yield from self._reference_forms(reference, target)

  def _full_references(self, require: RequireCall, target: Path) -> List[str]:
    references: List[str] = []

    head = (require.literal_argument or "").partition("/")[0]
    alias_directory = self.sources.get(head)
    if alias_directory is not None and is_within(target, alias_directory) and target != alias_directory:
      references.append(f"{head}/{target.relative_to(alias_directory).as_posix()}")

    directory = normalize_path(require.source.parent)
    relative = Path(os.path.relpath(target, directory)).as_posix()
    if not relative.startswith("../"):
      relative = "./" + relative
    references.append(relative)
    return references

  def _reference_forms(self, reference: str, target: Path) -> Iterator[str]:
    """
    Directory form first, then the extension-less path, then the full path.
    """
    if target.suffix in LUA_EXTENSIONS:
      if target.stem == self.module_folder_name():
        folder = posixpath.dirname(reference)
        if folder not in ("", ".", "..") and not folder.endswith("/.."):
          yield folder
      yield reference[: -len(target.suffix)]
    yield reference
