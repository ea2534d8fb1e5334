"""
Module Name Based Require Locator.

Handles dotted module names in the spirit of Lua's ``package.path``:
``require("net.http")`` loads ``<search path>/net/http.lua`` or, following
the module folder convention, ``<search path>/net/http/init.lua``.
"""

import re
from pathlib import Path
from typing import Iterator, List, Optional, Sequence

from moonshaper.enums import RequireModeName
from moonshaper.rules.require.descriptor import RequireCall
from moonshaper.rules.require.filesystem import FileSystem, is_within, normalize_path
from moonshaper.rules.require.locator import (
  DEFAULT_MODULE_FOLDER_NAME,
  LUA_EXTENSIONS,
  RequireLocator,
  register_locator,
)

_MODULE_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*")


@register_locator(RequireModeName.MODULE.value)
class ModuleLocator(RequireLocator):
  """
  Resolves require arguments as dotted module names.

  Attributes:
      search_paths (List[Path]): Directories searched in order. Relative
          entries are anchored on the directory of the requiring file.
  """

  def __init__(
    self,
    module_folder_name: str = DEFAULT_MODULE_FOLDER_NAME,
    search_paths: Optional[Sequence[Path]] = None,
    file_system: Optional[FileSystem] = None,
  ) -> None:
    super().__init__(module_folder_name, file_system)
    self.search_paths = [Path(p) for p in (search_paths or [Path(".")])]

  def locate(self, reference: str, source: Path) -> Optional[Path]:
    if not _MODULE_NAME.fullmatch(reference):
      return None

    relative = Path(*reference.split("."))
    for root in self._roots(source):
      found = self._find_module_file(root / relative)
      if found is not None:
        return found
    return None

  def _roots(self, source: Path) -> List[Path]:
    roots = []
    for search_path in self.search_paths:
      root = search_path if search_path.is_absolute() else source.parent / search_path
      roots.append(normalize_path(root))
    return roots

  def _rewrite_candidates(self, require: RequireCall, target: Path) -> Iterator[str]:
    if target.suffix not in LUA_EXTENSIONS:
      return
    for root in self._roots(require.source):
      if not is_within(target, root) or target == root:
        continue
      parts = target.relative_to(root).with_suffix("").parts
      if len(parts) > 1 and parts[-1] == self.module_folder_name():
        yield ".".join(parts[:-1])
      yield ".".join(parts)
