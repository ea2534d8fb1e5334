"""
Base Contract and Registry for Require Path Locators.

A locator maps the argument of a module-loading call to the module file it
loads, and builds new calls that load a module from a different location.
Concrete locators register themselves under a mode name; the configuration
layer picks one per run.

Rewriting is verified against resolution: a candidate argument is only
accepted when ``locate`` maps it back to the requested file.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Type

from moonshaper.nodes.base import FunctionCall
from moonshaper.rules.require.descriptor import RequireCall
from moonshaper.rules.require.errors import RequireResolutionError
from moonshaper.rules.require.filesystem import FileSystem, OsFileSystem, normalize_path

LUA_EXTENSIONS = (".lua", ".luau")
DEFAULT_MODULE_FOLDER_NAME = "init"

logger = logging.getLogger(__name__)


class RequireLocator(ABC):
  """
  Abstract require path resolution strategy.

  Attributes:
      file_system (FileSystem): Existence checks for candidate files.
  """

  mode_name: str = ""

  def __init__(
    self,
    module_folder_name: str = DEFAULT_MODULE_FOLDER_NAME,
    file_system: Optional[FileSystem] = None,
  ) -> None:
    self._module_folder_name = module_folder_name
    self.file_system = file_system or OsFileSystem()

  def module_folder_name(self) -> str:
    """Name of the file standing for a directory module (without extension)."""
    return self._module_folder_name

  @abstractmethod
  def locate(self, reference: str, source: Path) -> Optional[Path]:
    """
    Resolves a require argument to the module file it loads.

    Args:
        reference: The string passed to the loader.
        source: The file containing the call.

    Returns:
        Optional[Path]: The normalised module file, or None when the
        reference is not understood by this locator or no file matches.

    Raises:
        RequireResolutionError: If the reference looks like a module path
            but cannot be resolved safely.
    """

  @abstractmethod
  def _rewrite_candidates(self, require: RequireCall, target: Path) -> Iterable[str]:
    """Yields arguments that may load `target`, most preferred first."""

  def locate_call(self, require: RequireCall) -> Optional[Path]:
    """
    Resolves a call site. Calls with a computed argument resolve to None.
    """
    reference = require.literal_argument
    if reference is None:
      return None
    return self.locate(reference, require.source)

  def rewrite_call(self, require: RequireCall, new_location: Path) -> Optional[FunctionCall]:
    """
    Builds a call that loads the module now living at `new_location`.

    The returned call resolves, under this locator and from
    ``require.source``, to exactly `new_location`.

    Args:
        require: The call site, with the path of the file that will hold it.
        new_location: Where the required module lives.

    Returns:
        Optional[FunctionCall]: The replacement call, or None when the
        argument is computed or no argument of this locator's form can
        reach the target.
    """
    if require.literal_argument is None:
      return None

    target = normalize_path(new_location)
    for reference in self._rewrite_candidates(require, target):
      try:
        located = self.locate(reference, require.source)
      except RequireResolutionError as e:
        logger.debug(f"Rejected rewrite candidate `{reference}`: {e.reason}")
        continue
      if located == target:
        return require.call.with_first_string(reference)

    logger.debug(f"No `{self.mode_name}` require argument reaches {target} from {require.source}")
    return None

  def _find_module_file(self, base: Path, folder_only: bool = False) -> Optional[Path]:
    """
    Returns the first existing file among the candidates for `base`.

    With `folder_only`, `base` names a directory and only its module folder
    file can match.
    """
    candidates = self._folder_candidates(base) if folder_only else self._module_candidates(base)
    for candidate in candidates:
      if self.file_system.is_file(candidate):
        return candidate
    return None

  def _module_candidates(self, base: Path) -> List[Path]:
    candidates: List[Path] = []
    if base.suffix in LUA_EXTENSIONS:
      candidates.append(base)
    if base.name:
      candidates.extend(base.with_name(base.name + extension) for extension in LUA_EXTENSIONS)
    candidates.extend(self._folder_candidates(base))
    return candidates

  def _folder_candidates(self, base: Path) -> List[Path]:
    return [base / f"{self._module_folder_name}{extension}" for extension in LUA_EXTENSIONS]


_LOCATOR_REGISTRY: Dict[str, Type[RequireLocator]] = {}


def register_locator(name: str) -> Callable[[Type[RequireLocator]], Type[RequireLocator]]:
  def wrapper(cls: Type[RequireLocator]) -> Type[RequireLocator]:
    cls.mode_name = name
    _LOCATOR_REGISTRY[name] = cls
    return cls

  return wrapper


def get_locator_class(name: str) -> Optional[Type[RequireLocator]]:
  return _LOCATOR_REGISTRY.get(name)


def available_locators() -> List[str]:
  return sorted(_LOCATOR_REGISTRY)
