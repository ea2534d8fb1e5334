"""
Runtime Configuration Store.

Selects the require resolution strategy and the literal normalisation for a
run. Settings are read from ``[tool.moonshaper]`` in the nearest
``pyproject.toml`` and overridden by CLI arguments::

    [tool.moonshaper]
    number_case = "lower"

    [tool.moonshaper.require_mode]
    name = "path"
    module_folder_name = "init"
    sources = { "@lib" = "vendor/lib" }
"""

import sys
from pathlib import Path
from typing import Annotated, Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, Field, field_validator

from moonshaper.enums import LiteralCase, RequireModeName
from moonshaper.rules.number_case import NumberCaseRule
from moonshaper.rules.pipeline import RulePipeline
from moonshaper.rules.require import FileSystem, RequireLocator, RequirePathRule, get_locator_class
from moonshaper.rules.require.locator import DEFAULT_MODULE_FOLDER_NAME
from moonshaper.utils.console import log_warning

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib


class PathRequireMode(BaseModel):
  """Settings of the file-path based locator."""

  name: Literal["path"] = RequireModeName.PATH.value
  module_folder_name: str = Field(
    DEFAULT_MODULE_FOLDER_NAME, description="File name standing for a directory module (e.g. 'init')."
  )
  sources: Dict[str, Path] = Field(default_factory=dict, description="Alias prefixes (e.g. '@lib') to directories.")
  root: Optional[Path] = Field(None, description="References may not resolve outside of this directory.")

  def anchored(self, base: Path) -> "PathRequireMode":
    """Returns a copy whose relative directories are resolved against `base`."""
    return self.model_copy(
      update={
        "sources": {alias: _anchor(path, base) for alias, path in self.sources.items()},
        "root": _anchor(self.root, base) if self.root is not None else None,
      }
    )

  def locator_options(self) -> Dict[str, Any]:
    return {"module_folder_name": self.module_folder_name, "sources": self.sources, "root": self.root}


class ModuleRequireMode(BaseModel):
  """Settings of the dotted module name locator."""

  name: Literal["module"] = RequireModeName.MODULE.value
  module_folder_name: str = Field(
    DEFAULT_MODULE_FOLDER_NAME, description="File name standing for a directory module (e.g. 'init')."
  )
  search_paths: List[Path] = Field(
    default_factory=lambda: [Path(".")],
    description="Directories searched in order. Relative entries start from the requiring file.",
  )

  def anchored(self, base: Path) -> "ModuleRequireMode":
    return self.model_copy(update={"search_paths": [_anchor(path, base) for path in self.search_paths]})

  def locator_options(self) -> Dict[str, Any]:
    return {"module_folder_name": self.module_folder_name, "search_paths": self.search_paths}


RequireModeConfig = Annotated[Union[PathRequireMode, ModuleRequireMode], Field(discriminator="name")]


class RuntimeConfig(BaseModel):
  """
  Configuration container for one processing run.
  """

  require_mode: RequireModeConfig = Field(
    default_factory=PathRequireMode, description="The require path locator and its settings."
  )
  number_case: Optional[LiteralCase] = Field(
    None, description="Normalise number literal markers to this case. Unset keeps them as written."
  )

  @field_validator("require_mode", mode="before")
  @classmethod
  def expand_mode_shorthand(cls, v: Any) -> Any:
    """
    Accepts a bare mode name (``"path"``) in place of a settings table.

    Args:
        v (Any): Raw value.

    Returns:
        Any: A mapping with at least a ``name`` key, or `v` unchanged.
    """
    if isinstance(v, (str, RequireModeName)):
      return {"name": RequireModeName(v).value}
    return v

  def build_locator(self, file_system: Optional[FileSystem] = None) -> RequireLocator:
    """
    Instantiates the configured locator from the registry.

    Args:
        file_system (Optional[FileSystem]): Existence checks, disk by default.

    Returns:
        RequireLocator: The active strategy for this run.

    Raises:
        ValueError: If the mode has no registered locator.
    """
    locator_class = get_locator_class(self.require_mode.name)
    if locator_class is None:
      raise ValueError(f"Unknown require mode: '{self.require_mode.name}'")
    return locator_class(file_system=file_system, **self.require_mode.locator_options())

  def build_pipeline(
    self,
    file_system: Optional[FileSystem] = None,
    relocations: Optional[Dict[Path, Path]] = None,
  ) -> RulePipeline:
    """
    Assembles the rules this configuration asks for.

    Args:
        file_system (Optional[FileSystem]): Passed to the locator.
        relocations (Optional[Dict[Path, Path]]): Module moves, old to new.

    Returns:
        RulePipeline: Number normalisation (when configured) then require rewriting.
    """
    rules = []
    if self.number_case is not None:
      rules.append(NumberCaseRule(uppercase=self.number_case == LiteralCase.UPPER))
    rules.append(RequirePathRule(self.build_locator(file_system), relocations))
    return RulePipeline(rules)

  @classmethod
  def load(
    cls,
    require_mode: Optional[str] = None,
    module_folder_name: Optional[str] = None,
    number_case: Optional[str] = None,
    search_path: Optional[Path] = None,
  ) -> "RuntimeConfig":
    """
    Loads configuration from pyproject.toml and overrides with CLI arguments.

    Relative directories found in the TOML file are resolved against the
    directory holding that file.

    Args:
        require_mode (Optional[str]): Override for the locator name. Switching
            to another mode discards the TOML settings of the previous one.
        module_folder_name (Optional[str]): Override for the module folder name.
        number_case (Optional[str]): Override for literal marker case.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        RuntimeConfig: The fully resolved configuration object.
    """
    start_dir = search_path or Path.cwd()
    toml_config, toml_dir = _load_toml_settings(start_dir)

    raw_mode = toml_config.get("require_mode", RequireModeName.PATH.value)
    mode: Dict[str, Any] = {"name": raw_mode} if isinstance(raw_mode, str) else dict(raw_mode)
    mode.setdefault("name", RequireModeName.PATH.value)
    if require_mode and require_mode != mode["name"]:
      mode = {"name": require_mode}
    if module_folder_name:
      mode["module_folder_name"] = module_folder_name

    config = cls(
      require_mode=mode,
      number_case=number_case or toml_config.get("number_case"),
    )
    if toml_dir is not None:
      config.require_mode = config.require_mode.anchored(toml_dir)
    return config


def _anchor(path: Path, base: Path) -> Path:
  return path if path.is_absolute() else base / path


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches `start_path` and its parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory definition was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError) as e:
        log_warning(f"Ignoring unreadable {toml_path}: {e}")
        return {}, None

      section = data.get("tool", {}).get("moonshaper")
      if section is None:
        return {}, None
      return section, parent

  return {}, None


def parse_cli_key_values(items: Optional[List[str]]) -> Dict[str, str]:
  """
  Parses a list of 'key=value' strings into a dictionary.

  Args:
      items (Optional[List[str]]): List of raw CLI strings directly from argparse.

  Returns:
      Dict[str, str]: Parsed dictionary. Malformed entries are skipped with a warning.
  """
  if not items:
    return {}

  parsed = {}
  for item in items:
    if "=" not in item:
      log_warning(f"Ignoring invalid option format: '{item}'. Expected 'key=value'.")
      continue

    key, value = item.split("=", 1)
    parsed[key.strip()] = value.strip()

  return parsed
