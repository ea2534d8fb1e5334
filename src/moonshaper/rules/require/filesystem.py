"""
File System Access for Require Resolution.

Locators never open or modify files. The only question they ask the disk is
whether a candidate module file exists, through the ``FileSystem`` protocol.
"""

import os
from pathlib import Path
from typing import Iterable, Protocol, Set, Union

PathLike = Union[str, "os.PathLike[str]"]


def normalize_path(path: PathLike) -> Path:
  """
  Collapses ``.`` and ``..`` segments without touching the disk.

  Args:
      path: Any path.

  Returns:
      Path: The lexically normalised path.
  """
  return Path(os.path.normpath(path))


def is_within(path: Path, directory: Path) -> bool:
  """True when `path` is `directory` or lies below it (both normalised)."""
  return path == directory or directory in path.parents


class FileSystem(Protocol):
  """Read-only view used to test candidate module files."""

  def is_file(self, path: Path) -> bool: ...


class OsFileSystem:
  """Answers from the real disk."""

  def is_file(self, path: Path) -> bool:
    return Path(path).is_file()


class MemoryFileSystem:
  """
  An in-memory set of files. Used by tests and by dry runs that plan
  relocations before anything is written.
  """

  def __init__(self, files: Iterable[PathLike] = ()) -> None:
    self._files: Set[Path] = {normalize_path(f) for f in files}

  def add(self, path: PathLike) -> None:
    self._files.add(normalize_path(path))

  def is_file(self, path: Path) -> bool:
    return normalize_path(path) in self._files
