"""
CLI Command Handlers.

Inspection commands over the two core subsystems: parsing number literals and
resolving or rewriting require calls with the configured locator.
"""

from pathlib import Path
from typing import Dict, List, Optional

from rich.table import Table

from moonshaper.config import PathRequireMode, RuntimeConfig, parse_cli_key_values
from moonshaper.nodes import (
  DecimalNumber,
  FunctionCall,
  IdentifierExpression,
  NumberParsingError,
  StringExpression,
  TupleArguments,
  compute_value,
  parse_number,
  set_uppercase,
)
from moonshaper.rules.require import RequireCall, RequireLocator, RequireResolutionError
from moonshaper.utils.console import console, log_error, log_info, log_warning


def handle_number(literal: str, case: Optional[str] = None) -> int:
  """
  Parses a number literal and prints its structure.

  Args:
      literal: Literal text, e.g. ``0x1Fp4``.
      case: Optional marker case to apply before rendering (``lower``/``upper``).

  Returns:
      int: Exit code (1 if the literal is malformed).
  """
  try:
    number = parse_number(literal)
  except NumberParsingError as e:
    log_error(str(e))
    return 1

  if case is not None:
    set_uppercase(number, case == "upper")

  exponent = number.get_exponent()
  table = Table(title=f"Number literal {literal}", show_header=False)
  table.add_column("Field", style="cyan")
  table.add_column("Value")
  table.add_row("Kind", "decimal" if isinstance(number, DecimalNumber) else "hexadecimal")
  table.add_row("Exponent", "none" if exponent is None else str(exponent))
  table.add_row("Value", repr(compute_value(number)))
  table.add_row("Text", number.to_text())
  console.print(table)
  return 0


def handle_locate(
  reference: str,
  source: Path,
  mode: Optional[str] = None,
  folder_name: Optional[str] = None,
  aliases: Optional[List[str]] = None,
) -> int:
  """
  Prints the module file a require argument loads.

  Args:
      reference: The require argument, e.g. ``./util``.
      source: The file containing the call.
      mode: Locator override (defaults to the TOML setting).
      folder_name: Module folder name override.
      aliases: ``@alias=directory`` entries added to the path locator sources.

  Returns:
      int: Exit code (1 when unresolved or invalid).
  """
  locator = _build_locator(mode, folder_name, aliases)
  try:
    found = locator.locate(reference, source.resolve())
  except RequireResolutionError as e:
    log_error(str(e))
    return 1

  if found is None:
    log_warning(f"`{reference}` does not resolve to a module with the '{locator.mode_name}' locator")
    return 1

  console.print(str(found), markup=False, highlight=False)
  return 0


def handle_rewrite(
  reference: str,
  source: Path,
  target: Path,
  new_source: Optional[Path] = None,
  mode: Optional[str] = None,
  folder_name: Optional[str] = None,
  aliases: Optional[List[str]] = None,
) -> int:
  """
  Prints the require call loading `target` from `new_source` (or `source`).

  Args:
      reference: The current require argument. Its alias, if any, is reused.
      source: The file currently containing the call.
      target: Where the required module lives now.
      new_source: Where the requiring file is moved to.
      mode: Locator override.
      folder_name: Module folder name override.
      aliases: ``@alias=directory`` entries for the path locator.

  Returns:
      int: Exit code (1 when the call cannot be rewritten).
  """
  locator = _build_locator(mode, folder_name, aliases)
  call = FunctionCall(IdentifierExpression("require"), TupleArguments([StringExpression(reference)]))
  holder = (new_source or source).resolve()

  rewritten = locator.rewrite_call(RequireCall(call, holder), target.resolve())
  if rewritten is None:
    log_error(f"No '{locator.mode_name}' require argument loads {target} from {holder}")
    return 1

  console.print(rewritten.to_text(), markup=False, highlight=False)
  return 0


def _build_locator(mode: Optional[str], folder_name: Optional[str], aliases: Optional[List[str]]) -> RequireLocator:
  config = RuntimeConfig.load(require_mode=mode, module_folder_name=folder_name)
  extra_sources: Dict[str, str] = parse_cli_key_values(aliases)

  if extra_sources:
    if isinstance(config.require_mode, PathRequireMode):
      sources = {**config.require_mode.sources, **{k: Path(v).resolve() for k, v in extra_sources.items()}}
      config.require_mode = config.require_mode.model_copy(update={"sources": sources})
    else:
      log_warning(f"Source aliases are ignored by the '{config.require_mode.name}' locator")

  log_info(f"Using the '{config.require_mode.name}' require locator")
  return config.build_locator()
