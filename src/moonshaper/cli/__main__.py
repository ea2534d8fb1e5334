"""
Main Entry Point for moonshaper CLI.

This module handles argument parsing and dispatches to the command handlers
defined in `moonshaper.cli.commands`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from moonshaper import __version__
from moonshaper.cli import commands
from moonshaper.enums import LiteralCase
from moonshaper.rules.require import available_locators
from moonshaper.utils.console import set_verbosity


def _add_locator_options(parser: argparse.ArgumentParser) -> None:
  parser.add_argument("--mode", choices=available_locators(), default=None, help="Require locator (default: from toml)")
  parser.add_argument("--folder-name", default=None, help="Module folder file name (default: from toml, else 'init')")
  parser.add_argument(
    "--alias",
    nargs="*",
    help="Path locator source aliases in alias=directory format (e.g. @lib=vendor/lib)",
  )


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="moonshaper: Lua source transformation tools")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
  parser.add_argument(
    "-v",
    "--verbose",
    action="count",
    default=0,
    help="Increase log verbosity (can be repeated)",
  )

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: NUMBER ---
  cmd_num = subparsers.add_parser("number", help="Parse a number literal and show its value")
  cmd_num.add_argument("literal", help="Literal text (e.g. 1e10, 0xFFp2)")
  case_group = cmd_num.add_mutually_exclusive_group()
  case_group.add_argument("--upper", dest="case", action="store_const", const=LiteralCase.UPPER.value)
  case_group.add_argument("--lower", dest="case", action="store_const", const=LiteralCase.LOWER.value)

  # --- Command: LOCATE ---
  cmd_loc = subparsers.add_parser("locate", help="Resolve a require argument to a module file")
  cmd_loc.add_argument("reference", help="The require argument (e.g. ./util or pkg.util)")
  cmd_loc.add_argument("--source", type=Path, required=True, help="File containing the require call")
  _add_locator_options(cmd_loc)

  # --- Command: REWRITE ---
  cmd_rew = subparsers.add_parser("rewrite", help="Rewrite a require call for moved files")
  cmd_rew.add_argument("reference", help="The current require argument")
  cmd_rew.add_argument("--source", type=Path, required=True, help="File containing the require call")
  cmd_rew.add_argument("--target", type=Path, required=True, help="New location of the required module")
  cmd_rew.add_argument("--new-source", type=Path, default=None, help="New location of the requiring file")
  _add_locator_options(cmd_rew)

  args = parser.parse_args(argv)
  set_verbosity(args.verbose)

  if args.command == "number":
    return commands.handle_number(args.literal, args.case)

  elif args.command == "locate":
    return commands.handle_locate(args.reference, args.source, args.mode, args.folder_name, args.alias)

  elif args.command == "rewrite":
    return commands.handle_rewrite(
      args.reference,
      args.source,
      args.target,
      args.new_source,
      args.mode,
      args.folder_name,
      args.alias,
    )

  return 0


if __name__ == "__main__":
  sys.exit(main())
