"""
Main Entry Point for the hook-deps CLI.

This module handles argument parsing and dispatches to specific command
handlers defined in `hook_deps.cli.commands`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from hook_deps.cli import commands
from hook_deps.utils.console import set_verbose
from hook_deps import __version__


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(prog="hook-deps", description="hook-deps: Infer React hook dependency arrays")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
  parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: CONVERT ---
  cmd_conv = subparsers.add_parser("convert", help="Add dependency arrays to a file or directory")
  cmd_conv.add_argument("path", type=Path, help="Input source file or directory")
  mode = cmd_conv.add_mutually_exclusive_group()
  mode.add_argument("--out", type=Path, help="Output destination (file or dir)")
  mode.add_argument("--in-place", action="store_true", help="Overwrite the input files")
  mode.add_argument(
    "--check",
    action="store_true",
    help="Write nothing; exit with 1 if any file would change",
  )
  cmd_conv.add_argument("--hooks", nargs="+", default=None, help="Hook names to handle (default: from toml)")
  cmd_conv.add_argument("--extra-hooks", nargs="+", default=None, help="Hook names added to the configured set")
  cmd_conv.add_argument(
    "--json-trace",
    type=Path,
    default=None,
    help="Dump the execution trace to a JSON file (a directory for batch runs)",
  )

  # --- Command: INSPECT ---
  cmd_insp = subparsers.add_parser("inspect", help="List hook calls and their inferred dependencies")
  cmd_insp.add_argument("path", type=Path, help="Input source file or directory")
  cmd_insp.add_argument("--hooks", nargs="+", default=None, help="Hook names to handle (default: from toml)")
  cmd_insp.add_argument("--extra-hooks", nargs="+", default=None, help="Hook names added to the configured set")
  cmd_insp.add_argument("--json", action="store_true", help="Print JSON instead of a table")

  args = parser.parse_args(argv)

  if args.verbose:
    set_verbose(True)

  if args.command == "convert":
    return commands.handle_convert(
      args.path,
      args.out,
      args.hooks,
      args.extra_hooks,
      in_place=args.in_place,
      check=args.check,
      json_trace_path=args.json_trace,
    )

  elif args.command == "inspect":
    return commands.handle_inspect(args.path, args.hooks, args.extra_hooks, as_json=args.json)

  return 0


if __name__ == "__main__":
  sys.exit(main())
