"""
Convert Command Handler.

This module implements the logic for the ``hook-deps convert`` command.
It orchestrates:
1. Configuration loading (pyproject.toml + CLI overrides).
2. Source discovery (single file or directory tree).
3. Rewriting via the Engine.
4. Output writing, ``--check`` reporting and trace logging.
"""

import json
from pathlib import Path
from typing import Dict, List, Optional

from rich.table import Table

from hook_deps.config import RuntimeConfig
from hook_deps.core.engine import HookDepsEngine
from hook_deps.core.conversion_result import ConversionResult
from hook_deps.utils.console import (
  console,
  log_error,
  log_info,
  log_success,
  log_warning,
)

_IGNORED_DIRS = frozenset(("node_modules", ".git", "dist", "build"))


def handle_convert(
  input_path: Path,
  output_path: Optional[Path],
  hook_names: Optional[List[str]],
  extra_hooks: Optional[List[str]],
  in_place: bool = False,
  check: bool = False,
  json_trace_path: Optional[Path] = None,
) -> int:
  """
  Handles the 'convert' command execution.

  Args:
      input_path: Path to the source file or directory to rewrite.
      output_path: Where rewritten code is saved (file or directory).
      hook_names: Override for the recognized hook names.
      extra_hooks: Hook names added to the configured set.
      in_place: If True, sources are overwritten.
      check: If True, nothing is written; exit code 1 signals pending rewrites.
      json_trace_path: Trace JSON file (single file) or directory (batch).

  Returns:
      int: Exit code (0 for success, 1 for failure or pending rewrites under --check).
  """
  if not input_path.exists():
    log_error(f"Input not found: {input_path}")
    return 1

  try:
    config = RuntimeConfig.load(
      hook_names=hook_names,
      extra_hooks=extra_hooks,
      search_path=input_path if input_path.is_dir() else input_path.parent,
    )
  except ValueError as e:
    log_error(str(e))
    return 1

  engine = HookDepsEngine(config=config)
  batch_results: Dict[str, ConversionResult] = {}

  if input_path.is_file():
    destination = input_path if in_place else output_path
    batch_results[input_path.name] = _convert_single_file(input_path, destination, engine, check, json_trace_path)
  else:
    if not (output_path or in_place or check):
      log_error("Directory conversion requires --out, --in-place or --check.")
      return 1

    sources = collect_sources(input_path, config.extensions)
    if not sources:
      log_warning(f"No {'/'.join(config.extensions)} files found in {input_path}")
      return 0

    log_info(f"Processing {len(sources)} files from [path]{input_path}[/path]...")

    for src_file in sources:
      rel_path = src_file.relative_to(input_path)
      if in_place:
        destination = src_file
      elif output_path:
        destination = output_path / rel_path
      else:
        destination = None

      batch_trace = None
      if json_trace_path:
        batch_trace = json_trace_path / rel_path.with_name(f"{rel_path.name}.trace.json")

      batch_results[str(rel_path)] = _convert_single_file(src_file, destination, engine, check, batch_trace)

    _print_batch_summary(batch_results, check)

  if any(not r.success for r in batch_results.values()):
    return 1
  if check and any(r.changed for r in batch_results.values()):
    return 1
  return 0


def collect_sources(root: Path, extensions: List[str]) -> List[Path]:
  """
  Finds the source files of a directory tree, skipping vendored/build folders.

  Args:
      root: Directory to scan.
      extensions: Accepted suffixes (lowercase, with leading dot).

  Returns:
      List[Path]: Sorted file paths.
  """
  found = []
  for path in root.rglob("*"):
    if not path.is_file() or path.suffix.lower() not in extensions:
      continue
    if _IGNORED_DIRS.intersection(path.relative_to(root).parts[:-1]):
      continue
    found.append(path)
  return sorted(found)


def _convert_single_file(
  input_path: Path,
  output_path: Optional[Path],
  engine: HookDepsEngine,
  check: bool,
  json_trace_path: Optional[Path] = None,
) -> ConversionResult:
  """
  Rewrites a single file.

  Args:
      input_path: Source file path.
      output_path: Destination file path; None prints to stdout.
      engine: Configured engine.
      check: Report pending changes without writing anything.
      json_trace_path: Path to save trace event logs.

  Returns:
      ConversionResult: Result object containing status and code.
  """
  try:
    with open(input_path, "rt", encoding="utf-8") as f:
      code = f.read()
    result = engine.run(code)

    if json_trace_path and result.trace_events:
      json_trace_path.parent.mkdir(parents=True, exist_ok=True)
      with open(json_trace_path, "wt", encoding="utf-8") as f:
        json.dump(result.trace_events, f, indent=2)
      log_info(f"Trace saved to [path]{json_trace_path}[/path]")

    if not result.success:
      log_error(f"{input_path}: {'; '.join(result.errors)}")
      return result

    if check:
      if result.changed:
        log_warning(f"Would rewrite [path]{input_path}[/path]")
      return result

    if output_path is None:
      print(result.code, end="")
    elif result.changed or output_path != input_path:
      output_path.parent.mkdir(parents=True, exist_ok=True)
      with open(output_path, "wt", encoding="utf-8") as f:
        f.write(result.code)
      log_success(f"Rewrote: [path]{input_path}[/path] -> [path]{output_path}[/path]")

    return result
  except Exception as e:
    log_error(f"Failed to rewrite {input_path}: {e}")
    return ConversionResult(success=False, errors=[str(e)])


def _print_batch_summary(results: Dict[str, ConversionResult], check: bool = False) -> None:
  """
  Renders a summary table of rewrite results to the console.

  Args:
      results: Dictionary mapping filenames to results.
      check: Whether the run was a dry ``--check`` run.
  """
  total = len(results)
  failures = sum(1 for r in results.values() if not r.success)
  changed = sum(1 for r in results.values() if r.success and r.changed)

  if failures == 0 and changed == 0:
    log_success(f"Batch Complete: {total} file(s) already up to date.")
    return

  verb = "would change" if check else "rewritten"
  table = Table(title="Hook Dependency Report")
  table.add_column("File", style="cyan")
  table.add_column("Status", justify="center")
  table.add_column("Hook Calls", justify="right")
  table.add_column("Issues", style="red")

  for filename, res in results.items():
    if res.success and not res.changed:
      continue
    status = "❌ Failed" if not res.success else f"✏️ {verb}"
    table.add_row(filename, status, str(len(res.call_sites)), "; ".join(res.errors))

  console.print(table)
  console.print(f"\n[bold]Summary:[/bold] {changed} {verb}, {failures} failed, {total} total.")
