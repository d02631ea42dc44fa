"""
Inspect Command Handler.

Reports every recognized hook call of a file or directory together with the
dependencies the rewrite would write, without touching any file.
"""

import json
from pathlib import Path
from typing import List, Optional

from rich.table import Table

from hook_deps.cli.handlers.convert import collect_sources
from hook_deps.config import RuntimeConfig
from hook_deps.core.engine import HookDepsEngine
from hook_deps.utils.console import console, log_error, log_warning


def handle_inspect(
  input_path: Path,
  hook_names: Optional[List[str]],
  extra_hooks: Optional[List[str]],
  as_json: bool = False,
) -> int:
  """
  Handles the 'inspect' command.

  Args:
      input_path: File or directory to analyse.
      hook_names: Override for the recognized hook names.
      extra_hooks: Hook names added to the configured set.
      as_json: Emit a JSON list instead of a table.

  Returns:
      int: 0 if every file parsed, 1 otherwise.
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

  if input_path.is_file():
    files = [(input_path, input_path.name)]
  else:
    files = [(p, str(p.relative_to(input_path))) for p in collect_sources(input_path, config.extensions)]

  if not files:
    log_warning(f"No {'/'.join(config.extensions)} files found in {input_path}")
    return 0

  engine = HookDepsEngine(config=config)
  rows = []
  exit_code = 0

  for path, label in files:
    result = engine.run(path.read_text(encoding="utf-8"))
    if not result.success:
      log_error(f"{label}: {'; '.join(result.errors)}")
      exit_code = 1
      continue
    for site in result.call_sites:
      rows.append(
        {
          "file": label,
          "line": site.line,
          "column": site.column,
          "hook": site.hook,
          "outcome": site.outcome.value,
          "dependencies": list(site.dependencies),
        }
      )

  if as_json:
    print(json.dumps(rows, indent=2))
    return exit_code

  table = Table(title="Hook Call Sites")
  table.add_column("File", style="cyan")
  table.add_column("Line", justify="right")
  table.add_column("Hook", style="bold")
  table.add_column("Outcome")
  table.add_column("Dependencies", style="bold magenta")

  for row in rows:
    deps = ", ".join(row["dependencies"]) if row["dependencies"] else "-"
    table.add_row(row["file"], str(row["line"]), row["hook"], row["outcome"], deps)

  console.print(table)
  return exit_code
