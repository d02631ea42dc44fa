"""
Tests for the 'convert' command handler.

Verifies that:
1. A single file is printed to stdout, written to --out, or rewritten in place.
2. `--check` writes nothing and signals pending rewrites with exit code 1.
3. Directory runs mirror the tree into --out and skip vendored folders.
4. Parse failures are reported without aborting the batch.
5. JSON traces are written when requested.
"""

import json

from rich.console import Console

from hook_deps.cli.commands import handle_convert
from hook_deps.utils.console import set_console

SOURCE = "function App({ a }) {\n  useEffect(() => a.b);\n}\n"
REWRITTEN = "function App({ a }) {\n  useEffect(() => a.b, [a.b]);\n}\n"


def test_single_file_to_stdout(tmp_path, capsys):
  src = tmp_path / "App.jsx"
  src.write_text(SOURCE, encoding="utf-8")

  assert handle_convert(src, None, None, None) == 0
  assert capsys.readouterr().out == REWRITTEN
  assert src.read_text(encoding="utf-8") == SOURCE


def test_single_file_to_out(tmp_path):
  src = tmp_path / "App.jsx"
  src.write_text(SOURCE, encoding="utf-8")
  out = tmp_path / "build" / "App.jsx"

  assert handle_convert(src, out, None, None) == 0
  assert out.read_text(encoding="utf-8") == REWRITTEN


def test_single_file_in_place(tmp_path):
  src = tmp_path / "App.jsx"
  src.write_text(SOURCE, encoding="utf-8")

  assert handle_convert(src, None, None, None, in_place=True) == 0
  assert src.read_text(encoding="utf-8") == REWRITTEN


def test_check_mode(tmp_path):
  src = tmp_path / "App.jsx"
  src.write_text(SOURCE, encoding="utf-8")

  assert handle_convert(src, None, None, None, check=True) == 1
  assert src.read_text(encoding="utf-8") == SOURCE

  src.write_text(REWRITTEN, encoding="utf-8")
  assert handle_convert(src, None, None, None, check=True) == 0


def test_custom_hooks_from_cli(tmp_path, capsys):
  src = tmp_path / "App.js"
  src.write_text("function App({ a }) {\n  useThing(() => a);\n}\n", encoding="utf-8")

  assert handle_convert(src, None, None, ["useThing"]) == 0
  assert "useThing(() => a, [a]);" in capsys.readouterr().out


def test_invalid_hook_name_fails(tmp_path):
  src = tmp_path / "App.js"
  src.write_text(SOURCE, encoding="utf-8")
  assert handle_convert(src, None, ["not-a-hook"], None) == 1


def test_missing_input(tmp_path):
  assert handle_convert(tmp_path / "missing.js", None, None, None) == 1


def test_directory_requires_destination(tmp_path):
  (tmp_path / "App.js").write_text(SOURCE, encoding="utf-8")
  assert handle_convert(tmp_path, None, None, None) == 1


def test_directory_to_out(tmp_path):
  src_dir = tmp_path / "src"
  (src_dir / "components").mkdir(parents=True)
  (src_dir / "node_modules" / "lib").mkdir(parents=True)
  (src_dir / "components" / "App.jsx").write_text(SOURCE, encoding="utf-8")
  (src_dir / "util.mjs").write_text("export const x = 1;\n", encoding="utf-8")
  (src_dir / "notes.md").write_text("# notes\n", encoding="utf-8")
  (src_dir / "node_modules" / "lib" / "index.js").write_text(SOURCE, encoding="utf-8")
  out_dir = tmp_path / "out"

  assert handle_convert(src_dir, out_dir, None, None) == 0

  assert (out_dir / "components" / "App.jsx").read_text(encoding="utf-8") == REWRITTEN
  assert (out_dir / "util.mjs").read_text(encoding="utf-8") == "export const x = 1;\n"
  assert not (out_dir / "notes.md").exists()
  assert not (out_dir / "node_modules").exists()


def test_directory_in_place_with_failure(tmp_path):
  good = tmp_path / "Good.js"
  bad = tmp_path / "Bad.js"
  good.write_text(SOURCE, encoding="utf-8")
  bad.write_text("function (\n", encoding="utf-8")

  assert handle_convert(tmp_path, None, None, None, in_place=True) == 1
  assert good.read_text(encoding="utf-8") == REWRITTEN
  assert bad.read_text(encoding="utf-8") == "function (\n"


def test_directory_check_reports_summary(tmp_path):
  console = Console(record=True, width=200)
  set_console(console)
  (tmp_path / "App.js").write_text(SOURCE, encoding="utf-8")
  (tmp_path / "Done.js").write_text(REWRITTEN, encoding="utf-8")

  assert handle_convert(tmp_path, None, None, None, check=True) == 1

  output = console.export_text()
  assert "Would rewrite" in output
  assert "App.js" in output
  assert "Summary:" in output
  assert "1 would change, 0 failed, 2 total." in output


def test_up_to_date_directory(tmp_path):
  console = Console(record=True, width=200)
  set_console(console)
  (tmp_path / "Done.js").write_text(REWRITTEN, encoding="utf-8")

  assert handle_convert(tmp_path, None, None, None, check=True) == 0
  assert "already up to date" in console.export_text()


def test_json_trace_single_file(tmp_path):
  src = tmp_path / "App.js"
  src.write_text(SOURCE, encoding="utf-8")
  trace = tmp_path / "trace.json"

  assert handle_convert(src, tmp_path / "App.out.js", None, None, json_trace_path=trace) == 0

  events = json.loads(trace.read_text(encoding="utf-8"))
  call_sites = [e for e in events if e["type"] == "call_site"]
  assert call_sites[0]["metadata"]["dependencies"] == ["a.b"]


def test_json_trace_directory(tmp_path):
  src_dir = tmp_path / "src"
  (src_dir / "pages").mkdir(parents=True)
  (src_dir / "pages" / "Home.jsx").write_text(SOURCE, encoding="utf-8")
  traces = tmp_path / "traces"

  assert handle_convert(src_dir, tmp_path / "out", None, None, json_trace_path=traces) == 0
  assert (traces / "pages" / "Home.jsx.trace.json").exists()
