"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Parsing helpers that locate syntax nodes by type and text.
- Snapshot testing fixture for CLI output stability.
- Logging and console isolation between tests.
"""

import logging
import sys
import textwrap
import pytest
from pathlib import Path
from typing import Callable, Iterator, Optional

# Add src to path so we can import 'hook_deps' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from tree_sitter import Node

from hook_deps.compiler.frontends.javascript import JavaScriptFrontend, callee_name
from hook_deps.core.engine import HookDepsEngine
from hook_deps.utils.console import reset_console


def walk(node: Node) -> Iterator[Node]:
  """Pre-order traversal over every node, anonymous ones included."""
  yield node
  for child in node.children:
    yield from walk(child)


class SnapshotAssert:
  """
  Simple snapshot comparison logic to verify CLI output stability.
  """

  def __init__(self, request: pytest.FixtureRequest):
    self.request = request
    self.test_name = request.node.name
    self.snapshot_dir = Path(request.node.fspath).parent / "__snapshots__"
    self.update_mode = request.config.getoption("--update-snapshots", default=False)

  def assert_match(self, content: str, extension: str = "txt", normalizer: Optional[Callable[[str], str]] = None):
    """
    Compares content against stored file, creating it on first run.

    Args:
        content: The actual output string.
        extension: File extension (default 'txt', 'json', etc).
        normalizer: Optional function applied to both sides before comparison.
    """
    self.snapshot_dir.mkdir(parents=True, exist_ok=True)
    snapshot_file = self.snapshot_dir / f"{self.test_name}.{extension}"
    content = content.replace("\r\n", "\n")

    if self.update_mode or not snapshot_file.exists():
      snapshot_file.write_text(normalizer(content) if normalizer else content, encoding="utf-8")
      if self.update_mode:
        return

    expected = snapshot_file.read_text(encoding="utf-8").replace("\r\n", "\n")
    lhs, rhs = content, expected
    if normalizer:
      lhs, rhs = normalizer(lhs), normalizer(rhs)

    assert lhs == rhs, f"Snapshot mismatch for {snapshot_file.name}. Run pytest with --update-snapshots to accept changes."


@pytest.fixture
def snapshot(request):
  """Fixture to assert text matches a stored snapshot."""
  return SnapshotAssert(request)


@pytest.fixture
def js() -> Callable[[str], str]:
  """Dedents an inline JavaScript snippet and drops the leading newline."""

  def _dedent(code: str) -> str:
    return textwrap.dedent(code).lstrip("\n")

  return _dedent


@pytest.fixture
def engine() -> HookDepsEngine:
  return HookDepsEngine()


@pytest.fixture
def parse_js():
  """Returns a callable parsing source text into a tree-sitter Tree."""
  return JavaScriptFrontend().parse


@pytest.fixture
def find_node(parse_js):
  """
  Returns a finder ``(code, node_type, text=None, index=0) -> Node``.

  Matches nodes by type and, optionally, by their exact source text.
  """

  def _find(code: str, node_type: str, text: Optional[str] = None, index: int = 0) -> Node:
    tree = parse_js(code)
    matches = [
      node
      for node in walk(tree.root_node)
      if node.type == node_type and (text is None or node.text.decode("utf-8") == text)
    ]
    assert len(matches) > index, f"No {node_type} node matching {text!r}"
    return matches[index]

  return _find


@pytest.fixture
def find_hook_call(parse_js):
  """Returns a finder for the first call to ``hook`` (default ``useMemo``)."""

  def _find(code: str, hook: str = "useMemo") -> Node:
    tree = parse_js(code)
    for node in walk(tree.root_node):
      if node.type == "call_expression" and callee_name(node) == hook:
        return node
    raise AssertionError(f"No call to {hook} in source")

  return _find


@pytest.fixture(autouse=True)
def isolate_logging():
  """
  Restores the root logger level and the console backend after each test,
  so verbose CLI runs or recording consoles do not leak.
  """
  root = logging.getLogger()
  level = root.level
  yield
  root.setLevel(level)
  reset_console()


def pytest_addoption(parser):
  """Add CLI flag to update snapshots."""
  parser.addoption("--update-snapshots", action="store_true", default=False, help="Update snapshots for visual tests")
