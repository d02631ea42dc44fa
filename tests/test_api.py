"""
Tests for the top-level package API.
"""

import pytest

import hook_deps


def test_add_hook_deps_basic():
  code = "function App({ a }) { const b = useMemo(() => a.x * 2); }"
  assert hook_deps.add_hook_deps(code) == "function App({ a }) { const b = useMemo(() => a.x * 2, [a.x]); }"


def test_add_hook_deps_custom_hooks():
  code = "function App({ a }) { useMemo(() => a); useThing(() => a); }"
  result = hook_deps.add_hook_deps(code, hook_names=["useThing"])
  assert result == "function App({ a }) { useMemo(() => a); useThing(() => a, [a]); }"


def test_add_hook_deps_invalid_source():
  with pytest.raises(ValueError, match="Rewrite failed"):
    hook_deps.add_hook_deps("function (")


def test_public_exports():
  assert hook_deps.__version__
  for name in hook_deps.__all__:
    assert hasattr(hook_deps, name)
