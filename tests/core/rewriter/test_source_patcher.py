"""
Tests for the byte-range Source Patcher.
"""

import pytest

from hook_deps.core.rewriter import AppendArgument, RemoveArgument, SourcePatcher


def test_insert_and_remove_in_one_pass():
  source = "f(a); g(b, undefined);"
  actions = [
    RemoveArgument(start=source.index(", undefined"), end=source.index(");", 10)),
    AppendArgument(start=3, end=3, text="[a]"),
  ]
  assert SourcePatcher(source.encode("utf-8")).apply(actions) == "f(a, [a]); g(b);"


def test_no_actions_is_identity():
  source = "// untouched\nconst x = 1;\n"
  assert SourcePatcher(source.encode("utf-8")).apply([]) == source


def test_multibyte_text_before_patch():
  source = 'const s = "héllo"; f(a);'
  raw = source.encode("utf-8")
  anchor = raw.index(b"a);") + 1
  assert SourcePatcher(raw).apply([AppendArgument(start=anchor, end=anchor, text="[a]")]) == 'const s = "héllo"; f(a, [a]);'


def test_overlapping_actions_rejected():
  patcher = SourcePatcher(b"f(a, b, c);")
  with pytest.raises(ValueError, match="Overlapping"):
    patcher.apply([RemoveArgument(start=3, end=6), RemoveArgument(start=5, end=9)])


@pytest.mark.parametrize("start, end", [(5, 2), (0, 100)])
def test_out_of_range_actions_rejected(start, end):
  with pytest.raises(ValueError, match="outside"):
    SourcePatcher(b"f(a);").apply([RemoveArgument(start=start, end=end)])
