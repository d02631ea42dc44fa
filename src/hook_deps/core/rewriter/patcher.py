"""
Source Patcher for Call-Site Surgery.

tree-sitter trees are persistent: nodes cannot be edited in place. The rewriter
therefore expresses each call-site mutation as a ``PatchAction`` over a byte
range of the original source, and the ``SourcePatcher`` applies all of them in
one pass at the end. Every byte outside the patched ranges is preserved, so
comments and formatting survive untouched.
"""

from dataclasses import dataclass
from typing import Iterable, List


@dataclass
class PatchAction:
  """
  Base class for patch instructions.

  Attributes:
      start: First byte of the replaced range.
      end: Byte after the replaced range (``start == end`` inserts).
  """

  start: int
  end: int

  def replacement(self) -> str:
    raise NotImplementedError


@dataclass
class AppendArgument(PatchAction):
  """
  Appends a new trailing argument right after the current last argument.

  Attributes:
      text: Source of the new argument, e.g. ``[state.foo]``.
  """

  text: str = ""

  def replacement(self) -> str:
    return f", {self.text}"


@dataclass
class RemoveArgument(PatchAction):
  """
  Deletes an argument together with the comma that introduced it.

  The range runs from the comma after the preceding argument to the end of
  the removed one, so comments before that comma survive:
  ``fn(a /* x */, undefined)`` -> ``fn(a /* x */)``.
  """

  def replacement(self) -> str:
    return ""


class SourcePatcher:
  """
  Applies non-overlapping PatchActions to source bytes.
  """

  def __init__(self, source: bytes) -> None:
    self.source = source

  def apply(self, actions: Iterable[PatchAction]) -> str:
    """
    Applies every action and decodes the result.

    Args:
        actions: Patches in any order.

    Returns:
        str: The patched source text.

    Raises:
        ValueError: If two actions touch overlapping ranges or a range lies
            outside the source.
    """
    ordered: List[PatchAction] = sorted(actions, key=lambda a: (a.start, a.end))
    self._check(ordered)

    result = self.source
    for action in reversed(ordered):
      result = result[: action.start] + action.replacement().encode("utf-8") + result[action.end :]
    return result.decode("utf-8")

  def _check(self, ordered: List[PatchAction]) -> None:
    previous_end = 0
    for action in ordered:
      if action.start > action.end or action.end > len(self.source):
        raise ValueError(f"Patch range {action.start}:{action.end} is outside the source")
      if action.start < previous_end:
        raise ValueError(f"Overlapping patches at byte {action.start}")
      previous_end = action.end
