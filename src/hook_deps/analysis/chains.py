"""
Access Chain Reconstruction.

An access chain is a dotted (optionally ``?.``-joined) path rooted at a name,
e.g. ``state.foo?.bar``. This module provides the immutable ``AccessChain``
value and ``reconstruct_chain``, which rebuilds the chain written at a member
access or at the callee of a call expression.

Descent follows ``object`` links (and the ``function`` link of a call) and
stops at the first node that is neither a member access nor an identifier.
That node is the *boundary*: a call (``a.b().c``), a subscript (``a[0].b``),
``this``, a parenthesised expression... The boundary is reported, not
included, and the caller decides what to do with the partial result.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from tree_sitter import Node

from hook_deps.compiler.frontends.javascript import (
  CALL_EXPRESSION,
  IDENTIFIER,
  MEMBER_EXPRESSION,
  is_optional,
  node_text,
)

ROOT = ""
DOT = "."
OPTIONAL_DOT = "?."


@dataclass(frozen=True)
class AccessChain:
  """
  An ordered sequence of (segment, operator) pairs.

  ``operators[i]`` is the operator written *before* ``segments[i]``; the root
  has no operator (``""``).
  """

  segments: Tuple[str, ...]
  operators: Tuple[str, ...]

  def __post_init__(self) -> None:
    if not self.segments:
      raise ValueError("An access chain needs at least one segment")
    if len(self.segments) != len(self.operators):
      raise ValueError("Every segment needs exactly one operator")
    if self.operators[0] != ROOT:
      raise ValueError("The root segment cannot carry an operator")
    for op in self.operators[1:]:
      if op not in (DOT, OPTIONAL_DOT):
        raise ValueError(f"Unknown chain operator: '{op}'")

  @classmethod
  def single(cls, name: str) -> "AccessChain":
    """Builds the one-segment chain for a plain identifier read."""
    return cls((name,), (ROOT,))

  @property
  def root(self) -> str:
    """The name the chain starts at."""
    return self.segments[0]

  def without_last(self) -> Optional["AccessChain"]:
    """
    Drops the final segment (the method name of a call).

    Returns:
        The receiver chain, or None if only the root was left to drop.
    """
    if len(self.segments) == 1:
      return None
    return AccessChain(self.segments[:-1], self.operators[:-1])

  def render(self) -> str:
    """
    Renders the chain exactly as written in source.

    Returns:
        str: e.g. ``state.foo?.bar``.
    """
    return "".join(op + seg for op, seg in zip(self.operators, self.segments))

  def __str__(self) -> str:
    return self.render()

  def __len__(self) -> int:
    return len(self.segments)


@dataclass
class ChainTrace:
  """
  Raw result of a descent.

  Attributes:
      segments: Names collected, root first.
      operators: Operator before each segment (``""`` for an identifier root).
      boundary: The node that stopped the descent, or None if an identifier
          root was reached.
  """

  segments: List[str] = field(default_factory=list)
  operators: List[str] = field(default_factory=list)
  boundary: Optional[Node] = None

  @property
  def complete(self) -> bool:
    return self.boundary is None and bool(self.segments)

  @property
  def hit_call(self) -> bool:
    """True if the descent was cut by a call boundary."""
    return self.boundary is not None and self.boundary.type == CALL_EXPRESSION

  def to_chain(self) -> Optional[AccessChain]:
    """Converts a complete trace to an AccessChain; partial traces yield None."""
    if not self.complete:
      return None
    return AccessChain(tuple(self.segments), tuple(self.operators))


def reconstruct_chain(node: Node) -> ChainTrace:
  """
  Rebuilds the access chain written at a member access or call expression.

  For a call, the chain of its callee is returned (the method name included;
  dropping it is the caller's decision).

  Args:
      node: A ``member_expression`` or ``call_expression`` node.

  Returns:
      ChainTrace: Segments and operators, root first, plus the boundary node
      if the descent did not reach an identifier.
  """
  current = node.child_by_field_name("function") if node.type == CALL_EXPRESSION else node

  segments: List[str] = []
  operators: List[str] = []
  boundary: Optional[Node] = None

  while current is not None:
    if current.type == MEMBER_EXPRESSION:
      prop = current.child_by_field_name("property")
      segments.append(node_text(prop) if prop is not None else "")
      operators.append(OPTIONAL_DOT if is_optional(current) else DOT)
      current = current.child_by_field_name("object")
    elif current.type == IDENTIFIER:
      segments.append(node_text(current))
      operators.append(ROOT)
      current = None
    else:
      boundary = current
      current = None

  segments.reverse()
  operators.reverse()
  return ChainTrace(segments, operators, boundary)
