"""
Call-Site Rewriting Logic.

Finds every call to a recognized hook and decides, from the shape of its
second argument, what to do with it:

- no dependency argument -> infer the dependencies and append them,
- an array literal -> leave it alone (hand-written lists are authoritative),
- ``undefined`` -> drop the argument (explicit opt-out of a dependency list),
- anything else -> leave it alone.

The rewriter never descends into a hook call it has handled, so hooks nested
inside a callback are neither rewritten nor mistaken for dependencies.
"""

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Optional, Union

from tree_sitter import Node, Tree

from hook_deps.analysis.dependencies import DependencyCollector
from hook_deps.analysis.scopes import collect_scope_bindings
from hook_deps.compiler.frontends.javascript import (
  ARRAY,
  CALL_EXPRESSION,
  call_arguments,
  callee_name,
  is_undefined,
)
from hook_deps.core.conversion_result import CallSiteReport
from hook_deps.core.rewriter.patcher import AppendArgument, PatchAction, RemoveArgument
from hook_deps.core.tracer import TraceLogger
from hook_deps.enums import CallSiteOutcome, DepsArgShape

logger = logging.getLogger(__name__)


@dataclass
class CallSite:
  """
  A hook call under consideration.

  Attributes:
      node: The ``call_expression`` node.
      callee: The hook name.
      arguments: Argument expressions, in order.
  """

  node: Node
  callee: str
  arguments: List[Node]

  @classmethod
  def match(cls, node: Node, hook_names: FrozenSet[str]) -> Optional["CallSite"]:
    """
    Builds a CallSite if ``node`` calls one of the recognized hooks by bare name.

    Args:
        node: Any syntax node.
        hook_names: Recognized hook names.

    Returns:
        The CallSite, or None for ineligible nodes.
    """
    if node.type != CALL_EXPRESSION:
      return None
    name = callee_name(node)
    if name is None or name not in hook_names:
      return None
    return cls(node=node, callee=name, arguments=call_arguments(node))

  @property
  def deps_shape(self) -> DepsArgShape:
    """Classifies the second argument."""
    if len(self.arguments) < 2:
      return DepsArgShape.ABSENT
    second = self.arguments[1]
    if second.type == ARRAY:
      return DepsArgShape.ARRAY_LITERAL
    if is_undefined(second):
      return DepsArgShape.UNDEFINED
    return DepsArgShape.OTHER

  def separator_before(self, index: int) -> int:
    """
    Start byte of the comma introducing argument ``index``.

    Comments between the previous argument and that comma stay outside the
    returned position.
    """
    previous_end = self.arguments[index - 1].end_byte
    arguments = self.node.child_by_field_name("arguments")
    if arguments is not None:
      for child in arguments.children:
        if child.type == "," and child.start_byte >= previous_end:
          return child.start_byte
    return previous_end

  @property
  def line(self) -> int:
    return self.node.start_point[0] + 1

  @property
  def column(self) -> int:
    return self.node.start_point[1] + 1


@dataclass
class RewritePlan:
  """
  Patch actions and reports gathered over a whole tree.
  """

  actions: List[PatchAction] = field(default_factory=list)
  reports: List[CallSiteReport] = field(default_factory=list)


class CallSiteRewriter:
  """
  Walks a syntax tree and plans the rewrite of every eligible hook call.
  """

  def __init__(self, hook_names: Iterable[str], tracer: Optional[TraceLogger] = None) -> None:
    """
    Initializes the rewriter.

    Args:
        hook_names: Recognized hook names (e.g. useMemo, useEffect, useCallback).
        tracer: Optional trace sink for call-site and mutation events.
    """
    self.hook_names: FrozenSet[str] = frozenset(hook_names)
    self.tracer = tracer

  def rewrite(self, tree: Union[Tree, Node]) -> RewritePlan:
    """
    Plans the rewrite of all hook calls in source order.

    Args:
        tree: A parsed tree or any subtree root.

    Returns:
        RewritePlan: One action per mutated call site plus one report per
        handled call site.
    """
    root = tree.root_node if isinstance(tree, Tree) else tree
    plan = RewritePlan()

    stack: List[Node] = [root]
    while stack:
      node = stack.pop()
      site = CallSite.match(node, self.hook_names)
      if site is not None:
        self._handle(site, plan)
        continue
      stack.extend(reversed(node.named_children))

    return plan

  def _handle(self, site: CallSite, plan: RewritePlan) -> None:
    shape = site.deps_shape
    action: Optional[PatchAction] = None
    dependencies: List[str] = []

    if shape == DepsArgShape.ABSENT:
      if not site.arguments:
        outcome = CallSiteOutcome.SKIPPED
      else:
        bindings = collect_scope_bindings(site.node)
        collected = DependencyCollector(site.callee, bindings).collect(site.arguments[0])
        dependencies = collected.render()
        anchor = site.arguments[-1].end_byte
        action = AppendArgument(start=anchor, end=anchor, text=collected.to_array_literal())
        outcome = CallSiteOutcome.DEPS_APPENDED
    elif shape == DepsArgShape.UNDEFINED:
      action = RemoveArgument(start=site.separator_before(1), end=site.arguments[1].end_byte)
      outcome = CallSiteOutcome.DEPS_REMOVED
    else:
      outcome = CallSiteOutcome.UNMODIFIED

    if action is not None:
      plan.actions.append(action)

    logger.debug("%s at %d:%d -> %s %s", site.callee, site.line, site.column, outcome.value, dependencies)
    plan.reports.append(
      CallSiteReport(
        hook=site.callee,
        line=site.line,
        column=site.column,
        outcome=outcome,
        dependencies=dependencies,
      )
    )

    if self.tracer is not None:
      self.tracer.log_call_site(site.callee, site.line, outcome.value, dependencies)
      if action is not None:
        self.tracer.log_mutation(site.callee, *_preview(site, action))


def _preview(site: CallSite, action: PatchAction):
  """Renders the call text before and after one action."""
  before = site.node.text or b""
  offset = site.node.start_byte
  after = before[: action.start - offset] + action.replacement().encode("utf-8") + before[action.end - offset :]
  return before.decode("utf-8"), after.decode("utf-8")
