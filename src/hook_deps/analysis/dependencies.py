"""
Hook Dependency Collection.

This module provides the ``DependencyCollector``, which walks the callback
passed to a hook call and infers the access chains it reads from the
enclosing component scope.

The walk is a single pre-order pass. Each node tag has one handler, and every
handler receives the explicit ``CollectionState`` of the current call site:

1.  **Identifiers** record one-segment chains (``state``).
2.  **Member accesses** that own their chain record it (``state.foo?.bar``).
    A descent cut by a call boundary records nothing; the call is visited on
    its own.
3.  **Calls** record their callee chain without the method name
    (``state.items.map(...)`` -> ``state.items``).
4.  **Declarations** and function/class declaration names extend the local
    bindings of the current scope. Parameters of nested functions, catch
    parameters and loop-head bindings shadow outer names only inside their
    own body (a nested ``CollectionState``).

After the walk, chains whose root is not bound in the enclosing component
scope (module constants, globals, imports) are filtered out.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Set, Union

from tree_sitter import Node

from hook_deps.analysis.chains import AccessChain, reconstruct_chain
from hook_deps.analysis.scopes import (
  ScopeBindings,
  function_parameter_names,
  is_scope_bound,
  pattern_names,
)
from hook_deps.compiler.frontends.javascript import (
  CALL_EXPRESSION,
  FUNCTION_TYPES,
  IDENTIFIER,
  MEMBER_EXPRESSION,
  SHORTHAND_PROPERTY,
  VARIABLE_DECLARATOR,
  is_field,
  node_text,
)

logger = logging.getLogger(__name__)

_DECLARATION_FUNCTIONS = frozenset(("function_declaration", "generator_function_declaration"))


class DependencySet:
  """
  Insertion-ordered set of AccessChains, deduplicated by rendered text.
  """

  def __init__(self, chains: Iterable[AccessChain] = ()) -> None:
    self._chains: Dict[str, AccessChain] = {}
    for chain in chains:
      self.add(chain)

  def add(self, chain: AccessChain) -> bool:
    """
    Records a chain unless an identical rendering is already present.

    Returns:
        bool: True if the chain was new.
    """
    key = chain.render()
    if key in self._chains:
      return False
    self._chains[key] = chain
    return True

  def filtered(self, bindings: ScopeBindings) -> "DependencySet":
    """
    Applies the Scope Filter to every chain, keeping the order.

    Args:
        bindings: Names visible at the call site.

    Returns:
        DependencySet: A new set holding only scope-bound chains.
    """
    return DependencySet(chain for chain in self if is_scope_bound(chain.root, bindings))

  def render(self) -> List[str]:
    """Rendered chains in first-encountered order."""
    return list(self._chains)

  def to_array_literal(self) -> str:
    """
    Synthesizes the dependency array argument.

    Returns:
        str: e.g. ``[state.foo, state]``; ``[]`` when empty.
    """
    return "[" + ", ".join(self._chains) + "]"

  def __iter__(self) -> Iterator[AccessChain]:
    return iter(list(self._chains.values()))

  def __len__(self) -> int:
    return len(self._chains)

  def __contains__(self, item: Union[str, AccessChain]) -> bool:
    key = item.render() if isinstance(item, AccessChain) else item
    return key in self._chains

  def __repr__(self) -> str:
    return f"DependencySet({self.render()!r})"


class LocalBindingSet:
  """
  Names declared inside the callback being analysed. Add-only within one
  scope; nested scopes work on an ``extended`` copy.
  """

  def __init__(self, names: Iterable[str] = ()) -> None:
    self._names: Set[str] = set(names)

  def extended(self, names: Iterable[str]) -> "LocalBindingSet":
    """Returns a copy holding these names plus ``names``."""
    child = LocalBindingSet(self._names)
    child.add_all(names)
    return child

  def add(self, name: str) -> None:
    self._names.add(name)

  def add_all(self, names: Iterable[str]) -> None:
    self._names.update(names)

  def __contains__(self, name: object) -> bool:
    return name in self._names

  def __len__(self) -> int:
    return len(self._names)

  def __iter__(self) -> Iterator[str]:
    return iter(sorted(self._names))


@dataclass
class CollectionState:
  """
  Per-call-site traversal state. Never shared between call sites.
  """

  dependencies: DependencySet = field(default_factory=DependencySet)
  locals: LocalBindingSet = field(default_factory=LocalBindingSet)

  def nested(self, names: Iterable[str] = ()) -> "CollectionState":
    """
    State for a nested scope (function, catch clause, loop head).

    Dependencies are shared with the parent; names bound in the nested scope
    never leak back out.
    """
    return CollectionState(dependencies=self.dependencies, locals=self.locals.extended(names))


class DependencyCollector:
  """
  Infers the dependency list of one hook callback.
  """

  def __init__(self, callee_name: str, bindings: ScopeBindings) -> None:
    """
    Initializes the collector.

    Args:
        callee_name: The hook being invoked; never reported as a dependency.
        bindings: Names bound in the scopes enclosing the hook call.
    """
    self.callee_name = callee_name
    self.bindings = bindings
    self._handlers: Dict[str, Callable[[Node, CollectionState], None]] = {
      IDENTIFIER: self._visit_identifier,
      SHORTHAND_PROPERTY: self._visit_identifier,
      MEMBER_EXPRESSION: self._visit_member,
      CALL_EXPRESSION: self._visit_call,
      VARIABLE_DECLARATOR: self._visit_declarator,
      "catch_clause": self._visit_catch,
      "for_in_statement": self._visit_for_in,
      "class_declaration": self._visit_class,
      "class": self._visit_class,
      "jsx_opening_element": self._visit_jsx_element,
      "jsx_self_closing_element": self._visit_jsx_element,
      "jsx_closing_element": self._skip,
      "comment": self._skip,
    }
    for function_type in FUNCTION_TYPES:
      self._handlers[function_type] = self._visit_function

  def collect(self, callback: Node, state: Optional[CollectionState] = None) -> DependencySet:
    """
    Walks the callback and returns its scope-bound dependencies.

    Args:
        callback: The hook's callback argument (usually an arrow function).
        state: Optional pre-seeded state; a fresh one is used by default.

    Returns:
        DependencySet: Filtered chains in first-encountered order.
    """
    state = state or CollectionState()
    self._visit(callback, state)
    result = state.dependencies.filtered(self.bindings)
    logger.debug(
      "%s: collected %s, kept %s (locals: %s)",
      self.callee_name,
      state.dependencies.render(),
      result.render(),
      list(state.locals),
    )
    return result

  # --- Dispatch ---

  def _visit(self, node: Node, state: CollectionState) -> None:
    handler = self._handlers.get(node.type, self._visit_children)
    handler(node, state)

  def _visit_children(self, node: Node, state: CollectionState) -> None:
    for child in node.named_children:
      self._visit(child, state)

  def _skip(self, node: Node, state: CollectionState) -> None:
    pass

  def _record(self, chain: Optional[AccessChain], state: CollectionState) -> None:
    if chain is None or chain.root in state.locals:
      return
    state.dependencies.add(chain)

  # --- Reads ---

  def _visit_identifier(self, node: Node, state: CollectionState) -> None:
    # The member chain owns its object identifier.
    if node.parent is not None and node.parent.type == MEMBER_EXPRESSION and is_field(node.parent, "object", node):
      return

    name = node_text(node)
    if name == self.callee_name:
      return
    self._record(AccessChain.single(name), state)

  def _visit_member(self, node: Node, state: CollectionState) -> None:
    parent = node.parent
    owned_by_member = parent is not None and parent.type == MEMBER_EXPRESSION and is_field(parent, "object", node)
    is_callee = parent is not None and parent.type == CALL_EXPRESSION and is_field(parent, "function", node)

    if not owned_by_member and not is_callee:
      self._record(reconstruct_chain(node).to_chain(), state)

    self._visit_children(node, state)

  def _visit_call(self, node: Node, state: CollectionState) -> None:
    chain = reconstruct_chain(node).to_chain()
    if chain is not None:
      self._record(chain.without_last(), state)

    self._visit_children(node, state)

  # --- Bindings ---

  def _visit_declarator(self, node: Node, state: CollectionState) -> None:
    target = node.child_by_field_name("name")
    state.locals.add_all(pattern_names(target))
    if target is not None:
      self._visit_pattern(target, state)

    value = node.child_by_field_name("value")
    if value is not None:
      self._visit(value, state)

  def _visit_pattern(self, pattern: Node, state: CollectionState) -> None:
    """Visits the expressions embedded in a binding pattern (defaults, computed keys)."""
    kind = pattern.type
    if kind in (IDENTIFIER, "shorthand_property_identifier_pattern"):
      return
    if kind in ("assignment_pattern", "object_assignment_pattern"):
      left = pattern.child_by_field_name("left")
      right = pattern.child_by_field_name("right")
      if left is not None:
        self._visit_pattern(left, state)
      if right is not None:
        self._visit(right, state)
      return
    if kind == "pair_pattern":
      key = pattern.child_by_field_name("key")
      value = pattern.child_by_field_name("value")
      if key is not None and key.type == "computed_property_name":
        self._visit(key, state)
      if value is not None:
        self._visit_pattern(value, state)
      return
    if kind in ("object_pattern", "array_pattern", "rest_pattern", "formal_parameters"):
      for child in pattern.named_children:
        self._visit_pattern(child, state)
      return
    # Assignment targets like `this.x` in `[this.x] = pair` are ordinary expressions.
    self._visit(pattern, state)

  def _visit_function(self, node: Node, state: CollectionState) -> None:
    name = node.child_by_field_name("name")
    scoped_names = function_parameter_names(node)
    if name is not None and name.type == IDENTIFIER:
      # Declarations bind in the enclosing scope, expression names only inside.
      if node.type in _DECLARATION_FUNCTIONS:
        state.locals.add(node_text(name))
      else:
        scoped_names.append(node_text(name))

    # Computed method names (`[key]() {}`) are reads of the enclosing scope.
    if name is not None and name.type == "computed_property_name":
      self._visit(name, state)

    inner = state.nested(scoped_names)
    parameters = node.child_by_field_name("parameters")
    if parameters is not None:
      self._visit_pattern(parameters, inner)

    body = node.child_by_field_name("body")
    if body is not None:
      self._visit(body, inner)

  def _visit_class(self, node: Node, state: CollectionState) -> None:
    name = node.child_by_field_name("name")
    inner = state
    if name is not None:
      if node.type == "class_declaration":
        state.locals.add(node_text(name))
      else:
        inner = state.nested([node_text(name)])
    for child in node.named_children:
      if name is not None and child == name:
        continue
      self._visit(child, inner)

  def _visit_catch(self, node: Node, state: CollectionState) -> None:
    parameter = node.child_by_field_name("parameter")
    inner = state.nested(pattern_names(parameter))
    if parameter is not None:
      self._visit_pattern(parameter, inner)
    body = node.child_by_field_name("body")
    if body is not None:
      self._visit(body, inner)

  def _visit_for_in(self, node: Node, state: CollectionState) -> None:
    left = node.child_by_field_name("left")
    right = node.child_by_field_name("right")
    if right is not None:
      self._visit(right, state)

    inner = state
    if left is not None:
      if node.child_by_field_name("kind") is not None:
        inner = state.nested(pattern_names(left))
        self._visit_pattern(left, inner)
      else:
        self._visit(left, state)

    body = node.child_by_field_name("body")
    if body is not None:
      self._visit(body, inner)

  # --- JSX ---

  def _visit_jsx_element(self, node: Node, state: CollectionState) -> None:
    name = node.child_by_field_name("name")
    for child in node.named_children:
      if name is not None and child == name and _is_intrinsic_tag(child):
        continue
      self._visit(child, state)


def _is_intrinsic_tag(name: Node) -> bool:
  """`<div>` names a DOM element, `<Item>` a component value."""
  if name.type != IDENTIFIER:
    return False
  text = node_text(name)
  return bool(text) and text[0].islower()
