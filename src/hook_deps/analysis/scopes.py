"""
Scope Bindings and the Scope Filter.

A hook call may only depend on names declared in the lexical scopes of the
function (component) that contains it: parameters, ``const``/``let``/``var``
declarations, nested function and class declarations. Module top-level
declarations, imports and globals are stable across renders and must never be
listed as dependencies.

This module provides:

1.  ``ScopeBindings``: the immutable set of names visible at a call site.
2.  ``collect_scope_bindings``: the resolver that builds it by walking the
    ancestors of the call up to the outermost enclosing function.
3.  ``is_scope_bound``: the Scope Filter predicate.
4.  ``pattern_names``: the names bound by an identifier or destructuring
    pattern, shared with the Local-Binding Tracker.
"""

from typing import FrozenSet, Iterable, Iterator, List, Optional

from tree_sitter import Node

from hook_deps.compiler.frontends.javascript import FUNCTION_TYPES, IDENTIFIER, node_text

_BLOCK_TYPES = frozenset(("statement_block", "switch_case", "switch_default", "class_static_block"))
_DECLARATION_TYPES = frozenset(("lexical_declaration", "variable_declaration"))
_NAMED_DECLARATION_TYPES = frozenset(
  ("function_declaration", "generator_function_declaration", "class_declaration")
)
_SELF_NAMED_EXPRESSIONS = frozenset(("function_expression", "function", "generator_function", "class"))


class ScopeBindings:
  """
  Read-only set of names bound in the scopes enclosing a call site.
  """

  def __init__(self, names: Iterable[str] = ()) -> None:
    self._names: FrozenSet[str] = frozenset(names)

  @property
  def names(self) -> FrozenSet[str]:
    return self._names

  def __contains__(self, name: object) -> bool:
    return name in self._names

  def __iter__(self) -> Iterator[str]:
    return iter(sorted(self._names))

  def __len__(self) -> int:
    return len(self._names)

  def __eq__(self, other: object) -> bool:
    if isinstance(other, ScopeBindings):
      return self._names == other._names
    return NotImplemented

  def __hash__(self) -> int:
    return hash(self._names)

  def __repr__(self) -> str:
    return f"ScopeBindings({sorted(self._names)!r})"


def is_scope_bound(root_name: str, bindings: ScopeBindings) -> bool:
  """
  The Scope Filter.

  Args:
      root_name: Root segment of a candidate chain.
      bindings: Names visible at the call site.

  Returns:
      bool: True if the chain may become a dependency.
  """
  return root_name in bindings


def pattern_names(pattern: Optional[Node]) -> List[str]:
  """
  Lists the names a binding pattern introduces.

  Handles plain identifiers and every destructuring form:
  ``{a, b: c, d = 1, ...rest}``, ``[x, , y = 2, ...tail]`` and nestings.

  Args:
      pattern: The ``name`` of a declarator, a parameter, a catch parameter...

  Returns:
      List[str]: Bound names in source order.
  """
  if pattern is None:
    return []

  kind = pattern.type
  if kind in (IDENTIFIER, "shorthand_property_identifier_pattern"):
    return [node_text(pattern)]
  if kind == "pair_pattern":
    return pattern_names(pattern.child_by_field_name("value"))
  if kind in ("assignment_pattern", "object_assignment_pattern"):
    return pattern_names(pattern.child_by_field_name("left"))
  if kind in ("object_pattern", "array_pattern", "rest_pattern", "formal_parameters"):
    names: List[str] = []
    for child in pattern.named_children:
      names.extend(pattern_names(child))
    return names

  # Assignment targets such as `[this.a] = ...` bind nothing.
  return []


def function_parameter_names(function: Node) -> List[str]:
  """Names bound by the parameters of a function, arrow function or method."""
  single = function.child_by_field_name("parameter")
  if single is not None:
    return pattern_names(single)
  return pattern_names(function.child_by_field_name("parameters"))


def declared_names(statement: Node) -> List[str]:
  """
  Names a single statement declares in its enclosing block.

  Args:
      statement: A direct child of a block.

  Returns:
      List[str]: Declared names, empty for non-declarations.
  """
  kind = statement.type
  if kind in _DECLARATION_TYPES:
    names: List[str] = []
    for declarator in statement.named_children:
      if declarator.type == "variable_declarator":
        names.extend(pattern_names(declarator.child_by_field_name("name")))
    return names
  if kind in _NAMED_DECLARATION_TYPES:
    name = statement.child_by_field_name("name")
    return [node_text(name)] if name is not None else []
  if kind == "export_statement":
    declaration = statement.child_by_field_name("declaration")
    return declared_names(declaration) if declaration is not None else []
  return []


def _names_in_ancestor(ancestor: Node) -> List[str]:
  kind = ancestor.type
  names: List[str] = []

  if kind in FUNCTION_TYPES:
    names.extend(function_parameter_names(ancestor))
  if kind in _SELF_NAMED_EXPRESSIONS:
    name = ancestor.child_by_field_name("name")
    if name is not None:
      names.append(node_text(name))

  if kind in _BLOCK_TYPES:
    for statement in ancestor.named_children:
      names.extend(declared_names(statement))
  elif kind == "for_statement":
    initializer = ancestor.child_by_field_name("initializer")
    if initializer is not None:
      names.extend(declared_names(initializer))
  elif kind == "for_in_statement":
    if ancestor.child_by_field_name("kind") is not None:
      names.extend(pattern_names(ancestor.child_by_field_name("left")))
  elif kind == "catch_clause":
    names.extend(pattern_names(ancestor.child_by_field_name("parameter")))

  return names


def collect_scope_bindings(node: Node) -> ScopeBindings:
  """
  Resolves the names visible at ``node`` from its enclosing function scopes.

  Walks the ancestor path up to, and including, the outermost function-like
  node. The program (module) level is never inspected, so module constants,
  imports and globals are excluded. A node outside any function has no scope
  bindings.

  Args:
      node: Typically the hook ``call_expression``.

  Returns:
      ScopeBindings: The visible component-local names.
  """
  ancestors: List[Node] = []
  current = node.parent
  while current is not None and current.type != "program":
    ancestors.append(current)
    current = current.parent

  outermost = -1
  for index, ancestor in enumerate(ancestors):
    if ancestor.type in FUNCTION_TYPES:
      outermost = index

  names: List[str] = []
  for ancestor in ancestors[: outermost + 1]:
    names.extend(_names_in_ancestor(ancestor))

  return ScopeBindings(names)
