"""
JavaScript Frontend.

Wraps the tree-sitter JavaScript grammar (which also covers JSX) to provide a
standard interface for ingesting source text into a syntax tree, together with
the small set of node helpers the analysis passes pattern-match on.

The node vocabulary used across the package:

- ``identifier`` / ``shorthand_property_identifier``: plain name reads.
- ``member_expression``: ``object`` and ``property`` fields; an
  ``optional_chain`` child marks the ``?.`` operator.
- ``call_expression``: ``function`` and ``arguments`` fields; an
  ``optional_chain`` child marks ``fn?.()``.
- ``variable_declarator``: ``name`` (identifier or pattern) and ``value``.
- ``array``: array literal.
- ``undefined``: the ``undefined`` literal.
"""

from typing import List, Optional

import tree_sitter_javascript as tsjavascript
from tree_sitter import Language, Node, Parser, Tree

JS_LANGUAGE = Language(tsjavascript.language())

IDENTIFIER = "identifier"
SHORTHAND_PROPERTY = "shorthand_property_identifier"
MEMBER_EXPRESSION = "member_expression"
SUBSCRIPT_EXPRESSION = "subscript_expression"
CALL_EXPRESSION = "call_expression"
VARIABLE_DECLARATOR = "variable_declarator"
ARRAY = "array"
UNDEFINED = "undefined"
OPTIONAL_CHAIN = "optional_chain"

FUNCTION_TYPES = frozenset(
  (
    "function_declaration",
    "function_expression",
    "function",
    "generator_function",
    "generator_function_declaration",
    "arrow_function",
    "method_definition",
  )
)


class JavaScriptSyntaxError(ValueError):
  """
  Raised when tree-sitter reports an ERROR or MISSING node in the source.

  Attributes:
      line (int): 1-based line of the first error.
      column (int): 1-based column of the first error.
  """

  def __init__(self, line: int, column: int, snippet: str = "") -> None:
    self.line = line
    self.column = column
    self.snippet = snippet
    detail = f" near '{snippet}'" if snippet else ""
    super().__init__(f"Invalid JavaScript at line {line}, column {column}{detail}")


class JavaScriptFrontend:
  """
  Parses JavaScript/JSX source text into a tree-sitter Tree.
  """

  def __init__(self) -> None:
    self._parser = Parser(JS_LANGUAGE)

  def parse(self, code: str) -> Tree:
    """
    Parses source text.

    Args:
        code (str): JavaScript or JSX source.

    Returns:
        Tree: The concrete syntax tree.

    Raises:
        JavaScriptSyntaxError: If the source does not parse cleanly.
    """
    tree = self._parser.parse(code.encode("utf-8"))
    if tree.root_node.has_error:
      error = _first_error(tree.root_node)
      if error is None:
        raise JavaScriptSyntaxError(1, 1)
      row, col = error.start_point
      snippet = node_text(error).splitlines()[0][:40] if error.text else ""
      raise JavaScriptSyntaxError(row + 1, col + 1, snippet)
    return tree


def _first_error(node: Node) -> Optional[Node]:
  """Depth-first search for the first ERROR or MISSING node."""
  if node.type == "ERROR" or node.is_missing:
    return node
  for child in node.children:
    if child.has_error or child.is_missing:
      found = _first_error(child)
      if found is not None:
        return found
  return None


def node_text(node: Node) -> str:
  """Returns the source text covered by a node."""
  return node.text.decode("utf-8") if node.text is not None else ""


def is_optional(node: Node) -> bool:
  """True if a member access or call is written with ``?.``."""
  return node.child_by_field_name(OPTIONAL_CHAIN) is not None or any(
    child.type == OPTIONAL_CHAIN for child in node.children
  )


def is_field(parent: Optional[Node], field: str, node: Node) -> bool:
  """True if ``node`` sits in the named field of ``parent``."""
  if parent is None:
    return False
  child = parent.child_by_field_name(field)
  return child is not None and child == node


def call_arguments(call: Node) -> List[Node]:
  """
  Returns the argument expressions of a call, skipping punctuation and comments.

  Tagged template calls have no argument list and yield ``[]``.
  """
  args = call.child_by_field_name("arguments")
  if args is None or args.type != "arguments":
    return []
  return [child for child in args.named_children if child.type != "comment"]


def callee_name(call: Node) -> Optional[str]:
  """Returns the callee name when it is a bare identifier, else None."""
  function = call.child_by_field_name("function")
  if function is not None and function.type == IDENTIFIER:
    return node_text(function)
  return None


def is_undefined(node: Node) -> bool:
  """True for the ``undefined`` literal."""
  return node.type == UNDEFINED or (node.type == IDENTIFIER and node_text(node) == "undefined")
