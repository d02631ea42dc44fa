"""
Enumerations for hook-deps.

This module defines the enumerations shared by the rewriter, the result model
and the CLI reporting tables.
"""

from enum import Enum


class DepsArgShape(str, Enum):
  """
  Shape of the second argument of a hook call.

  Decides which branch of the Call-Site Rewriter handles the call.
  """

  ABSENT = "absent"
  ARRAY_LITERAL = "array_literal"
  UNDEFINED = "undefined"  # Explicit opt-out: `useEffect(fn, undefined)`
  OTHER = "other"  # Variables, calls, spreads... left alone


class CallSiteOutcome(str, Enum):
  """
  Terminal outcome of processing one hook call site.
  """

  UNMODIFIED = "unmodified"
  DEPS_REMOVED = "deps_removed"
  DEPS_APPENDED = "deps_appended"
  SKIPPED = "skipped"
