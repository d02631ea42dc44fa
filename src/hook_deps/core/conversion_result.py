"""
Data structures representing the output of the rewrite pipeline.

This module defines the ``ConversionResult`` Pydantic model, which encapsulates
the rewritten code, the per-call-site reports, any errors encountered, and the
execution trace logs.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field

from hook_deps.enums import CallSiteOutcome


class CallSiteReport(BaseModel):
  """
  What happened to one hook call.
  """

  hook: str = Field(description="Callee name, e.g. 'useMemo'.")
  line: int = Field(description="1-based line of the call.")
  column: int = Field(description="1-based column of the call.")
  outcome: CallSiteOutcome = Field(description="Terminal outcome of the call site.")
  dependencies: List[str] = Field(default_factory=list, description="Inferred dependencies, rendered.")


class ConversionResult(BaseModel):
  """
  Container for the results of a rewrite job.
  """

  code: str = Field(default="", description="The rewritten source code.")
  errors: List[str] = Field(default_factory=list, description="List of error messages encountered.")
  success: bool = Field(
    default=True,
    description="True if the pipeline completed without fatal errors.",
  )
  changed: bool = Field(default=False, description="True if the output differs from the input.")
  call_sites: List[CallSiteReport] = Field(default_factory=list, description="One report per hook call.")
  trace_events: List[Dict[str, Any]] = Field(default_factory=list, description="Execution trace log data.")

  @property
  def has_errors(self) -> bool:
    """
    Check if the result contains any error messages.

    Returns:
        True if one or more errors are present.
    """
    return len(self.errors) > 0
