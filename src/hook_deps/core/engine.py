"""
Orchestration Engine for Hook Dependency Rewriting.

This module provides the ``HookDepsEngine``, the primary driver of the rewrite.
The pipeline consists of:

1.  **Ingestion**: parses JavaScript/JSX source into a tree-sitter tree.
    Sources that do not parse are returned unchanged with a parse error.
2.  **Rewrite Planning**: the ``CallSiteRewriter`` visits every hook call,
    resolves its scope bindings, runs the Dependency Collector and records one
    patch action per mutated call.
3.  **Patching**: the ``SourcePatcher`` applies all actions to the original
    bytes, preserving every untouched character.

The recognized hook names come from ``RuntimeConfig``; nothing is read from
process-wide state.
"""

import logging
from typing import List, Optional

from tree_sitter import Tree

from hook_deps.compiler.frontends.javascript import JavaScriptFrontend, JavaScriptSyntaxError
from hook_deps.config import RuntimeConfig
from hook_deps.core.conversion_result import ConversionResult
from hook_deps.core.rewriter import CallSiteRewriter, SourcePatcher
from hook_deps.core.tracer import TraceLogger
from hook_deps.enums import CallSiteOutcome

logger = logging.getLogger(__name__)


class HookDepsEngine:
  """
  The main rewrite unit.

  Encapsulates the configuration needed to rewrite a single unit of source
  code. Instances are reusable; every ``run`` starts from fresh state.
  """

  def __init__(
    self,
    config: Optional[RuntimeConfig] = None,
    hook_names: Optional[List[str]] = None,
  ) -> None:
    """
    Initializes the Engine.

    Args:
        config (RuntimeConfig, optional): The runtime configuration object.
            Defaults to the built-in hook names.
        hook_names (List[str], optional): Shortcut that replaces the hook
            names of ``config``.
    """
    config = config or RuntimeConfig()
    if hook_names is not None:
      config = RuntimeConfig(hook_names=hook_names, extensions=config.extensions)
    self.config = config
    self.frontend = JavaScriptFrontend()

  @property
  def hook_names(self) -> List[str]:
    return list(self.config.hook_names)

  def parse(self, code: str) -> Tree:
    """
    Parses source text into a tree-sitter Tree.

    Args:
        code (str): JavaScript/JSX source code.

    Returns:
        Tree: The parsed syntax tree.

    Raises:
        JavaScriptSyntaxError: If the input is not valid JavaScript.
    """
    return self.frontend.parse(code)

  def run(self, code: str) -> ConversionResult:
    """
    Executes the full rewrite pipeline.

    Args:
        code (str): The input source string.

    Returns:
        ConversionResult: Rewritten code, call-site reports and trace events.
    """
    tracer = TraceLogger()
    tracer.start_phase("Hook Dependency Pipeline", ", ".join(self.config.hook_names))

    # --- PHASE 1: INGESTION ---
    tracer.start_phase("Preprocessing", "Parsing JavaScript")
    try:
      tree = self.parse(code)
    except JavaScriptSyntaxError as e:
      tracer.log_warning(str(e))
      tracer.end_phase()
      tracer.end_phase()
      return ConversionResult(
        code=code,
        errors=[f"Parse Error: {e}"],
        success=False,
        trace_events=tracer.export(),
      )
    tracer.end_phase()

    # --- PHASE 2: REWRITE PLANNING ---
    tracer.start_phase("Rewrite Engine", "Call-site traversal")
    rewriter = CallSiteRewriter(self.config.hook_names, tracer=tracer)
    plan = rewriter.rewrite(tree)
    tracer.end_phase()

    # --- PHASE 3: PATCHING ---
    tracer.start_phase("Patching", f"{len(plan.actions)} action(s)")
    final_code = SourcePatcher(code.encode("utf-8")).apply(plan.actions)
    tracer.end_phase()

    appended = sum(1 for r in plan.reports if r.outcome == CallSiteOutcome.DEPS_APPENDED)
    logger.debug("Rewrote %d/%d hook call(s)", appended, len(plan.reports))

    tracer.end_phase()
    return ConversionResult(
      code=final_code,
      success=True,
      changed=final_code != code,
      call_sites=plan.reports,
      trace_events=tracer.export(),
    )
