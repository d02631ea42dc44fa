"""
Rewriter Package.

This package provides the ``CallSiteRewriter``, which plans the mutation of
every recognized hook call, and the ``SourcePatcher``, which applies the
planned actions to the original source bytes.
"""

from hook_deps.core.rewriter.calls import CallSite, CallSiteRewriter, RewritePlan
from hook_deps.core.rewriter.patcher import AppendArgument, PatchAction, RemoveArgument, SourcePatcher

__all__ = [
  "AppendArgument",
  "CallSite",
  "CallSiteRewriter",
  "PatchAction",
  "RemoveArgument",
  "RewritePlan",
  "SourcePatcher",
]
