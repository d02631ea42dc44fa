"""
Source Frontends.

Each frontend turns source text into the syntax tree consumed by the analysis
and rewriting passes.
"""

from hook_deps.compiler.frontends.javascript import JavaScriptFrontend, JavaScriptSyntaxError

__all__ = ["JavaScriptFrontend", "JavaScriptSyntaxError"]
