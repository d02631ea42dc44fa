"""
CLI Command Facade.

Re-exports the command handlers so the entry point (and tests) reference a
single module.
"""

from hook_deps.cli.handlers.convert import handle_convert
from hook_deps.cli.handlers.inspect import handle_inspect

__all__ = ["handle_convert", "handle_inspect"]
