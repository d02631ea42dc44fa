"""
hook-deps Package.

Infers the dependency arrays of React memoization/effect hooks and writes them
into the source, so ``useMemo``, ``useEffect`` and ``useCallback`` calls never
need a hand-maintained dependency list.

Usage
-----

Simple String Rewrite
^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import hook_deps
    code = "function App({ a }) { const b = useMemo(() => a.x * 2); }"
    print(hook_deps.add_hook_deps(code))
    # function App({ a }) { const b = useMemo(() => a.x * 2, [a.x]); }

Advanced Usage (Engine)
^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from hook_deps import HookDepsEngine, RuntimeConfig

    config = RuntimeConfig(hook_names=["useMemo", "useLayoutEffect"])
    res = HookDepsEngine(config=config).run(code)

    for site in res.call_sites:
        print(site.hook, site.line, site.outcome, site.dependencies)
"""

from typing import List, Optional

from hook_deps.config import RuntimeConfig
from hook_deps.core.engine import HookDepsEngine
from hook_deps.core.conversion_result import CallSiteReport, ConversionResult

__version__ = "0.1.0"


def add_hook_deps(code: str, hook_names: Optional[List[str]] = None) -> str:
  """
  Rewrites every recognized hook call in a JavaScript source string.

  Args:
      code (str): The source code to rewrite.
      hook_names (List[str], optional): Hooks to handle. Defaults to
          ``useMemo``, ``useEffect`` and ``useCallback``.

  Returns:
      str: The rewritten source code.

  Raises:
      ValueError: If the source cannot be parsed.
  """
  engine = HookDepsEngine(hook_names=hook_names)
  result = engine.run(code)

  if not result.success:
    error_msg = "\n".join(result.errors)
    raise ValueError(f"Rewrite failed:\n{error_msg}")

  return result.code


__all__ = [
  "CallSiteReport",
  "ConversionResult",
  "HookDepsEngine",
  "RuntimeConfig",
  "add_hook_deps",
  "__version__",
]
