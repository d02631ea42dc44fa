"""
Entry point for module execution (``python -m hook_deps``).

This module delegates execution to the CLI handler in ``hook_deps.cli.__main__``.
"""

import sys
from hook_deps.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
