"""
Static Analysis Package.

This package contains the passes that inspect a hook callback before any
rewriting happens.

Modules:
    - ``chains``: Access chain values and their reconstruction from member/call nodes.
    - ``scopes``: Scope bindings visible at a call site and the Scope Filter.
    - ``dependencies``: The Dependency Collector and its ordered/local sets.
"""
