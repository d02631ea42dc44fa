"""
Compiler Package.

Hosts the source frontends. The analysis passes operate on the trees these
frontends produce and never parse text themselves.
"""
