"""
Core Package.

Contains the rewrite pipeline:
- Engine (parse -> plan -> patch)
- Call-Site Rewriter and Source Patcher
- Result model and Trace Logger
"""
