"""
Command Line Interface for hook-deps.
"""
