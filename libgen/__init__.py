"""
libgen — scaffold node libraries inside a monorepo workspace.
"""

__version__ = "0.1.0"
