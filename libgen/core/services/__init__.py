"""
Generators — each produces staged changes against a workspace ``Tree``.
"""
