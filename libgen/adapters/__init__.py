"""
Adapters — delegated generators the library generator calls by name.
"""
