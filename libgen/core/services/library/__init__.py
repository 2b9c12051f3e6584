"""
Node library generator — normalization, file set, build target.
"""
