"""
Function Approximation Module.

Linear approximators over projected features, meant to be wrapped in a
core.Shared handle and shared between policies and learners.
"""

from fa.linear import LFA, ScalarLFA, VectorLFA

__all__ = ["LFA", "ScalarLFA", "VectorLFA"]
