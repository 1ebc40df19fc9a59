"""
Shared utilities used across hostwatch entry points.
"""
