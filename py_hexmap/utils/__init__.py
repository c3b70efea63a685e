"""
Helper utilities for callers of the generator.
"""
