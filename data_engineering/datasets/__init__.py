"""
Dataset builders.
"""
