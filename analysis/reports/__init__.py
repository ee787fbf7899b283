"""
Figure generation for pipeline results.
"""
