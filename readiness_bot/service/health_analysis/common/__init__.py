"""
Shared building blocks of the health analysis engine: thresholds, data models and errors.
"""
