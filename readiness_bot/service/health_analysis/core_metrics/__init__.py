"""
Core scoring modules.

Each module holds one pure function family that turns daily metrics and a baseline
into a score, a classification or a list of findings.
"""
