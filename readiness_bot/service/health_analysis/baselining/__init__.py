"""
Personalized baselining for daily health metrics.

This package computes the rolling reference values that every score in the engine
compares today's metrics against.
"""
