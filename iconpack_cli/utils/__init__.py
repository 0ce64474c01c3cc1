"""
Shared helpers for paths and API resilience.
"""
