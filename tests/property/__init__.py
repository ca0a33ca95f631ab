"""
Property-based tests for facade resolution invariants.
"""
