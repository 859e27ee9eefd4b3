"""
SCRIPTOR - Property-Based Testing Suite

Property-based testing using Hypothesis to discover edge cases and invariants
in reference parsing, tokenization, synonym expansion and ranking.
"""
