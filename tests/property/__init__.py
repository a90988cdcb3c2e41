# tests/property/__init__.py
"""Property-based tests for flowmap.

Property-based testing validates invariants that must hold for ALL inputs,
not just the specific examples we think of. Normalization must be
deterministic and structurally sound for arbitrary loosely typed payloads.

Test categories:
- core/: Normalization determinism, referential integrity, truncation bounds
"""
