"""Infrastructure Layer — logging setup and HTTP middleware.

Invariants:
    - No business logic; only cross-cutting transport concerns
"""
