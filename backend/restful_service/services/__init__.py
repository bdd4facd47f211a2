"""Services Layer — imperative shell around the pure core.

Invariants:
    - Orchestration, IO and framework types live here; decisions live in core/

Design Decisions:
    - Pipeline receives Settings and Authenticator by constructor injection
"""
