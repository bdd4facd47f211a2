"""Core Layer — pure pipeline logic, no IO, no async, no HTTP framework.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - All functions are pure and deterministic given their inputs

Design Decisions:
    - Functional core separated from imperative shell (pipeline orchestration lives in services/)
"""
