"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Resource endpoints answer through the ResourcePipeline

Design Decisions:
    - Thin routes delegate to services (functional core, imperative shell)
"""
