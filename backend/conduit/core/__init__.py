"""Core Layer - pipeline value types and error taxonomy, no IO, no FastAPI.

Invariants:
    - No module in core/ imports from server/, api/ or infrastructure/
    - Everything here is a plain value or a plain exception

Design Decisions:
    - Functional core separated from the transport shell (ADR: impureim sandwich)
"""
