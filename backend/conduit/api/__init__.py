"""API Layer - FastAPI wiring: global error handlers.

Invariants:
    - Nothing escaping the pipeline reaches the client as a raw traceback
"""
