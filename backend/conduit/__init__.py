"""Conduit Server Binding - request dispatch and validation for the Conduit REST API.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
