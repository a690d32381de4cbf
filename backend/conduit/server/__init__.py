"""Server Layer - the generic request pipeline and the route table it runs over.

Invariants:
    - One pipeline for every endpoint; per-endpoint behavior lives in Route descriptors
    - The route table is built once and never mutated

Design Decisions:
    - Route table over one hand-written function per endpoint (ADR: no duplicated boilerplate)
"""
