"""Handler Contract - one Protocol per Conduit resource plus the auth provider.

Invariants:
    - Every operation is async and returns exactly one variant of its Outcome union
    - Claims are opaque: the pipeline passes them through untouched

Design Decisions:
    - Protocol over ABC: structural subtyping, implementations never inherit from us
    - One module per resource, mirroring the OpenAPI tags
"""
