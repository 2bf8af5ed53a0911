"""Infrastructure Layer — storage clients and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All external calls wrapped with retry/timeout/error mapping
"""
