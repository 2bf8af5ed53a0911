"""Core Layer — pure domain logic, no IO, no async, no network.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - No I/O: randomness (injectable rng) and uuid4 ids are the only side effects

Design Decisions:
    - Functional core separated from imperative shell: the pairing engine is
      testable without mocks, the services layer owns persistence
"""
