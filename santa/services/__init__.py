"""Services Layer — orchestration between the pure core and the event store.

Invariants:
    - Services own all I/O; core/ functions are called with plain values
"""
