"""Services Layer — async shell around the pure core.

Invariants:
    - Services read from the store, call core/ functions, write results back
    - Every state transition is idempotent under at-least-once trigger delivery

Design Decisions:
    - One file per engine component for locality
    - Trigger dispatch uses explicit methods per document event (no auto-discovery)
"""
