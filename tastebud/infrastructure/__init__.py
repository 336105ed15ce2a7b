"""Infrastructure Layer — database session management and logging setup.

Invariants:
    - Infrastructure never imports from core/ domain logic (errors excepted)
    - All database failures mapped to DatabaseError

Design Decisions:
    - One module per concern: database.py, observability.py
"""
