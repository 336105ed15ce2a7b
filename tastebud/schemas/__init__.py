"""Pydantic Schemas — request/response/trigger validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (RPC input, trigger documents, responses)

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
