"""Pydantic Schemas: request/response shapes for API endpoints.

Invariants:
    - Schemas decode at the system boundary (request bodies, response bodies)

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
