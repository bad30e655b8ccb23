"""API Layer: FastAPI routes, middleware and error handlers.

Invariants:
    - Routes registered explicitly in main.create_app() (no auto-discovery)
    - All endpoints return JSON except DELETE success (204, empty body)

Design Decisions:
    - Thin routes delegate to the UserRepository protocol
"""
