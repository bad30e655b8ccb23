"""Infrastructure Layer: store access and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from api/
    - Every store call maps SQLAlchemy failures to DatabaseError

Design Decisions:
    - No retries on store failures: errors surface to the caller immediately
"""
