"""Route Modules: one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter
    - Routes never contain store logic (delegate to UserRepository)

Design Decisions:
    - Explicit registration in main.create_app() over auto-discovery
"""
