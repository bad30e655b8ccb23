"""Users API Package: CRUD service over a single users table.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Application built by main.create_app(): no module-level app instance, so
      importing the package never reads settings or touches the database
"""
