"""Core Layer: pure domain logic, no IO, no DB.

Invariants:
    - No module in core/ imports from api/, infrastructure/, models/ or db/
    - Metrics collector is the only stateful object here (lock-guarded counters)

Design Decisions:
    - Error taxonomy, id parsing and counters live here so routes and
      middleware share one definition of each
"""
