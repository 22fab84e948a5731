"""Core Layer - pure menu-item logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, models/ or db/
    - All functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: schema mapping and
      projection live here, the controller in services/ awaits collaborators
"""
