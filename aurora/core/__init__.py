"""Core Layer — pure planner logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Functions are deterministic given their inputs ("now" is always passed in)

Design Decisions:
    - Functional core, imperative shell: services load rows, core computes,
      services persist (ADR: impureim sandwich)
"""
