"""Services Layer — async use cases over the database and the AI assistant.

Invariants:
    - Every function takes (db, user_id, ...) and scopes queries by user_id
    - Services commit explicitly; the request-scoped session rolls back on error

Design Decisions:
    - Module-level functions over service classes: no state to carry (ADR: ExMA no god objects)
    - One service file per resource for locality
"""
