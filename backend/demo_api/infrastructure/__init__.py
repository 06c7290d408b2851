"""Infrastructure Layer — storage and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Shared mutable state lives here, behind synchronized operations only

Design Decisions:
    - Store exposed as a FastAPI dependency so routes never reach module globals
"""
