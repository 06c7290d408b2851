"""Services Layer — request-level orchestration between routes, core and storage.

Invariants:
    - Services hold no state beyond their injected repository
    - Pure algorithms live in core/; services only sequence them around IO

Design Decisions:
    - One service class per resource
"""
