"""Demo Patch API Package — CRUD over person records with three PATCH protocols.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
