"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses, patched documents)
    - Wire names are camelCase; Python attributes are snake_case

Design Decisions:
    - One schema module per resource
"""
