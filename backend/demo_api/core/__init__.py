"""Core Layer — pure domain logic, no IO, no async, no shared state.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - All functions are pure and deterministic (inputs are never mutated)

Design Decisions:
    - Functional core separated from imperative shell: patch algorithms are
      testable without a running app or a store
"""
