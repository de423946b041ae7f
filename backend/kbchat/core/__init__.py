"""Core Layer — pure domain logic, no IO, no async, no storage.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
    - All functions are pure; the only clock read is injectable

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
