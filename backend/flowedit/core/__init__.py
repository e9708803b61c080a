"""Core Layer — pure document logic, no IO, no async, no HTTP.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
    - Operations never mutate the snapshot they are given

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
