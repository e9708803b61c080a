"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (UI requests, API responses)

Design Decisions:
    - Separate from core models: schemas are API contracts, FlowDocument is the domain
"""
