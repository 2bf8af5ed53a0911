"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, stored bundles)
    - Domain dataclasses from core/ are produced via to_domain(), never built in routes

Design Decisions:
    - Separate from core: schemas are API contracts, core types are draw inputs
"""
