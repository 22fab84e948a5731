"""Pydantic Schemas - request validation for API endpoints.

Invariants:
    - Schemas validate at the HTTP boundary; wire-field rules live in core.item_schema
"""
