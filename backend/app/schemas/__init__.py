"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Status vocabularies mirror core/domain_types.py

Design Decisions:
    - Separate from models and entities: schemas are API contracts, models are persistence
"""
