"""Pydantic Schemas — form and response validation at the API boundary.

Invariants:
    - Form schemas accept raw submitted strings and never touch the store
    - Response schemas are the JSON contract of the routes

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
