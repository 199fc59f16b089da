"""Pydantic Schemas — snapshot models handed to the rendering layer.

Invariants:
    - Schemas validate at the system boundary (core values → renderer JSON)
    - Domain enums from core/ used for enum fields
"""
