"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Domain enums from core/ used for role and status fields
    - Write-only inputs (password, address, account_number, bank_name) never
      appear on a response schema

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
