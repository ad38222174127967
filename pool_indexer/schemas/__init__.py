"""Pydantic Schemas — event payload validation and read-model responses.

Invariants:
    - Schemas validate at system boundary (ingest payloads, API responses)
    - Payloads convert to core event dataclasses before reaching the pipeline

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
