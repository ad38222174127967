"""Core Layer — pure domain logic: identifiers, typed events, share math, errors.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - No IO, no async, no DB

Design Decisions:
    - Functional core separated from imperative shell: handlers in services/
      load aggregates, call core math, persist the result
"""
