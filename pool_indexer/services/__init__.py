"""Services Layer — entity store, accounting handlers, event dispatch and pipeline.

Invariants:
    - Handlers split by event family (transfer, swap, liquidity, parameters)
    - Event dispatch uses an explicit type -> handler mapping (no auto-discovery)
"""
