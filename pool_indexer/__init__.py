"""StableSwap Pool Indexer — event-driven accounting for a two-asset liquidity pool.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
