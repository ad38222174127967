"""Infrastructure Layer — database session management and structured logging.

Invariants:
    - Infrastructure never imports accounting logic
    - All SQLAlchemy failures mapped to DatabaseError before leaving this layer
"""
