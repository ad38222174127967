"""ORM Models — SQLAlchemy declarative models for pool aggregates and history.

Invariants:
    - All models inherit from Base (db/base.py)
    - Pool and Account are the only mutable aggregates
    - AuditEntry, PoolSnapshot, AccountSnapshot and PoolTransaction are write-once

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all/alembic
"""

from pool_indexer.models.pool import Pool  # noqa: F401
from pool_indexer.models.account import Account  # noqa: F401
from pool_indexer.models.pool_snapshot import PoolSnapshot  # noqa: F401
from pool_indexer.models.account_snapshot import AccountSnapshot  # noqa: F401
from pool_indexer.models.pool_transaction import PoolTransaction  # noqa: F401
from pool_indexer.models.audit_entry import AuditEntry  # noqa: F401
