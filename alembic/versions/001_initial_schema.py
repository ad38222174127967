"""Initial schema — pools, accounts, snapshots, pool transactions, audit entries.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Exact numerics are stored as text (pool_indexer/db/types.py)
NUM = sa.String(100)


def upgrade() -> None:
    op.create_table(
        "pools",
        sa.Column("id", sa.String(42), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("reserve_a", NUM, nullable=False, server_default="0"),
        sa.Column("reserve_b", NUM, nullable=False, server_default="0"),
        sa.Column("total_supply", NUM, nullable=False, server_default="0"),
        sa.Column("volume", NUM, nullable=False, server_default="0"),
        sa.Column("liquidity_added_a", NUM, nullable=False, server_default="0"),
        sa.Column("liquidity_added_b", NUM, nullable=False, server_default="0"),
        sa.Column("liquidity_removed_a", NUM, nullable=False, server_default="0"),
        sa.Column("liquidity_removed_b", NUM, nullable=False, server_default="0"),
        sa.Column("created_at", sa.BigInteger, nullable=False),
        sa.Column("updated_at", sa.BigInteger, nullable=False),
    )

    op.create_table(
        "accounts",
        sa.Column("id", sa.String(42), primary_key=True),
        sa.Column("pool_id", sa.String(42), sa.ForeignKey("pools.id"), nullable=False),
        sa.Column("lp_balance", NUM, nullable=False, server_default="0"),
        sa.Column("share_of_pool", NUM, nullable=False, server_default="0"),
        sa.Column("last_activity", sa.BigInteger, nullable=False),
        sa.Column("tx_count", sa.Integer, nullable=False, server_default="0"),
    )

    op.create_table(
        "pool_snapshots",
        sa.Column("id", sa.String(80), primary_key=True),
        sa.Column("pool_id", sa.String(42), sa.ForeignKey("pools.id"), nullable=False),
        sa.Column("tx_hash", sa.String(66), nullable=False),
        sa.Column("log_index", sa.Integer, nullable=False),
        sa.Column("block_number", sa.BigInteger, nullable=False),
        sa.Column("timestamp", sa.BigInteger, nullable=False),
        sa.Column("reserve_a", NUM, nullable=False),
        sa.Column("reserve_b", NUM, nullable=False),
        sa.Column("total_supply", NUM, nullable=False),
        sa.Column("volume", NUM, nullable=False),
        sa.Column("liquidity_added_a", NUM, nullable=False),
        sa.Column("liquidity_added_b", NUM, nullable=False),
        sa.Column("liquidity_removed_a", NUM, nullable=False),
        sa.Column("liquidity_removed_b", NUM, nullable=False),
    )
    op.create_index(
        "ix_pool_snapshots_pool_block", "pool_snapshots",
        ["pool_id", "block_number", "log_index"],
    )

    op.create_table(
        "account_snapshots",
        sa.Column("id", sa.String(80), primary_key=True),
        sa.Column("account_id", sa.String(42), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("pool_id", sa.String(42), sa.ForeignKey("pools.id"), nullable=False),
        sa.Column("tx_hash", sa.String(66), nullable=False),
        sa.Column("log_index", sa.Integer, nullable=False),
        sa.Column("block_number", sa.BigInteger, nullable=False),
        sa.Column("timestamp", sa.BigInteger, nullable=False),
        sa.Column("lp_balance", NUM, nullable=False),
        sa.Column("share_of_pool", NUM, nullable=False),
    )
    op.create_index(
        "ix_account_snapshots_account_block", "account_snapshots",
        ["account_id", "block_number", "log_index"],
    )

    op.create_table(
        "pool_transactions",
        sa.Column("id", sa.String(80), primary_key=True),
        sa.Column("account_id", sa.String(42), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("pool_id", sa.String(42), sa.ForeignKey("pools.id"), nullable=False),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("is_selling_a", sa.Boolean, nullable=True),
        sa.Column("amount_a", NUM, nullable=False),
        sa.Column("amount_b", NUM, nullable=False),
        sa.Column("tx_hash", sa.String(66), nullable=False),
        sa.Column("log_index", sa.Integer, nullable=False),
        sa.Column("block_number", sa.BigInteger, nullable=False),
        sa.Column("timestamp", sa.BigInteger, nullable=False),
        sa.Column("gas_used", NUM, nullable=False, server_default="0"),
    )

    op.create_table(
        "audit_entries",
        sa.Column("id", sa.String(80), primary_key=True),
        sa.Column("event_kind", sa.String(40), nullable=False),
        sa.Column("contract_address", sa.String(42), nullable=False),
        sa.Column("tx_hash", sa.String(66), nullable=False),
        sa.Column("log_index", sa.Integer, nullable=False),
        sa.Column("block_number", sa.BigInteger, nullable=False),
        sa.Column("block_timestamp", sa.BigInteger, nullable=False),
        sa.Column("params", sa.JSON, nullable=False),
    )
    op.create_index(
        "ix_audit_entries_block_log", "audit_entries",
        ["block_number", "log_index"],
    )


def downgrade() -> None:
    op.drop_index("ix_audit_entries_block_log", table_name="audit_entries")
    op.drop_table("audit_entries")
    op.drop_table("pool_transactions")
    op.drop_index("ix_account_snapshots_account_block", table_name="account_snapshots")
    op.drop_table("account_snapshots")
    op.drop_index("ix_pool_snapshots_pool_block", table_name="pool_snapshots")
    op.drop_table("pool_snapshots")
    op.drop_table("accounts")
    op.drop_table("pools")
