"""Pool Routes — read access to the pool aggregate and its history.

Invariants:
    - Read-only: no route here mutates state
    - Path addresses normalized before lookup (checksummed input accepted)
    - History ordered by (block_number, log_index), newest first
"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pool_indexer.core.errors import ResourceNotFoundError
from pool_indexer.core.identifiers import normalize_address
from pool_indexer.infrastructure.database import get_db
from pool_indexer.models.pool import Pool
from pool_indexer.models.pool_snapshot import PoolSnapshot
from pool_indexer.models.pool_transaction import PoolTransaction
from pool_indexer.schemas.read_models import (
    PoolResponse, PoolSnapshotResponse, PoolTransactionResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/pools", tags=["pools"])


async def get_pool_or_404(address: str, db: AsyncSession) -> Pool:
    """Get pool or raise ResourceNotFoundError. Shared by all pool routes."""
    pool_id = normalize_address(address)
    pool = await db.get(Pool, pool_id)
    if pool is None:
        raise ResourceNotFoundError("Pool", pool_id)
    return pool


@router.get("/{address}", response_model=PoolResponse)
async def get_pool(address: str, db: AsyncSession = Depends(get_db)):
    return PoolResponse.model_validate(await get_pool_or_404(address, db))


@router.get("/{address}/snapshots", response_model=list[PoolSnapshotResponse])
async def list_pool_snapshots(
    address: str,
    limit: int = Query(100, ge=1, le=1000),
    db: AsyncSession = Depends(get_db),
):
    pool = await get_pool_or_404(address, db)
    result = await db.execute(
        select(PoolSnapshot)
        .where(PoolSnapshot.pool_id == pool.id)
        .order_by(PoolSnapshot.block_number.desc(), PoolSnapshot.log_index.desc())
        .limit(limit)
    )
    return [PoolSnapshotResponse.model_validate(s) for s in result.scalars().all()]


@router.get("/{address}/transactions", response_model=list[PoolTransactionResponse])
async def list_pool_transactions(
    address: str,
    limit: int = Query(100, ge=1, le=1000),
    db: AsyncSession = Depends(get_db),
):
    pool = await get_pool_or_404(address, db)
    result = await db.execute(
        select(PoolTransaction)
        .where(PoolTransaction.pool_id == pool.id)
        .order_by(
            PoolTransaction.block_number.desc(), PoolTransaction.log_index.desc(),
        )
        .limit(limit)
    )
    return [
        PoolTransactionResponse.model_validate(t) for t in result.scalars().all()
    ]
