"""Account Routes — read access to LP positions and their snapshot history.

Invariants:
    - Read-only: no route here mutates state
    - Snapshots ordered by (block_number, log_index), newest first
"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pool_indexer.core.errors import ResourceNotFoundError
from pool_indexer.core.identifiers import normalize_address
from pool_indexer.infrastructure.database import get_db
from pool_indexer.models.account import Account
from pool_indexer.models.account_snapshot import AccountSnapshot
from pool_indexer.schemas.read_models import AccountResponse, AccountSnapshotResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/accounts", tags=["accounts"])


async def get_account_or_404(address: str, db: AsyncSession) -> Account:
    account_id = normalize_address(address)
    account = await db.get(Account, account_id)
    if account is None:
        raise ResourceNotFoundError("Account", account_id)
    return account


@router.get("/{address}", response_model=AccountResponse)
async def get_account(address: str, db: AsyncSession = Depends(get_db)):
    return AccountResponse.model_validate(await get_account_or_404(address, db))


@router.get("/{address}/snapshots", response_model=list[AccountSnapshotResponse])
async def list_account_snapshots(
    address: str,
    limit: int = Query(100, ge=1, le=1000),
    db: AsyncSession = Depends(get_db),
):
    account = await get_account_or_404(address, db)
    result = await db.execute(
        select(AccountSnapshot)
        .where(AccountSnapshot.account_id == account.id)
        .order_by(
            AccountSnapshot.block_number.desc(), AccountSnapshot.log_index.desc(),
        )
        .limit(limit)
    )
    return [
        AccountSnapshotResponse.model_validate(s) for s in result.scalars().all()
    ]
