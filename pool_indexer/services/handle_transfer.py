"""Transfer Handler — LP-token mint, burn and account-to-account transfer.

Invariants:
    - Audit entry persisted first, for every Transfer
    - sender == zero address -> mint: receiver.lp_balance += amount
    - receiver == zero address -> burn: sender.lp_balance -= amount
    - otherwise: sender -= amount, receiver += amount, and both shares recomputed
      against the pool's CURRENT total supply (may be stale within a liquidity tx)
    - Mint/burn never touch pool aggregates; the accompanying liquidity event is the
      single writer of total_supply and recomputes the shares of staged accounts
    - One AccountSnapshot per affected account per event
    - No underflow trap: balances may go negative

Design Decisions:
    - Mint/burn accounts staged on TransactionContext (phase 1 of the two-phase protocol)
    - Pool row still get-or-created on mint/burn: Account.pool_id references it
"""

import logging
from pool_indexer.config import Settings
from pool_indexer.core.domain_types import ZERO_ADDRESS, TransferKind
from pool_indexer.core.exact_amounts import add_amount, subtract_amount
from pool_indexer.core.events import TransferEvent
from pool_indexer.core.repository_protocols import EntityStoreLike
from pool_indexer.core.transaction_context import TransactionContext
from pool_indexer.services.refresh_share import refresh_share_of_pool

logger = logging.getLogger(__name__)


def classify_transfer(event: TransferEvent) -> TransferKind:
    if event.sender == ZERO_ADDRESS:
        return TransferKind.MINT
    if event.receiver == ZERO_ADDRESS:
        return TransferKind.BURN
    return TransferKind.TRANSFER


class TransferHandlers:
    """LP-token balance accounting."""

    def __init__(
        self, store: EntityStoreLike, context: TransactionContext, settings: Settings,
    ):
        self.store = store
        self.context = context
        self.settings = settings

    async def handle_transfer(self, event: TransferEvent) -> None:
        await self.store.record_audit_entry(event)

        coords = event.coords
        amount = event.amount
        pool = await self.store.get_or_create_pool(coords.contract_address, coords)
        kind = classify_transfer(event)

        if kind is TransferKind.MINT:
            receiver = await self.store.get_or_create_account(
                event.receiver, pool, coords,
            )
            receiver.lp_balance = add_amount(receiver.lp_balance, amount)
            self.context.stage_supply_change(receiver.id)
            affected = [receiver]
        elif kind is TransferKind.BURN:
            sender = await self.store.get_or_create_account(
                event.sender, pool, coords,
            )
            sender.lp_balance = subtract_amount(sender.lp_balance, amount)
            self.context.stage_supply_change(sender.id)
            affected = [sender]
        else:
            sender = await self.store.get_or_create_account(
                event.sender, pool, coords,
            )
            receiver = await self.store.get_or_create_account(
                event.receiver, pool, coords,
            )
            sender.lp_balance = subtract_amount(sender.lp_balance, amount)
            receiver.lp_balance = add_amount(receiver.lp_balance, amount)
            refresh_share_of_pool(sender, pool, event, self.context, self.settings)
            refresh_share_of_pool(receiver, pool, event, self.context, self.settings)
            affected = [sender, receiver]

        for account in affected:
            await self.store.save(account)
            await self.store.get_or_create_account_snapshot(account, pool, coords)

        logger.debug(
            f"Transfer {kind.value} of {event.amount} LP",
            extra={"tx_hash": coords.tx_hash, "log_index": coords.log_index},
        )
