"""Event builders shared by service, pipeline and API tests.

Coordinates default to tx hash == block number so that one event per block
needs no bookkeeping; pass tx_n to put several logs in one transaction.
"""

from pool_indexer.core.domain_types import ZERO_ADDRESS, Address
from pool_indexer.core.events import (
    AddLiquidityEvent,
    ApplyNewFeeEvent,
    EventCoordinates,
    RampAEvent,
    RemoveLiquidityEvent,
    RemoveLiquidityImbalanceEvent,
    RemoveLiquidityOneEvent,
    TokenExchangeEvent,
    TransferEvent,
)

POOL = Address("0x" + "ab" * 20)
ALICE = Address("0x" + "11" * 20)
BOB = Address("0x" + "22" * 20)
CAROL = Address("0x" + "33" * 20)
ZERO = ZERO_ADDRESS

GENESIS_TIME = 1_700_000_000


def tx(n: int) -> str:
    return "0x" + f"{n:064x}"


def coords(block: int, log: int, tx_n: int | None = None) -> EventCoordinates:
    return EventCoordinates(
        tx_hash=tx(block if tx_n is None else tx_n),
        log_index=log,
        block_number=block,
        block_timestamp=GENESIS_TIME + block * 12,
        contract_address=POOL,
    )


def transfer(block, log, sender, receiver, amount, tx_n=None) -> TransferEvent:
    return TransferEvent(
        coords(block, log, tx_n), sender=sender, receiver=receiver, amount=amount,
    )


def mint(block, log, receiver, amount, tx_n=None) -> TransferEvent:
    return transfer(block, log, ZERO, receiver, amount, tx_n)


def burn(block, log, sender, amount, tx_n=None) -> TransferEvent:
    return transfer(block, log, sender, ZERO, amount, tx_n)


def swap(
    block, log, trader, sold_index, sold, bought, tx_n=None, underlying=False,
) -> TokenExchangeEvent:
    return TokenExchangeEvent(
        coords(block, log, tx_n),
        trader=trader,
        sold_asset_index=sold_index,
        sold_amount=sold,
        bought_asset_index=1 - sold_index if sold_index in (0, 1) else 0,
        bought_amount=bought,
        underlying=underlying,
    )


def add_liquidity(block, log, provider, amounts, supply, tx_n=None) -> AddLiquidityEvent:
    return AddLiquidityEvent(
        coords(block, log, tx_n),
        provider=provider,
        amounts=tuple(amounts),
        fees=(0, 0),
        invariant=sum(amounts),
        new_total_supply=supply,
    )


def remove_liquidity(block, log, provider, amounts, supply, tx_n=None) -> RemoveLiquidityEvent:
    return RemoveLiquidityEvent(
        coords(block, log, tx_n),
        provider=provider,
        amounts=tuple(amounts),
        fees=(0, 0),
        new_total_supply=supply,
    )


def remove_imbalance(
    block, log, provider, amounts, supply, tx_n=None,
) -> RemoveLiquidityImbalanceEvent:
    return RemoveLiquidityImbalanceEvent(
        coords(block, log, tx_n),
        provider=provider,
        amounts=tuple(amounts),
        fees=(1, 1),
        invariant=0,
        new_total_supply=supply,
    )


def remove_one(
    block, log, provider, index, amount, supply, lp_amount=0, tx_n=None,
) -> RemoveLiquidityOneEvent:
    return RemoveLiquidityOneEvent(
        coords(block, log, tx_n),
        provider=provider,
        asset_index=index,
        withdrawn_amount=amount,
        new_total_supply=supply,
        lp_token_amount=lp_amount,
    )


def ramp_a(block, log) -> RampAEvent:
    return RampAEvent(
        coords(block, log), old_a=200, new_a=500,
        initial_time=GENESIS_TIME, future_time=GENESIS_TIME + 86_400,
    )


def new_fee(block, log) -> ApplyNewFeeEvent:
    return ApplyNewFeeEvent(
        coords(block, log), fee=4_000_000, offpeg_fee_multiplier=20_000_000_000,
    )


def seed_liquidity(block, provider, amounts, supply):
    """Mint + AddLiquidity pair as emitted by one add_liquidity call."""
    return [
        mint(block, 0, provider, supply),
        add_liquidity(block, 1, provider, amounts, supply),
    ]
