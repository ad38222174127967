"""Event Dispatch — explicit routing from event type to accounting handler.

Invariants:
    - Every event->handler mapping is visible — no getattr magic, no auto-discovery
    - Exactly one handler per event type; unknown types are not dispatched
      (UNKNOWN_EVENT outcome, never raises)
    - No reordering, buffering or parallel dispatch: execute() awaits the handler
      to completion before returning
    - Handlers instantiated per-dispatch with shared store + transaction context

Design Decisions:
    - Explicit dict over isinstance chains: every mapping visible in one place,
      adding an event kind requires editing this dict
    - Handlers split by event family: transfer / swap / liquidity / parameters
"""

import logging

from pool_indexer.config import Settings
from pool_indexer.core.domain_types import ProcessingOutcome
from pool_indexer.core.events import (
    AddLiquidityEvent,
    ApplyNewFeeEvent,
    PoolEvent,
    RampAEvent,
    RemoveLiquidityEvent,
    RemoveLiquidityImbalanceEvent,
    RemoveLiquidityOneEvent,
    SetNewMATimeEvent,
    StopRampAEvent,
    TokenExchangeEvent,
    TransferEvent,
)
from pool_indexer.core.repository_protocols import EntityStoreLike
from pool_indexer.core.transaction_context import TransactionContext
from pool_indexer.services.handle_liquidity import LiquidityHandlers
from pool_indexer.services.handle_parameters import ParameterHandlers
from pool_indexer.services.handle_swap import SwapHandlers
from pool_indexer.services.handle_transfer import TransferHandlers

logger = logging.getLogger(__name__)


class EventDispatch:
    """Routes event type -> handler. Explicit registration, no auto-discovery."""

    def __init__(
        self, store: EntityStoreLike, context: TransactionContext, settings: Settings,
    ):
        transfer = TransferHandlers(store, context, settings)
        swap = SwapHandlers(store, context, settings)
        liquidity = LiquidityHandlers(store, context, settings)
        parameters = ParameterHandlers(store)

        self._handlers = {
            # LP token
            TransferEvent: transfer.handle_transfer,

            # Exchanges (TokenExchange + TokenExchangeUnderlying)
            TokenExchangeEvent: swap.handle_token_exchange,

            # Liquidity
            AddLiquidityEvent: liquidity.handle_add_liquidity,
            RemoveLiquidityEvent: liquidity.handle_remove_liquidity,
            RemoveLiquidityImbalanceEvent: liquidity.handle_remove_liquidity_imbalance,
            RemoveLiquidityOneEvent: liquidity.handle_remove_liquidity_one,

            # Parameter changes (audit only)
            RampAEvent: parameters.handle_parameter_change,
            StopRampAEvent: parameters.handle_parameter_change,
            ApplyNewFeeEvent: parameters.handle_parameter_change,
            SetNewMATimeEvent: parameters.handle_parameter_change,
        }

    def supports(self, event: PoolEvent) -> bool:
        return type(event) in self._handlers

    async def execute(self, event: PoolEvent) -> ProcessingOutcome:
        """Route event to its handler. Returns UNKNOWN_EVENT for unmapped types."""
        handler = self._handlers.get(type(event))
        if not handler:
            logger.warning(
                f"No handler for event type '{type(event).__name__}'",
                extra={
                    "error_code": "UNKNOWN_EVENT",
                    "tx_hash": event.coords.tx_hash,
                    "log_index": event.coords.log_index,
                },
            )
            return ProcessingOutcome.UNKNOWN_EVENT
        await handler(event)
        return ProcessingOutcome.APPLIED
