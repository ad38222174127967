"""Parameter Handlers — RampA, StopRampA, ApplyNewFee, SetNewMATime.

Invariants:
    - Audit entry only; no aggregate and no snapshot is touched
"""

import logging

from pool_indexer.core.events import PoolEvent
from pool_indexer.core.repository_protocols import EntityStoreLike

logger = logging.getLogger(__name__)


class ParameterHandlers:
    """Pool parameter changes are recorded for auditing, nothing else."""

    def __init__(self, store: EntityStoreLike):
        self.store = store

    async def handle_parameter_change(self, event: PoolEvent) -> None:
        await self.store.record_audit_entry(event)
        logger.info(
            f"Pool parameter change {event.kind.value}: {event.params()}",
            extra={
                "event_kind": event.kind.value,
                "pool": event.coords.contract_address,
                "tx_hash": event.coords.tx_hash,
            },
        )
