"""Store de roteamento em memória — apenas para desenvolvimento e testes.

ATENÇÃO: Não usar em staging/production. Sem persistência entre reinícios.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.protocols.routing_store import RoutingStoreProtocol

if TYPE_CHECKING:
    from app.domain.routing_record import RoutingRecord


class MemoryRoutingStore(RoutingStoreProtocol):
    """Registros indexados por routing key; contadores por id."""

    def __init__(self, records: list[RoutingRecord] | None = None) -> None:
        self._records: dict[str, RoutingRecord] = {}
        self._counts: dict[str, int] = {}
        for record in records or []:
            self.add(record)

    def add(self, record: RoutingRecord) -> None:
        self._records[record.routing_key] = record
        self._counts.setdefault(record.id, record.event_count)

    async def lookup(self, routing_key: str) -> RoutingRecord | None:
        record = self._records.get(routing_key)
        if record is None:
            return None
        return record.model_copy(update={"event_count": self._counts.get(record.id, 0)})

    async def increment_event_count(self, record_id: str) -> None:
        self._counts[record_id] = self._counts.get(record_id, 0) + 1

    def event_count(self, record_id: str) -> int:
        return self._counts.get(record_id, 0)
