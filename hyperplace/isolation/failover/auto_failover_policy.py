"""
Capability interface for failover strategies.
"""

from abc import ABC, abstractmethod
from typing import Iterable

from hyperplace.isolation.models import BrokerStatus


class AutoFailoverPolicy(ABC):
    """
    Decides broker availability and whether traffic should move from
    primary to secondary brokers.

    Implementations are immutable values built once from configuration
    and compare structurally so policy reloads can detect no-op changes.
    """

    @abstractmethod
    def is_broker_available(self, broker_status: BrokerStatus) -> bool:
        ...

    @abstractmethod
    def should_failover_to_secondary(
        self,
        primary_candidates: Iterable[BrokerStatus],
    ) -> bool:
        ...

    @abstractmethod
    def should_failover_to_secondary_by_count(
        self,
        total_primary_candidates: int,
    ) -> bool:
        ...
