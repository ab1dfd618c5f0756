"""
Failover when too few primary brokers are available.
"""

from dataclasses import dataclass
from typing import Iterable

from hyperplace.isolation.models import AutoFailoverPolicyType, BrokerStatus

from .auto_failover_policy import AutoFailoverPolicy


MAX_USAGE_THRESHOLD = 100


@dataclass(slots=True, frozen=True)
class MinAvailablePolicy(AutoFailoverPolicy):
    """
    A broker is available when it is active and its load factor is below
    ``usage_threshold``. Traffic fails over to secondaries once fewer than
    ``min_limit`` primaries are available.
    """

    min_limit: int
    usage_threshold: int

    def is_broker_available(self, broker_status: BrokerStatus) -> bool:
        return (
            broker_status.active
            and broker_status.load_factor < self.usage_threshold
        )

    def should_failover_to_secondary(
        self,
        primary_candidates: Iterable[BrokerStatus],
    ) -> bool:
        available_primaries = sum(
            1 for status in primary_candidates if self.is_broker_available(status)
        )

        return self.should_failover_to_secondary_by_count(available_primaries)

    def should_failover_to_secondary_by_count(
        self,
        total_primary_candidates: int,
    ) -> bool:
        return total_primary_candidates < self.min_limit

    def __str__(self) -> str:
        return (
            f"[policy_type={AutoFailoverPolicyType.MIN_AVAILABLE.value} "
            f"min_limit={self.min_limit} usage_threshold={self.usage_threshold}]"
        )
