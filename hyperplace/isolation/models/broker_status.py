"""
Broker status snapshots consumed by failover decisions.
"""

from dataclasses import dataclass, field
from typing import Iterable


@dataclass(slots=True, frozen=True, order=True)
class BrokerStatus:
    """
    A point-in-time health and load snapshot for one broker.

    Ordering, equality and hashing only consider ``broker_address`` so
    a set of statuses holds at most one snapshot per broker and iterates
    in address order.
    """

    broker_address: str
    """Host identifier of the broker (host or host:port)."""

    active: bool = field(default=True, compare=False)
    """Whether the broker is currently serving traffic."""

    load_factor: int = field(default=0, compare=False)
    """Resource usage as a percentage (0-100)."""

    def __str__(self) -> str:
        return (
            f"[broker_address={self.broker_address} "
            f"active={self.active} load_factor={self.load_factor}]"
        )


def broker_status_set(statuses: Iterable[BrokerStatus]) -> tuple[BrokerStatus, ...]:
    """
    Build an address-ordered, de-duplicated collection of statuses.

    When the same address appears more than once the first snapshot wins.
    """
    unique: dict[str, BrokerStatus] = {}
    for status in statuses:
        unique.setdefault(status.broker_address, status)

    return tuple(sorted(unique.values()))
