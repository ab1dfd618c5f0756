"""
Namespace isolation policy evaluation.

A policy ties a set of namespace patterns to the brokers allowed to host
them: primaries are preferred, secondaries take over when the failover
strategy says too few primaries are available. Policies are immutable
and safe to share between concurrent callers; a configuration change
replaces the policy object rather than mutating it.
"""

from typing import Iterable, Sequence

from .failover import AutoFailoverPolicy, AutoFailoverPolicyFactory
from .matcher import BrokerT, PatternMatcher, broker_host
from .models import (
    BrokerStatus,
    NamespaceIsolationData,
    NamespaceName,
    broker_status_set,
)
from .errors import PolicyMismatchError


class NamespaceIsolationPolicy:
    """
    Decides which brokers may host the namespaces a policy governs and
    when traffic should fail over from primary to secondary brokers.

    Usage:
        policy = NamespaceIsolationPolicy.from_data(
            NamespaceIsolationData(
                namespaces=["tenant/ns-1"],
                primary=["broker-a\\.example\\.com"],
                secondary=["broker-b\\.example\\.com"],
                auto_failover_policy=AutoFailoverPolicyData(
                    policy_type=AutoFailoverPolicyType.MIN_AVAILABLE,
                    parameters={"min_limit": "1", "usage_threshold": "80"},
                ),
            )
        )

        primaries = policy.find_primary_brokers(available, "tenant/ns-1")
        if policy.should_failover(broker_status_set(statuses)):
            secondaries = policy.find_secondary_brokers(available, "tenant/ns-1")
    """

    __slots__ = (
        "_namespaces",
        "_primary",
        "_secondary",
        "_auto_failover_policy",
    )

    def __init__(
        self,
        namespaces: Iterable[str],
        primary: Iterable[str],
        secondary: Iterable[str],
        auto_failover_policy: AutoFailoverPolicy,
    ) -> None:
        # Patterns compile here so an invalid pattern never yields a usable policy.
        object.__setattr__(self, "_namespaces", PatternMatcher(namespaces, field="namespace"))
        object.__setattr__(self, "_primary", PatternMatcher(primary, field="primary"))
        object.__setattr__(self, "_secondary", PatternMatcher(secondary, field="secondary"))
        object.__setattr__(self, "_auto_failover_policy", auto_failover_policy)

    @classmethod
    def from_data(cls, policy_data: NamespaceIsolationData) -> "NamespaceIsolationPolicy":
        return cls(
            namespaces=policy_data.namespaces,
            primary=policy_data.primary,
            secondary=policy_data.secondary,
            auto_failover_policy=AutoFailoverPolicyFactory.create(
                policy_data.auto_failover_policy
            ),
        )

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (
            type(self),
            (
                self.namespaces,
                self.primary_brokers,
                self.secondary_brokers,
                self._auto_failover_policy,
            ),
        )

    @property
    def namespaces(self) -> tuple[str, ...]:
        return self._namespaces.patterns

    @property
    def primary_brokers(self) -> tuple[str, ...]:
        return self._primary.patterns

    @property
    def secondary_brokers(self) -> tuple[str, ...]:
        return self._secondary.patterns

    @property
    def auto_failover_policy(self) -> AutoFailoverPolicy:
        return self._auto_failover_policy

    def matches_namespace(self, namespace: str | NamespaceName) -> bool:
        return self._namespaces.matches(str(namespace))

    def is_primary_broker(self, broker: str) -> bool:
        return self._primary.matches(broker_host(broker))

    def is_secondary_broker(self, broker: str) -> bool:
        return self._secondary.matches(broker_host(broker))

    def find_primary_brokers(
        self,
        available_brokers: Sequence[BrokerT],
        namespace: str | NamespaceName,
    ) -> list[BrokerT]:
        """
        Return the available brokers eligible as primaries for ``namespace``.

        Raises:
            PolicyMismatchError: the namespace is not governed by this policy.
        """
        self._check_namespace(namespace)
        return self._primary.filter(available_brokers)

    def find_secondary_brokers(
        self,
        available_brokers: Sequence[BrokerT],
        namespace: str | NamespaceName,
    ) -> list[BrokerT]:
        """
        Return the available brokers eligible as secondaries for ``namespace``.

        Raises:
            PolicyMismatchError: the namespace is not governed by this policy.
        """
        self._check_namespace(namespace)
        return self._secondary.filter(available_brokers)

    def _check_namespace(self, namespace: str | NamespaceName) -> None:
        if not self.matches_namespace(namespace):
            raise PolicyMismatchError(str(namespace))

    def get_available_primary_brokers(
        self,
        primary_candidates: Iterable[BrokerStatus],
    ) -> tuple[BrokerStatus, ...]:
        """Return the candidates the failover strategy considers available, in address order."""
        return broker_status_set(
            status
            for status in primary_candidates
            if self._auto_failover_policy.is_broker_available(status)
        )

    def is_primary_broker_available(self, broker_status: BrokerStatus) -> bool:
        return (
            self.is_primary_broker(broker_status.broker_address)
            and self._auto_failover_policy.is_broker_available(broker_status)
        )

    def should_failover(self, primary_brokers: Iterable[BrokerStatus] | int) -> bool:
        """
        Ask the failover strategy whether traffic should move to secondaries.

        Accepts either the primary broker statuses or a precomputed count of
        available primaries.
        """
        if isinstance(primary_brokers, int):
            return self._auto_failover_policy.should_failover_to_secondary_by_count(
                primary_brokers
            )

        return self._auto_failover_policy.should_failover_to_secondary(primary_brokers)

    def describe(self) -> str:
        return (
            f"namespaces={list(self.namespaces)} "
            f"primary={list(self.primary_brokers)} "
            f"secondary={list(self.secondary_brokers)} "
            f"auto_failover_policy={self._auto_failover_policy}"
        )

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return f"NamespaceIsolationPolicy({self.describe()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NamespaceIsolationPolicy):
            return NotImplemented

        return (
            self._namespaces == other._namespaces
            and self._primary == other._primary
            and self._secondary == other._secondary
            and self._auto_failover_policy == other._auto_failover_policy
        )

    def __hash__(self) -> int:
        return hash(
            (
                self._namespaces,
                self._primary,
                self._secondary,
                self._auto_failover_policy,
            )
        )
