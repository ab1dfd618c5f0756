"""
The set of named isolation policies configured for a cluster.
"""

from typing import Iterator, Mapping

from .models import NamespaceIsolationData, NamespaceName
from .namespace_isolation_policy import NamespaceIsolationPolicy


class NamespaceIsolationPolicies:
    """
    Named isolation policies, looked up by name or by the namespace they
    govern.

    Policies are replaced wholesale on update. The mapping itself is
    rebuilt on every change so readers holding a snapshot from
    ``policies`` never observe a partial update.
    """

    def __init__(
        self,
        policies: Mapping[str, NamespaceIsolationPolicy] | None = None,
    ) -> None:
        self._policies: dict[str, NamespaceIsolationPolicy] = dict(policies or {})

    @classmethod
    def from_data(
        cls,
        policies_data: Mapping[str, NamespaceIsolationData],
    ) -> "NamespaceIsolationPolicies":
        return cls(
            {
                policy_name: NamespaceIsolationPolicy.from_data(policy_data)
                for policy_name, policy_data in policies_data.items()
            }
        )

    @property
    def policies(self) -> dict[str, NamespaceIsolationPolicy]:
        return dict(self._policies)

    def get_policy_by_name(self, policy_name: str) -> NamespaceIsolationPolicy | None:
        return self._policies.get(policy_name)

    def get_policy_by_namespace(
        self,
        namespace: str | NamespaceName,
    ) -> NamespaceIsolationPolicy | None:
        """Return the first policy, in configuration order, governing ``namespace``."""
        for policy in self._policies.values():
            if policy.matches_namespace(namespace):
                return policy

        return None

    def set_policy(
        self,
        policy_name: str,
        policy_data: NamespaceIsolationData,
    ) -> NamespaceIsolationPolicy:
        # Build before swapping so an invalid definition leaves the set untouched.
        policy = NamespaceIsolationPolicy.from_data(policy_data)
        self._policies = {**self._policies, policy_name: policy}
        return policy

    def delete_policy(self, policy_name: str) -> bool:
        if policy_name not in self._policies:
            return False

        self._policies = {
            name: policy
            for name, policy in self._policies.items()
            if name != policy_name
        }
        return True

    def is_shared_broker(self, broker: str) -> bool:
        """True if no policy reserves ``broker`` as a primary or secondary."""
        for policy in self._policies.values():
            if policy.is_primary_broker(broker) or policy.is_secondary_broker(broker):
                return False

        return True

    def __contains__(self, policy_name: object) -> bool:
        return policy_name in self._policies

    def __len__(self) -> int:
        return len(self._policies)

    def __iter__(self) -> Iterator[str]:
        return iter(self._policies)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NamespaceIsolationPolicies):
            return NotImplemented

        return self._policies == other._policies
