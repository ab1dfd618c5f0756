"""
Validated configuration for namespace isolation policies.
"""

from pydantic import BaseModel, ConfigDict, StrictStr

from .auto_failover_policy_type import AutoFailoverPolicyType


class AutoFailoverPolicyData(BaseModel):
    """Configuration fragment selecting and parameterizing a failover strategy."""

    model_config = ConfigDict(frozen=True)

    policy_type: AutoFailoverPolicyType
    parameters: dict[StrictStr, StrictStr]


class NamespaceIsolationData(BaseModel):
    """One isolation policy definition as loaded from configuration."""

    model_config = ConfigDict(frozen=True)

    namespaces: list[StrictStr]
    primary: list[StrictStr]
    secondary: list[StrictStr]
    auto_failover_policy: AutoFailoverPolicyData
