from .auto_failover_policy import AutoFailoverPolicy as AutoFailoverPolicy
from .auto_failover_policy_factory import (
    AutoFailoverPolicyFactory as AutoFailoverPolicyFactory,
)
from .min_available_policy import MinAvailablePolicy as MinAvailablePolicy
