from enum import Enum


class AutoFailoverPolicyType(str, Enum):
    """Failover strategies an isolation policy can be configured with."""
    MIN_AVAILABLE = "min_available"
