"""
Builds failover strategies from configuration fragments.
"""

from hyperplace.isolation.errors import FailoverPolicyConfigError
from hyperplace.isolation.models import (
    AutoFailoverPolicyData,
    AutoFailoverPolicyType,
)

from .auto_failover_policy import AutoFailoverPolicy
from .min_available_policy import MAX_USAGE_THRESHOLD, MinAvailablePolicy


MIN_LIMIT_KEY = "min_limit"
USAGE_THRESHOLD_KEY = "usage_threshold"


class AutoFailoverPolicyFactory:

    @classmethod
    def create(cls, policy_data: AutoFailoverPolicyData) -> AutoFailoverPolicy:
        if policy_data.policy_type == AutoFailoverPolicyType.MIN_AVAILABLE:
            return cls._create_min_available(policy_data.parameters)

        raise FailoverPolicyConfigError(
            f"Unrecognized auto_failover_policy: {policy_data.policy_type}"
        )

    @classmethod
    def _create_min_available(cls, parameters: dict[str, str]) -> MinAvailablePolicy:
        min_limit = cls._get_int_parameter(parameters, MIN_LIMIT_KEY)
        usage_threshold = cls._get_int_parameter(parameters, USAGE_THRESHOLD_KEY)

        if min_limit < 1:
            raise FailoverPolicyConfigError(
                f"{MIN_LIMIT_KEY} must be at least 1, got {min_limit}"
            )

        if not 0 <= usage_threshold <= MAX_USAGE_THRESHOLD:
            raise FailoverPolicyConfigError(
                f"{USAGE_THRESHOLD_KEY} must be between 0 and {MAX_USAGE_THRESHOLD}, "
                f"got {usage_threshold}"
            )

        return MinAvailablePolicy(
            min_limit=min_limit,
            usage_threshold=usage_threshold,
        )

    @staticmethod
    def _get_int_parameter(parameters: dict[str, str], key: str) -> int:
        value = parameters.get(key)
        if value is None:
            raise FailoverPolicyConfigError(
                f"Missing required auto_failover_policy parameter: {key}"
            )

        try:
            return int(value)

        except ValueError as err:
            raise FailoverPolicyConfigError(
                f"Parameter {key} must be an integer, got {value!r}"
            ) from err
