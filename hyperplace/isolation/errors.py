"""
Error taxonomy for namespace isolation policies.

Construction errors (invalid patterns, invalid failover configuration,
unreadable policy documents) are fatal to the policy being built. A
placement query for a namespace the policy does not govern raises
PolicyMismatchError. None of these are retried internally.
"""


class IsolationPolicyError(Exception):
    """Base class for isolation policy errors."""


class PatternCompileError(IsolationPolicyError):
    """Raised when a configured pattern is not a valid regular expression."""

    def __init__(
        self,
        pattern: str,
        field: str,
        reason: str,
    ):
        self.pattern = pattern
        self.field = field
        self.reason = reason
        super().__init__(
            f"Invalid {field} pattern {pattern!r}: {reason}"
        )


class PolicyMismatchError(IsolationPolicyError):
    """Raised when a policy is queried for a namespace it does not govern."""

    def __init__(self, namespace: str):
        self.namespace = namespace
        super().__init__(f"Namespace {namespace} does not match policy")


class FailoverPolicyConfigError(IsolationPolicyError):
    """Raised when an auto failover policy cannot be built from its config."""


class InvalidNamespaceNameError(IsolationPolicyError):
    """Raised when a namespace name is malformed."""

    def __init__(self, namespace: str, reason: str):
        self.namespace = namespace
        super().__init__(f"Invalid namespace name {namespace!r}: {reason}")


class PolicyConfigError(IsolationPolicyError):
    """Raised when a policy document cannot be read or validated."""
