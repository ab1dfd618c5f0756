"""
Namespace isolation policies.

Decides which brokers may host a namespace and when traffic should fail
over from primary to secondary brokers, based on regular-expression
patterns and a pluggable failover strategy.
"""

from .errors import (
    FailoverPolicyConfigError as FailoverPolicyConfigError,
    InvalidNamespaceNameError as InvalidNamespaceNameError,
    IsolationPolicyError as IsolationPolicyError,
    PatternCompileError as PatternCompileError,
    PolicyConfigError as PolicyConfigError,
    PolicyMismatchError as PolicyMismatchError,
)
from .failover import (
    AutoFailoverPolicy as AutoFailoverPolicy,
    AutoFailoverPolicyFactory as AutoFailoverPolicyFactory,
    MinAvailablePolicy as MinAvailablePolicy,
)
from .matcher import (
    PatternMatcher as PatternMatcher,
    broker_host as broker_host,
    filter_by_pattern as filter_by_pattern,
)
from .models import (
    AutoFailoverPolicyData as AutoFailoverPolicyData,
    AutoFailoverPolicyType as AutoFailoverPolicyType,
    BrokerStatus as BrokerStatus,
    NamespaceIsolationData as NamespaceIsolationData,
    NamespaceName as NamespaceName,
    broker_status_set as broker_status_set,
)
from .namespace_isolation_policy import (
    NamespaceIsolationPolicy as NamespaceIsolationPolicy,
)
from .namespace_isolation_policies import (
    NamespaceIsolationPolicies as NamespaceIsolationPolicies,
)
from .policy_loader import (
    IsolationPolicyLoader as IsolationPolicyLoader,
    PolicyRefreshResult as PolicyRefreshResult,
    parse_policies as parse_policies,
)
