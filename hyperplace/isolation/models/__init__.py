from .auto_failover_policy_type import AutoFailoverPolicyType as AutoFailoverPolicyType
from .broker_status import (
    BrokerStatus as BrokerStatus,
    broker_status_set as broker_status_set,
)
from .isolation_data import (
    AutoFailoverPolicyData as AutoFailoverPolicyData,
    NamespaceIsolationData as NamespaceIsolationData,
)
from .namespace_name import NamespaceName as NamespaceName
