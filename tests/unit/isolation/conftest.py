import pytest

from hyperplace.isolation import (
    AutoFailoverPolicyData,
    AutoFailoverPolicyType,
    NamespaceIsolationData,
    NamespaceIsolationPolicy,
)
from hyperplace.logging import LoggingConfig


def make_policy_data(
    namespaces: list[str] | None = None,
    primary: list[str] | None = None,
    secondary: list[str] | None = None,
    min_limit: str = "1",
    usage_threshold: str = "80",
) -> NamespaceIsolationData:
    return NamespaceIsolationData(
        namespaces=["tenant/ns-1"] if namespaces is None else namespaces,
        primary=["broker-a\\.example\\.com"] if primary is None else primary,
        secondary=["broker-b\\.example\\.com"] if secondary is None else secondary,
        auto_failover_policy=AutoFailoverPolicyData(
            policy_type=AutoFailoverPolicyType.MIN_AVAILABLE,
            parameters={
                "min_limit": min_limit,
                "usage_threshold": usage_threshold,
            },
        ),
    )


@pytest.fixture(autouse=True)
def configure_log_level():
    config = LoggingConfig()
    config.update(log_level="debug", log_output="stdout")
    yield
    config.update(log_level="error")


@pytest.fixture
def policy_data_factory():
    return make_policy_data


@pytest.fixture
def policy() -> NamespaceIsolationPolicy:
    return NamespaceIsolationPolicy.from_data(make_policy_data())


@pytest.fixture
def available_brokers() -> list[str]:
    return [
        "broker-a.example.com",
        "broker-b.example.com",
        "broker-c.example.com",
    ]
