"""
Test: IsolationPolicyLoader

Validates loading policies from a JSON document and refreshing them
with no-op detection.
"""

import orjson
import pytest

from hyperplace.env import Env
from hyperplace.isolation import (
    IsolationPolicyLoader,
    PatternCompileError,
    PolicyConfigError,
    parse_policies,
)


def policy_document(**overrides) -> dict:
    document = {
        "tenant-a": {
            "namespaces": ["tenant-a/.*"],
            "primary": ["broker-a[0-9]+\\.example\\.com"],
            "secondary": ["broker-b[0-9]+\\.example\\.com"],
            "auto_failover_policy": {
                "policy_type": "min_available",
                "parameters": {"min_limit": "2", "usage_threshold": "80"},
            },
        },
    }
    document.update(overrides)
    return document


def write_document(path, document: dict) -> None:
    path.write_bytes(orjson.dumps(document))


@pytest.fixture
def policy_file(tmp_path):
    path = tmp_path / "isolation_policies.json"
    write_document(path, policy_document())
    return path


class TestParsePolicies:
    """Test document decoding and validation."""

    def test_parse_valid_document(self):
        parsed = parse_policies(orjson.dumps(policy_document()))

        assert list(parsed) == ["tenant-a"]
        assert parsed["tenant-a"].primary == ["broker-a[0-9]+\\.example\\.com"]

    def test_invalid_json_rejected(self):
        with pytest.raises(PolicyConfigError):
            parse_policies(b"{not json")

    def test_missing_field_rejected(self):
        document = policy_document()
        del document["tenant-a"]["secondary"]

        with pytest.raises(PolicyConfigError):
            parse_policies(orjson.dumps(document))

    def test_unknown_policy_type_rejected(self):
        document = policy_document()
        document["tenant-a"]["auto_failover_policy"]["policy_type"] = "round_robin"

        with pytest.raises(PolicyConfigError):
            parse_policies(orjson.dumps(document))


class TestLoad:
    """Test building policies from a file."""

    def test_load_builds_policies(self, policy_file):
        loader = IsolationPolicyLoader(policy_file)

        policies = loader.load()
        policy = policies.get_policy_by_namespace("tenant-a/ns-1")

        assert policy is not None
        assert policy.find_primary_brokers(
            ["broker-a1.example.com", "broker-b1.example.com"],
            "tenant-a/ns-1",
        ) == ["broker-a1.example.com"]

    def test_missing_file_rejected(self, tmp_path):
        loader = IsolationPolicyLoader(tmp_path / "missing.json")

        with pytest.raises(PolicyConfigError):
            loader.load()

    def test_from_env_uses_policy_file(self, policy_file, tmp_path):
        env = Env(
            ISOLATION_POLICY_FILE=str(policy_file),
            ISOLATION_LOGS_DIRECTORY=str(tmp_path / "logs"),
            ISOLATION_LOG_LEVEL="error",
        )

        loader = IsolationPolicyLoader.from_env(env)

        assert loader.path == policy_file


class TestRefresh:
    """Test refresh and no-op reload detection."""

    @pytest.mark.asyncio
    async def test_initial_refresh_adds_policies(self, policy_file):
        loader = IsolationPolicyLoader(policy_file)

        result = await loader.refresh()

        assert result.changed is True
        assert result.added == ["tenant-a"]
        assert len(loader.policies) == 1

    @pytest.mark.asyncio
    async def test_identical_reload_is_noop(self, policy_file):
        loader = IsolationPolicyLoader(policy_file)
        await loader.refresh()
        current = loader.policies

        result = await loader.refresh()

        assert result.changed is False
        assert loader.policies is current

    @pytest.mark.asyncio
    async def test_changed_policy_reported_as_updated(self, policy_file):
        loader = IsolationPolicyLoader(policy_file)
        await loader.refresh()

        document = policy_document()
        document["tenant-a"]["auto_failover_policy"]["parameters"]["min_limit"] = "3"
        write_document(policy_file, document)

        result = await loader.refresh()

        assert result.changed is True
        assert result.updated == ["tenant-a"]
        assert result.added == []
        assert result.removed == []

    @pytest.mark.asyncio
    async def test_added_and_removed_policies(self, policy_file):
        loader = IsolationPolicyLoader(policy_file)
        await loader.refresh()

        document = policy_document()
        document["tenant-b"] = document.pop("tenant-a")
        write_document(policy_file, document)

        result = await loader.refresh()

        assert result.added == ["tenant-b"]
        assert result.removed == ["tenant-a"]
        assert "tenant-b" in loader.policies

    @pytest.mark.asyncio
    async def test_failed_reload_keeps_current_policies(self, policy_file):
        loader = IsolationPolicyLoader(policy_file)
        await loader.refresh()
        current = loader.policies

        document = policy_document()
        document["tenant-a"]["primary"] = ["(unclosed"]
        write_document(policy_file, document)

        with pytest.raises(PatternCompileError):
            await loader.refresh()

        assert loader.policies is current


class TestRefreshLogging:
    """Test that refresh outcomes are logged through the configured logger."""

    @pytest.mark.asyncio
    async def test_refresh_logs_to_file(self, policy_file, tmp_path):
        logs_directory = tmp_path / "logs"
        env = Env(
            ISOLATION_POLICY_FILE=str(policy_file),
            ISOLATION_LOGS_DIRECTORY=str(logs_directory),
            ISOLATION_LOG_LEVEL="debug",
            ISOLATION_LOG_TO_FILE=True,
        )
        loader = IsolationPolicyLoader.from_env(env)

        await loader.refresh()
        await loader.refresh()
        await loader.close()

        lines = (logs_directory / "isolation.json").read_bytes().splitlines()
        entries = [orjson.loads(line)["entry"] for line in lines]

        assert [entry["level"] for entry in entries] == ["INFO", "DEBUG"]
        assert entries[0]["policy_source"] == str(policy_file)
        assert entries[1]["message"] == "Isolation policies unchanged"

    @pytest.mark.asyncio
    async def test_close_releases_log_file(self, policy_file, tmp_path):
        logs_directory = tmp_path / "logs"
        env = Env(
            ISOLATION_POLICY_FILE=str(policy_file),
            ISOLATION_LOGS_DIRECTORY=str(logs_directory),
            ISOLATION_LOG_LEVEL="debug",
            ISOLATION_LOG_TO_FILE=True,
        )
        loader = IsolationPolicyLoader.from_env(env)

        await loader.refresh()
        stream = loader._logger._contexts["isolation"].stream
        [logfile] = stream._files.values()

        await loader.close()

        assert logfile.closed
        assert stream._files == {}

        # A later refresh reopens the file and appends.
        await loader.refresh()
        await loader.close()

        lines = (logs_directory / "isolation.json").read_bytes().splitlines()

        assert len(lines) == 2
