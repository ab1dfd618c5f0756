"""
Loads isolation policies from a JSON document and refreshes them in place.

The document maps policy names to policy definitions:

    {
        "tenant-a-isolation": {
            "namespaces": ["tenant-a/.*"],
            "primary": ["broker-a[0-9]+\\.example\\.com"],
            "secondary": ["broker-b[0-9]+\\.example\\.com"],
            "auto_failover_policy": {
                "policy_type": "min_available",
                "parameters": {"min_limit": "2", "usage_threshold": "80"}
            }
        }
    }
"""

from __future__ import annotations

import asyncio
import pathlib
from dataclasses import dataclass, field

import orjson
from pydantic import TypeAdapter, ValidationError

from hyperplace.env import Env
from hyperplace.logging import Logger, LoggingConfig

from .errors import PolicyConfigError
from .logging_models import (
    IsolationPolicyDebug,
    IsolationPolicyInfo,
    IsolationPolicyWarning,
)
from .models import NamespaceIsolationData
from .namespace_isolation_policies import NamespaceIsolationPolicies


_policies_adapter = TypeAdapter(dict[str, NamespaceIsolationData])


@dataclass(slots=True)
class PolicyRefreshResult:
    """Outcome of reloading the policy document."""

    changed: bool
    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)


def parse_policies(document: bytes | str) -> dict[str, NamespaceIsolationData]:
    """Decode and validate a policy document."""
    try:
        raw = orjson.loads(document)

    except orjson.JSONDecodeError as err:
        raise PolicyConfigError(f"Policy document is not valid JSON: {err}") from err

    try:
        return _policies_adapter.validate_python(raw)

    except ValidationError as err:
        raise PolicyConfigError(f"Invalid policy document: {err}") from err


class IsolationPolicyLoader:
    """
    Owns the current NamespaceIsolationPolicies for a policy file.

    ``refresh()`` rebuilds every policy from the file and swaps the
    current set only when a policy was added, removed or changed. Any
    construction error leaves the current set in place and propagates.
    """

    def __init__(
        self,
        path: str | pathlib.Path,
        logger: Logger | None = None,
    ) -> None:
        self._path = pathlib.Path(path)
        self._logger = logger or Logger()
        self._policies = NamespaceIsolationPolicies()
        self._refresh_lock = asyncio.Lock()

    @classmethod
    def from_env(cls, env: Env):
        """
        Build a loader for the policy file named in the environment and
        apply the environment's logging settings.
        """
        LoggingConfig().update(
            log_directory=env.logs_directory,
            log_level=env.ISOLATION_LOG_LEVEL,
            log_output=env.ISOLATION_LOG_OUTPUT,
        )

        logger = Logger()
        if env.ISOLATION_LOG_TO_FILE:
            logger.configure(
                name="isolation",
                path=str(pathlib.Path(env.logs_directory) / "isolation.json"),
            )

        return cls(env.ISOLATION_POLICY_FILE, logger=logger)

    @property
    def path(self) -> pathlib.Path:
        return self._path

    @property
    def policies(self) -> NamespaceIsolationPolicies:
        return self._policies

    def load(self) -> NamespaceIsolationPolicies:
        """Read and build the policies without replacing the current set."""
        try:
            document = self._path.read_bytes()

        except OSError as err:
            raise PolicyConfigError(
                f"Unable to read policy file {self._path}: {err}"
            ) from err

        return NamespaceIsolationPolicies.from_data(parse_policies(document))

    async def refresh(self) -> PolicyRefreshResult:
        async with self._refresh_lock:
            loop = asyncio.get_running_loop()

            try:
                loaded = await loop.run_in_executor(None, self.load)

            except Exception as err:
                await self._log_warning(
                    f"Keeping current isolation policies, reload failed: {err}"
                )
                raise

            result = self._diff(self._policies, loaded)

            if not result.changed:
                await self._log_debug("Isolation policies unchanged")
                return result

            self._policies = loaded

            await self._log_info(
                f"Isolation policies reloaded added={result.added} "
                f"removed={result.removed} updated={result.updated}"
            )

            return result

    async def close(self) -> None:
        """Release log files held by the loader's logger."""
        async with self._refresh_lock:
            await self._logger.close()

    def _diff(
        self,
        current: NamespaceIsolationPolicies,
        loaded: NamespaceIsolationPolicies,
    ) -> PolicyRefreshResult:
        current_policies = current.policies
        loaded_policies = loaded.policies

        added = [name for name in loaded_policies if name not in current_policies]
        removed = [name for name in current_policies if name not in loaded_policies]
        updated = [
            name
            for name, policy in loaded_policies.items()
            if name in current_policies and current_policies[name] != policy
        ]

        # Lookup by namespace is first-match, so a reorder alone is a change.
        reordered = (
            not (added or removed or updated)
            and list(current_policies) != list(loaded_policies)
        )

        return PolicyRefreshResult(
            changed=bool(added or removed or updated or reordered),
            added=added,
            removed=removed,
            updated=updated,
        )

    def _get_log_context(self) -> dict:
        return {
            "policy_source": str(self._path),
            "policy_count": len(self._policies),
        }

    async def _log_debug(self, message: str) -> None:
        await self._logger.log(
            IsolationPolicyDebug(message=message, **self._get_log_context()),
            name="isolation",
        )

    async def _log_info(self, message: str) -> None:
        await self._logger.log(
            IsolationPolicyInfo(message=message, **self._get_log_context()),
            name="isolation",
        )

    async def _log_warning(self, message: str) -> None:
        await self._logger.log(
            IsolationPolicyWarning(message=message, **self._get_log_context()),
            name="isolation",
        )
