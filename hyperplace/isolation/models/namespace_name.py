"""
Fully-qualified namespace names.
"""

import re
from dataclasses import dataclass

from hyperplace.isolation.errors import InvalidNamespaceNameError


_NAME_PART_PATTERN = re.compile(r"[-=:.\w]*")


@dataclass(slots=True, frozen=True)
class NamespaceName:
    """
    A namespace identified as ``tenant/namespace`` or, in the legacy
    layout, ``tenant/cluster/namespace``.
    """

    tenant: str
    local_name: str
    cluster: str | None = None

    @classmethod
    def parse(cls, namespace: str) -> "NamespaceName":
        parts = namespace.split("/")
        if len(parts) == 2:
            tenant, local_name = parts
            cluster = None

        elif len(parts) == 3:
            tenant, cluster, local_name = parts

        else:
            raise InvalidNamespaceNameError(
                namespace,
                "expected <tenant>/<namespace> or <tenant>/<cluster>/<namespace>",
            )

        for part in (tenant, cluster, local_name):
            if part is None:
                continue

            if not part:
                raise InvalidNamespaceNameError(namespace, "empty name part")

            if _NAME_PART_PATTERN.fullmatch(part) is None:
                raise InvalidNamespaceNameError(
                    namespace,
                    f"illegal characters in {part!r}",
                )

        return cls(
            tenant=tenant,
            local_name=local_name,
            cluster=cluster,
        )

    @property
    def is_v2(self) -> bool:
        return self.cluster is None

    def __str__(self) -> str:
        if self.cluster is None:
            return f"{self.tenant}/{self.local_name}"

        return f"{self.tenant}/{self.cluster}/{self.local_name}"
