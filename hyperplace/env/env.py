from __future__ import annotations
import os
from pydantic import BaseModel, StrictBool, StrictStr
from typing import Callable, Dict, Literal, Union

PrimaryType = Union[str, int, float, bytes, bool]


class Env(BaseModel):
    ISOLATION_POLICY_FILE: StrictStr = "isolation_policies.json"
    ISOLATION_LOG_LEVEL: Literal[
        "trace", "debug", "info", "warn", "error", "critical", "fatal"
    ] = "info"
    ISOLATION_LOG_OUTPUT: Literal["stdout", "stderr"] = "stderr"
    ISOLATION_LOGS_DIRECTORY: StrictStr | None = None
    ISOLATION_LOG_TO_FILE: StrictBool = False

    @classmethod
    def types_map(cls) -> Dict[str, Callable[[str], PrimaryType]]:
        return {
            "ISOLATION_POLICY_FILE": str,
            "ISOLATION_LOG_LEVEL": str,
            "ISOLATION_LOG_OUTPUT": str,
            "ISOLATION_LOGS_DIRECTORY": str,
            "ISOLATION_LOG_TO_FILE": lambda value: value.lower() in ("1", "true", "yes"),
        }

    @property
    def logs_directory(self) -> str:
        if self.ISOLATION_LOGS_DIRECTORY:
            return self.ISOLATION_LOGS_DIRECTORY

        return os.path.join(os.getcwd(), "logs")
