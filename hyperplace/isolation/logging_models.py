from hyperplace.logging.models import Entry, LogLevel


class IsolationPolicyDebug(Entry, kw_only=True):
    policy_source: str
    policy_count: int
    level: LogLevel = LogLevel.DEBUG


class IsolationPolicyInfo(Entry, kw_only=True):
    policy_source: str
    policy_count: int
    level: LogLevel = LogLevel.INFO


class IsolationPolicyWarning(Entry, kw_only=True):
    policy_source: str
    policy_count: int
    level: LogLevel = LogLevel.WARN
