"""
Effect and invocation kinds used by contracts
"""

from enum import Enum

from .config import INVOCATION_KIND_CLASS


class ContractEffectType(str, Enum):
    """Type of an effect (a part of the contract of a function)"""
    RETURNS_CONSTANT = "RETURNS_CONSTANT"
    CALLS = "CALLS"
    RETURNS_NOT_NULL = "RETURNS_NOT_NULL"


class ContractInvocationKind(str, Enum):
    """Specifies how many times a function invokes its function parameter in place"""

    # A function parameter will be invoked one time or not invoked at all
    AT_MOST_ONCE = "AT_MOST_ONCE"

    # A function parameter will be invoked one or more times
    AT_LEAST_ONCE = "AT_LEAST_ONCE"

    # A function parameter will be invoked exactly one time
    EXACTLY_ONCE = "EXACTLY_ONCE"

    # Called in place, but it's unknown how many times
    UNKNOWN = "UNKNOWN"

    @property
    def token(self) -> str:
        """Qualified name emitted inside callsInPlace()"""
        return f"{INVOCATION_KIND_CLASS}.{self.value}"
