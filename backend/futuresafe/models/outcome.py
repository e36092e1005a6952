"""
Tagged results returned at every collector boundary.

A collector never raises to its caller: it returns ``Ok(value)`` or
``Failed(kind, detail)``. The engine only ever looks at a collector's
result through ``resolve(default)``, so the fallback value for each
collector is declared next to the collector instead of inside an
``except`` block.
"""
import enum
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


class FailureKind(str, enum.Enum):
    INVALID_INPUT = "invalid_input"
    TIMEOUT = "timeout"
    NETWORK = "network"
    MALFORMED = "malformed"      # unparseable or incomplete response
    NO_DATA = "no_data"          # lookup succeeded but had nothing to report
    PROVIDER = "provider"        # upstream refused (auth, quota, 5xx, ...)


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True

    def resolve(self, default: T) -> T:
        return self.value


@dataclass(frozen=True)
class Failed:
    kind: FailureKind
    detail: str = ""

    @property
    def ok(self) -> bool:
        return False

    def resolve(self, default: Any) -> Any:
        return default


Outcome = Union[Ok[T], Failed]
