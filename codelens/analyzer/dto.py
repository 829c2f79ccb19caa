from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Type, TypeVar

from serde import field, serde

EnumType = TypeVar("EnumType", bound=Enum)


class IssueSeverity(Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class VulnerabilitySeverity(Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"


def deserialize_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Invalid int value: {value!r}")

    if isinstance(value, int):
        return value

    if isinstance(value, float) and value.is_integer():
        return int(value)

    if isinstance(value, str):
        stripped_value: str = value.strip()

        if stripped_value.isdigit() or (stripped_value.startswith("-") and stripped_value[1:].isdigit()):
            return int(stripped_value)

    raise ValueError(f"Invalid int value: {value!r}")


def deserialize_optional_int(value: Any) -> int | None:
    if value is None:
        return None

    return deserialize_int(value)


def _match_enum(enum_type: Type[EnumType], value: Any) -> EnumType:
    if isinstance(value, enum_type):
        return value

    if isinstance(value, str):
        normalized_value: str = value.strip().lower()

        for member in enum_type:
            if normalized_value == member.value or normalized_value == member.name.lower():
                return member

    raise ValueError(f"Invalid {enum_type.__name__}: {value!r}")


def deserialize_issue_severity(value: Any) -> IssueSeverity:
    return _match_enum(IssueSeverity, value)


def deserialize_vulnerability_severity(value: Any) -> VulnerabilitySeverity:
    return _match_enum(VulnerabilitySeverity, value)


# ---------------------------------------------------------------------------
# Code review findings
# ---------------------------------------------------------------------------

@serde
@dataclass
class Issue:
    """Style, logic or performance finding attached to a line or line range."""

    line: int = field(deserializer=deserialize_int)
    message: str
    severity: IssueSeverity = field(deserializer=deserialize_issue_severity)
    end_line: Optional[int] = field(default=None, rename="endLine", deserializer=deserialize_optional_int)


@serde
@dataclass
class ReviewResult:
    issues: List[Issue]
    summary: Optional[str] = field(default=None)


# ---------------------------------------------------------------------------
# Security scan findings
# ---------------------------------------------------------------------------

@serde
@dataclass
class Vulnerability:
    """Security finding attached to a single line."""

    line: int = field(deserializer=deserialize_int)
    description: str
    severity: VulnerabilitySeverity = field(deserializer=deserialize_vulnerability_severity)
    category: str = field(rename="type")
    recommendation: str = field(default="")


@serde
@dataclass
class SecurityScanResult:
    vulnerabilities: List[Vulnerability]


@serde
@dataclass
class CodeAnalysis:
    issues: List[Issue]
    vulnerabilities: List[Vulnerability]
    summary: Optional[str] = field(default=None)
