"""
iosite faults - Structured fault objects raised by the package itself.

Template and filesystem errors are NOT wrapped: Jinja2 and OS errors reach the
caller in their native form. Faults cover the failures this package originates:
- Invalid configuration
- Unreadable schedule data from the bundled schedule source
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class Severity(str, Enum):
    """
    Fault severity levels.

    Determines the logging level used when a fault is reported.
    """
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    FATAL = "fatal"


class FaultDomain(str, Enum):
    """Functional area where a fault occurred."""
    CONFIG = "config"        # Site configuration
    SCHEDULE = "schedule"    # Schedule data source


class Fault(Exception):
    """
    Base fault class - structured, typed fault object.

    Attributes:
        code: Stable machine-readable identifier (e.g., "CONFIG_INVALID")
        message: Human-readable summary
        domain: Fault domain
        severity: Fault severity
        metadata: Additional context data
    """

    def __init__(
        self,
        code: str,
        message: str,
        *,
        domain: FaultDomain,
        severity: Severity = Severity.ERROR,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.domain = domain
        self.severity = severity
        self.metadata = metadata or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(code={self.code!r}, "
            f"domain={self.domain.value}, severity={self.severity.value})"
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "code": self.code,
            "message": self.message,
            "domain": self.domain.value,
            "severity": self.severity.value,
            "metadata": self.metadata,
        }


class ConfigFault(Fault):
    """Configuration is missing a required value or holds an invalid one."""

    def __init__(self, reason: str, *, key: Optional[str] = None):
        super().__init__(
            code="CONFIG_INVALID",
            message=f"Invalid site configuration: {reason}",
            domain=FaultDomain.CONFIG,
            severity=Severity.FATAL,
            metadata={"key": key, "reason": reason},
        )


class ScheduleFault(Fault):
    """Schedule data could not be read or decoded."""

    def __init__(self, source: str, reason: str):
        super().__init__(
            code="SCHEDULE_UNAVAILABLE",
            message=f"Schedule source '{source}' failed: {reason}",
            domain=FaultDomain.SCHEDULE,
            severity=Severity.ERROR,
            metadata={"source": source, "reason": reason},
        )
