"""Validation result models shared by the surface validator and the CLI."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ValidationIssue(BaseModel):
    """A single problem found in a surface."""

    severity: Severity
    category: str = Field(description="Machine-readable category, e.g. UNKNOWN_CONTROLLER")
    location: str = Field(description="Option key, control name or rule target")
    message: str
    suggestion: str | None = None
    value: Any = None

    def __str__(self) -> str:
        return f"[{self.severity.value}] {self.location}: {self.message}"


class ValidationResult(BaseModel):
    """Collected issues; the surface is valid when there are no errors."""

    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]

    @property
    def valid(self) -> bool:
        return not self.errors

    def add_error(self, category: str, location: str, message: str, **kwargs: Any) -> None:
        self.issues.append(
            ValidationIssue(
                severity=Severity.ERROR,
                category=category,
                location=location,
                message=message,
                **kwargs,
            )
        )

    def add_warning(
        self, category: str, location: str, message: str, **kwargs: Any
    ) -> None:
        self.issues.append(
            ValidationIssue(
                severity=Severity.WARNING,
                category=category,
                location=location,
                message=message,
                **kwargs,
            )
        )
