"""Independent validation reports for competitions."""

from .competition_validator import (
    CheckResult,
    CompetitionValidator,
    TargetCheck,
    ValidationReport,
)

__all__ = [
    "CheckResult",
    "CompetitionValidator",
    "TargetCheck",
    "ValidationReport",
]
