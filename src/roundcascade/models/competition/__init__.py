"""Competition aggregate and its configuration input."""

from .competition_config import CompetitionConfig, RoundSpec
from .competition import Competition, CompetitionValidation

__all__ = [
    "Competition",
    "CompetitionConfig",
    "CompetitionValidation",
    "RoundSpec",
]
