"""Round Cascade - planning of multi-round elimination competitions.

Entrants are split into groups each round; a fixed number advance from every
group. Round Cascade derives each round's population, grouping and schedule
from a few per-round knobs and reports how well the cascade meets a target
number of finalists.
"""

from roundcascade.calculators import RoundCalculator, RoundOptions
from roundcascade.models.competition import (
    Competition,
    CompetitionConfig,
    CompetitionValidation,
    RoundSpec,
)
from roundcascade.models.round import Round
from roundcascade.validation import CompetitionValidator, ValidationReport

__version__ = "0.1.0"

__all__ = [
    "Competition",
    "CompetitionConfig",
    "CompetitionValidation",
    "CompetitionValidator",
    "Round",
    "RoundCalculator",
    "RoundOptions",
    "RoundSpec",
    "ValidationReport",
]
