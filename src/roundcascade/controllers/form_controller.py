"""Form state adapter for interactive competition planners.

Holds the raw values a planning form collects, turns them into a
CompetitionConfig (automatic round names, backward group planning) and
returns the calculated competition and its validation report. Rendering,
storage and input debouncing belong to the caller.
"""

# Round Cascade
# Copyright (C) 2025  Round Cascade developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from roundcascade.calculators.planner import (
    automatic_round_name,
    fill_missing_group_counts,
)
from roundcascade.constants import (
    DEFAULT_FINAL_ROUND_GATE,
    DEFAULT_FIRST_ROUND_GATE,
    DEFAULT_MIDDLE_ROUND_GATE,
    DEFAULT_MIDDLE_ROUND_PEOPLE,
    DEFAULT_NUMBER_OF_ROUNDS,
    DEFAULT_ROUND_DURATION,
    DEFAULT_STARTING_COMPETITORS,
    DEFAULT_TARGET_FINALISTS,
    FINAL_ROUND_GROUPS,
)
from roundcascade.exceptions import (
    InvalidConfigurationException,
)
from roundcascade.models.competition import (
    Competition,
    CompetitionConfig,
    RoundSpec,
)
from roundcascade.type_hints import Number
from roundcascade.utils import setup_logger
from roundcascade.utils.dates import format_iso_date, parse_iso_date
from roundcascade.utils.validation import (
    validate_iso_date_strict,
    validate_positive_integer_strict,
)
from roundcascade.validation.competition_validator import (
    CompetitionValidator,
    ValidationReport,
)

logger = setup_logger(__name__)


@dataclass
class RoundInput:
    """Values entered for one round.

    Attributes
    ----------
    gate : int or None
        Number advancing from each group.
    people : int or None
        People per group. Ignored for the first round, whose group size is
        always derived, and overridden by the target for the final round.
    groups : int or None
        Manual group count; planned automatically when left empty.
    """

    gate: Optional[Number] = None
    people: Optional[Number] = None
    groups: Optional[Number] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"gate": self.gate, "people": self.people, "groups": self.groups}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoundInput":
        """Read one round's inputs; empty fields stay ``None``.

        Raises:
            NumberValidationException: If a field is not a positive whole number
        """
        return cls(
            gate=_read_positive_integer(data.get("gate"), "Gate size"),
            people=_read_positive_integer(data.get("people"), "People per group"),
            groups=_read_positive_integer(data.get("groups"), "Groups"),
        )


def _read_positive_integer(
    value: Any, field_name: str, default: Optional[int] = None
) -> Optional[int]:
    if _is_blank(value):
        return default
    return validate_positive_integer_strict(value, field_name)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def default_round_input(index: int, number_of_rounds: int) -> RoundInput:
    """Initial values of a round input depending on its position."""
    if index == number_of_rounds - 1:
        return RoundInput(gate=DEFAULT_FINAL_ROUND_GATE, groups=FINAL_ROUND_GROUPS)
    if index == 0:
        return RoundInput(gate=DEFAULT_FIRST_ROUND_GATE)
    return RoundInput(gate=DEFAULT_MIDDLE_ROUND_GATE, people=DEFAULT_MIDDLE_ROUND_PEOPLE)


@dataclass
class FormSettings:
    """Complete state of a planning form.

    Attributes
    ----------
    starting_competitors : int
    target_finalists : int
    number_of_rounds : int
    round_duration : int
        Duration in days shared by every round.
    start_date : datetime.date or None
    rounds : list of RoundInput
    """

    starting_competitors: Number = DEFAULT_STARTING_COMPETITORS
    target_finalists: Number = DEFAULT_TARGET_FINALISTS
    number_of_rounds: int = DEFAULT_NUMBER_OF_ROUNDS
    round_duration: int = DEFAULT_ROUND_DURATION
    start_date: Optional[date] = None
    rounds: List[RoundInput] = field(default_factory=list)

    def __post_init__(self):
        self.start_date = parse_iso_date(self.start_date)
        if not self.rounds:
            self.rounds = [
                default_round_input(i, self.number_of_rounds)
                for i in range(self.number_of_rounds)
            ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "startingCompetitors": self.starting_competitors,
            "targetFinalists": self.target_finalists,
            "numberOfRounds": self.number_of_rounds,
            "roundDuration": self.round_duration,
            "startDate": format_iso_date(self.start_date),
            "rounds": [r.to_dict() for r in self.rounds],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FormSettings":
        """Restore form state; missing values fall back to the form defaults.

        Values may be numbers or the strings a form field holds. Saved round
        inputs are kept only when they match the number of rounds.

        Raises:
            NumberValidationException: If a value is not a positive whole number
            DateValidationException: If the start date is malformed
        """
        number_of_rounds = _read_positive_integer(
            data.get("numberOfRounds"), "Number of rounds", DEFAULT_NUMBER_OF_ROUNDS
        )
        raw_start_date = data.get("startDate")
        start_date = (
            None if _is_blank(raw_start_date) else validate_iso_date_strict(raw_start_date)
        )

        rounds = [RoundInput.from_dict(r) for r in data.get("rounds") or []]
        if len(rounds) != number_of_rounds:
            rounds = []

        return cls(
            starting_competitors=_read_positive_integer(
                data.get("startingCompetitors"),
                "Starting competitors",
                DEFAULT_STARTING_COMPETITORS,
            ),
            target_finalists=_read_positive_integer(
                data.get("targetFinalists"), "Target finalists", DEFAULT_TARGET_FINALISTS
            ),
            number_of_rounds=number_of_rounds,
            round_duration=_read_positive_integer(
                data.get("roundDuration"), "Round duration", DEFAULT_ROUND_DURATION
            ),
            start_date=start_date,
            rounds=rounds,
        )


class CompetitionFormController:
    """Turns form settings into calculated competitions."""

    def __init__(self, settings: Optional[FormSettings] = None):
        self.settings = settings or FormSettings()
        self.competition: Optional[Competition] = None

    def set_round_count(self, number_of_rounds: int) -> None:
        """Resize the round inputs, resetting each one to its positional default.

        Raises:
            InvalidConfigurationException: If ``number_of_rounds`` is below 1
        """
        if number_of_rounds < 1:
            raise InvalidConfigurationException(
                f"A competition needs at least one round, got {number_of_rounds}"
            )
        self.settings.number_of_rounds = number_of_rounds
        self.settings.rounds = [
            default_round_input(i, number_of_rounds) for i in range(number_of_rounds)
        ]

    def apply_preset(self, preset_number: int, today: Optional[date] = None) -> Competition:
        """Load a built-in preset and calculate it."""
        from roundcascade.presets import load_preset

        self.settings = load_preset(preset_number, today)
        return self.calculate()

    def build_config(self) -> CompetitionConfig:
        """Build the competition configuration the form describes.

        Round names follow their distance from the final. The final round's
        group size always equals the target finalists, and rounds without a
        manual group count receive one from backward planning.
        """
        settings = self.settings
        total = len(settings.rounds)

        specs = []
        for index, round_input in enumerate(settings.rounds):
            if index == 0:
                people = None
            elif index == total - 1:
                people = settings.target_finalists
            else:
                people = round_input.people
            specs.append(
                RoundSpec(
                    gate_size=round_input.gate,
                    name=automatic_round_name(index, total),
                    number_of_groups=round_input.groups,
                    people_per_group=people,
                    duration=settings.round_duration,
                )
            )

        return CompetitionConfig(
            starting_competitors=settings.starting_competitors,
            target_finalists=settings.target_finalists,
            start_date=settings.start_date,
            rounds=fill_missing_group_counts(
                settings.starting_competitors, settings.target_finalists, specs
            ),
        )

    def calculate(self) -> Competition:
        """Calculate the competition for the current settings."""
        competition = Competition.from_config(self.build_config())
        competition.calculate_all_rounds()
        self.competition = competition
        return competition

    def report(self) -> ValidationReport:
        """Validation report for the last calculation, calculating first if needed."""
        if self.competition is None:
            self.calculate()
        return CompetitionValidator.generate_report(self.competition)
