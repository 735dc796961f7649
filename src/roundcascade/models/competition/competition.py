"""Main Competition class - owns the round sequence and orchestrates the cascade.

This is the primary interface for configuring an elimination competition:
it delegates calculation to RoundCalculator, checks the cascade's structural
invariants, and serializes the whole configuration to a plain snapshot.
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

from datetime import date
from typing import Any, Dict, List, Optional, Union

from roundcascade.calculators.round_calculator import RoundCalculator
from roundcascade.constants import (
    DEFAULT_COMPETITION_NAME,
    DEFAULT_ROUND_DURATION,
    DEFAULT_STARTING_COMPETITORS,
    DEFAULT_TARGET_FINALISTS,
    GRAND_PRIZE_WINNERS,
    TARGET_TOLERANCE,
)
from roundcascade.exceptions import (
    NoRoundsConfiguredException,
    RoundNotFoundException,
)
from roundcascade.models.round import GroupsKnown, Round, SizeKnown
from roundcascade.type_hints import ISODate, Number, RoundTable, Snapshot
from roundcascade.utils import setup_logger
from roundcascade.utils.dates import format_iso_date, parse_iso_date
from roundcascade.utils.numbers import approx_equal

from .competition_config import CompetitionConfig, RoundSpec

logger = setup_logger(__name__)


class CompetitionValidation:
    """Outcome of :meth:`Competition.validate`.

    Attributes:
        errors: Every violated invariant, in check order
    """

    def __init__(self, errors: List[str]):
        self.errors = errors

    @property
    def valid(self) -> bool:
        return not self.errors

    def __bool__(self) -> bool:
        return self.valid

    def __repr__(self) -> str:
        if self.valid:
            return "CompetitionValidation(VALID)"
        return f"CompetitionValidation(INVALID, {len(self.errors)} errors)"

    def to_dict(self) -> Dict[str, Any]:
        return {"valid": self.valid, "errors": list(self.errors)}


class Competition:
    """A named, ordered sequence of rounds plus competition-level metadata.

    The competition exclusively owns its rounds. Each (re)calculation replaces
    ``rounds`` as a whole; the tail after a changed round is always
    recomputed, never patched field by field.
    """

    def __init__(
        self,
        name: str = DEFAULT_COMPETITION_NAME,
        starting_competitors: Number = DEFAULT_STARTING_COMPETITORS,
        target_finalists: Optional[Number] = DEFAULT_TARGET_FINALISTS,
        start_date: Optional[Union[date, ISODate]] = None,
        rounds: Optional[List[Union[Round, RoundSpec, Dict[str, Any]]]] = None,
    ) -> None:
        """Initialize a competition.

        Args
        ----
        name: Competition name
        starting_competitors: Entrants to the first round
        target_finalists: Desired population of the final round
        start_date: First day of the first round
        rounds: Rounds, round specs or their dictionary form
        """
        self.name = name
        self.starting_competitors = starting_competitors
        self.target_finalists = target_finalists
        self.start_date = parse_iso_date(start_date)
        self.rounds: List[Round] = [self._as_round(r) for r in rounds or []]

    @classmethod
    def from_config(cls, config: CompetitionConfig) -> "Competition":
        """Create an uncalculated competition from a configuration."""
        return cls(
            name=config.name,
            starting_competitors=config.starting_competitors,
            target_finalists=config.target_finalists,
            start_date=config.start_date,
            rounds=list(config.rounds),
        )

    @staticmethod
    def _as_round(value: Union[Round, RoundSpec, Dict[str, Any]]) -> Round:
        if isinstance(value, Round):
            return value
        if isinstance(value, RoundSpec):
            return Round(
                name=value.name or "",
                gate_size=value.gate_size,
                number_of_groups=value.number_of_groups,
                people_per_group=value.people_per_group,
                duration=value.duration or DEFAULT_ROUND_DURATION,
                requested=value.sizing,
            )
        return Round.from_dict(value)

    # ========== Round Management ==========

    def add_round(self, round_config: Union[Round, RoundSpec, Dict[str, Any]]) -> Round:
        """Append a round and return it (uncalculated until the next calculation)."""
        round_ = self._as_round(round_config)
        if not round_.name:
            round_.name = f"Round {len(self.rounds) + 1}"
        self.rounds.append(round_)
        return round_

    def to_config(self) -> CompetitionConfig:
        """Configuration equivalent to this competition's requested knobs."""
        specs = []
        for round_ in self.rounds:
            number_of_groups, people_per_group = round_.requested.values
            specs.append(
                RoundSpec(
                    gate_size=round_.gate_size,
                    name=round_.name or None,
                    number_of_groups=number_of_groups,
                    people_per_group=people_per_group,
                    duration=round_.duration,
                )
            )
        return CompetitionConfig(
            name=self.name,
            starting_competitors=self.starting_competitors,
            target_finalists=self.target_finalists,
            start_date=self.start_date,
            rounds=specs,
        )

    def _require_rounds(self) -> None:
        if not self.rounds:
            raise NoRoundsConfiguredException("No rounds configured")

    # ========== Calculation ==========

    def calculate_all_rounds(self) -> List[Round]:
        """Calculate every round from the competition's configuration.

        Raises:
            NoRoundsConfiguredException: If the competition has no rounds
        """
        self._require_rounds()
        self.rounds = RoundCalculator.calculate_all_rounds(self.to_config())
        logger.info(
            "Calculated %s: %s -> %s finalists",
            self.name,
            self.starting_competitors,
            self.get_final_competitor_count(),
        )
        return self.rounds

    def recalculate_from_round(self, round_index: int) -> List[Round]:
        """Cascade a change in round ``round_index`` to every later round."""
        self.rounds = RoundCalculator.recalculate_from_index(self.rounds, round_index)
        return self.rounds

    def update_round1_groups(self, number_of_groups: Number) -> List[Round]:
        """Set the first round's group count and cascade the change.

        Raises:
            NoRoundsConfiguredException: If the competition has no rounds
        """
        self._require_rounds()
        first = self.rounds[0]
        first.configure(number_of_groups=number_of_groups)
        first.total_competitors = self.starting_competitors
        first.derive_missing_value()
        return self.recalculate_from_round(0)

    def update_round(
        self,
        round_index: int,
        number_of_groups: Optional[Number] = None,
        people_per_group: Optional[Number] = None,
        gate_size: Optional[Number] = None,
        duration: Optional[int] = None,
    ) -> List[Round]:
        """Replace one round's knobs and cascade the change forward.

        The group count and group size replace the requested sizing as a
        pair; gate size and duration are only changed when given.

        Raises:
            RoundNotFoundException: If ``round_index`` is out of range
        """
        if not 0 <= round_index < len(self.rounds):
            raise RoundNotFoundException(
                f"Round index {round_index} out of range for {len(self.rounds)} rounds"
            )
        round_ = self.rounds[round_index]
        round_.configure(number_of_groups, people_per_group)
        if gate_size is not None:
            round_.gate_size = gate_size
        if duration is not None:
            round_.duration = duration
        if round_index == 0:
            round_.total_competitors = self.starting_competitors
        return self.recalculate_from_round(round_index)

    def reschedule(self, start_date: Union[date, ISODate]) -> List[Round]:
        """Move the whole schedule to ``start_date`` without touching populations."""
        self.start_date = parse_iso_date(start_date)
        self.rounds = RoundCalculator.calculate_dates_from_start(
            self.rounds, self.start_date
        )
        return self.rounds

    # ========== Results ==========

    def get_final_competitor_count(self) -> Number:
        if not self.rounds:
            return 0
        return self.rounds[-1].total_competitors or 0

    def get_additional_prize_recipients(self) -> Number:
        """Top performers of the final group; the grand prize winner is one of them."""
        if not self.rounds:
            return 0
        return self.rounds[-1].gate_size or 0

    def get_grand_prize_winners(self) -> int:
        return GRAND_PRIZE_WINNERS if self.rounds else 0

    # ========== Validation ==========

    def validate(self) -> CompetitionValidation:
        """Check the competition's structural invariants.

        All checks run; errors are aggregated rather than short-circuited.

        Returns:
            CompetitionValidation listing every violation
        """
        errors = []

        if not self.starting_competitors or self.starting_competitors <= 0:
            errors.append("startingCompetitors must be positive")

        if not self.rounds:
            errors.append("Competition must have at least one round")

        for index, round_ in enumerate(self.rounds):
            round_errors = round_.validate(allow_fractional_group_size=index == 0)
            if round_errors:
                errors.append(
                    f"Round {index + 1} ({round_.name}): {', '.join(round_errors)}"
                )

        if self.rounds:
            first = self.rounds[0]
            if first.total_competitors != self.starting_competitors:
                errors.append(
                    f"Round 1 totalCompetitors ({first.total_competitors}) does not match "
                    f"startingCompetitors ({self.starting_competitors})"
                )

        for i in range(1, len(self.rounds)):
            previous_round = self.rounds[i - 1]
            current_round = self.rounds[i]
            if previous_round.number_of_groups is None or previous_round.gate_size is None:
                errors.append(f"Round {i} has no advancing count; it has not been calculated")
                continue
            expected = previous_round.get_advancing_competitors()
            actual = current_round.total_competitors
            if actual is None or not approx_equal(actual, expected):
                errors.append(
                    f"Round {i + 1} totalCompetitors ({actual}) does not match "
                    f"advancing from Round {i} ({expected})"
                )

        if self.rounds:
            final_round = self.rounds[-1]
            if final_round.number_of_groups != 1:
                errors.append(
                    f"Final round must have exactly 1 group, but has {final_round.number_of_groups}"
                )

        final_count = self.get_final_competitor_count()
        if self.target_finalists and abs(final_count - self.target_finalists) > (
            self.target_finalists * TARGET_TOLERANCE
        ):
            errors.append(
                f"Final competitor count ({final_count}) differs significantly "
                f"from target ({self.target_finalists})"
            )

        return CompetitionValidation(errors)

    # ========== Reporting ==========

    def get_summary(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "startingCompetitors": self.starting_competitors,
            "targetFinalists": self.target_finalists,
            "actualFinalists": self.get_final_competitor_count(),
            "grandPrizeWinners": self.get_grand_prize_winners(),
            "additionalPrizeRecipients": self.get_additional_prize_recipients(),
            "numberOfRounds": len(self.rounds),
            "startDate": format_iso_date(self.start_date),
            "endDate": format_iso_date(self.rounds[-1].end_date) if self.rounds else None,
        }

    def to_table(self) -> RoundTable:
        """One display row per round."""
        rows = []
        for index, round_ in enumerate(self.rounds):
            advancing = (
                round_.get_advancing_competitors()
                if round_.number_of_groups and round_.gate_size
                else 0
            )
            rows.append(
                {
                    "Round": index + 1,
                    "Name": round_.name,
                    "Groups": round_.number_of_groups,
                    "People/Group": round_.people_per_group,
                    "Gate Size": round_.gate_size,
                    "Total Competitors": round_.total_competitors,
                    "Advancing": advancing,
                    "Start Date": format_iso_date(round_.start_date) or "N/A",
                    "End Date": format_iso_date(round_.end_date) or "N/A",
                }
            )
        return rows

    # ========== Serialization ==========

    def to_dict(self) -> Snapshot:
        """Serialize competition to a snapshot.

        Returns:
            Configuration, every resolved round and a computed summary
        """
        return {
            "name": self.name,
            "startingCompetitors": self.starting_competitors,
            "targetFinalists": self.target_finalists,
            "startDate": format_iso_date(self.start_date),
            "rounds": [r.to_dict() for r in self.rounds],
            "summary": self.get_summary(),
        }

    @classmethod
    def from_dict(cls, data: Snapshot) -> "Competition":
        """Deserialize competition from a snapshot or a raw configuration.

        Resolved rounds are restored as they are, without re-deriving any
        value. Resolved rounds saved without their requested sizing are
        assumed to have been sized by group count (first round) or by group
        size (later rounds).

        Args:
            data: Dictionary produced by :meth:`to_dict`, or a configuration

        Returns:
            Reconstructed Competition object
        """
        rounds = []
        for index, round_data in enumerate(data.get("rounds") or []):
            round_ = Round.from_dict(round_data)
            if "requested" not in round_data and round_.total_competitors is not None:
                if index == 0 and round_.number_of_groups is not None:
                    round_.requested = GroupsKnown(round_.number_of_groups)
                elif index > 0 and round_.people_per_group is not None:
                    round_.requested = SizeKnown(round_.people_per_group)
            rounds.append(round_)

        competition = cls(
            name=data.get("name") or DEFAULT_COMPETITION_NAME,
            starting_competitors=data.get(
                "startingCompetitors", DEFAULT_STARTING_COMPETITORS
            ),
            target_finalists=data.get("targetFinalists", DEFAULT_TARGET_FINALISTS),
            start_date=data.get("startDate"),
            rounds=rounds,
        )
        logger.info("Loaded competition: %s (%s rounds)", competition.name, len(rounds))
        return competition
