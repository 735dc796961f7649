"""Round cascade calculation.

Builds or repairs a sequence of rounds from a competition configuration,
propagating populations and dates forward. Every round after the first takes
its population from the advancing count of the round computed before it, so
a cascade is self-consistent by construction.
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

from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

from roundcascade.constants import DEFAULT_ROUND_DURATION, DEFAULT_ROUND_NAME_TEMPLATE
from roundcascade.exceptions import (
    InvalidConfigurationException,
    RoundNotFoundException,
)
from roundcascade.models.round import Round
from roundcascade.type_hints import ISODate, Number
from roundcascade.utils import setup_logger
from roundcascade.utils.dates import next_day, parse_iso_date

if TYPE_CHECKING:
    from roundcascade.models.competition.competition_config import CompetitionConfig

logger = setup_logger(__name__)


@dataclass
class RoundOptions:
    """Optional settings for building a single round.

    Attributes
    ----------
    name : str or None
        Round name; defaults to "Round N".
    start_date : datetime.date or None
        Start of the first round. Later rounds start the day after their
        predecessor ends.
    duration : int or None
        Length in days.
    round_number : int or None
        1-indexed position, used for the default name.
    number_of_groups, people_per_group : number or None
        The sizing knob not passed positionally, for rounds that request
        both values (or a group count after the first round).
    """

    name: Optional[str] = None
    start_date: Optional[date] = None
    duration: Optional[int] = None
    round_number: Optional[int] = None
    number_of_groups: Optional[Number] = None
    people_per_group: Optional[Number] = None


def _default_name(round_number: Optional[int]) -> str:
    if round_number is None:
        return DEFAULT_ROUND_NAME_TEMPLATE.format(number="").strip()
    return DEFAULT_ROUND_NAME_TEMPLATE.format(number=round_number)


class RoundCalculator:
    """Stateless procedures over round sequences."""

    @staticmethod
    def calculate_round1(
        starting_competitors: Number,
        number_of_groups: Optional[Number],
        gate_size: Number,
        options: Optional[RoundOptions] = None,
    ) -> Round:
        """Build the first round from the starting population.

        Args:
            starting_competitors: Total competitors starting
            number_of_groups: Fixed number of groups, or None to derive it
            gate_size: Number advancing from each group
            options: Name, start date, duration and optional group size

        Returns:
            The resolved first round
        """
        options = options or RoundOptions()
        round_ = Round(
            name=options.name or _default_name(1),
            gate_size=gate_size,
            total_competitors=starting_competitors,
            number_of_groups=number_of_groups,
            people_per_group=options.people_per_group,
            start_date=options.start_date,
            duration=options.duration or DEFAULT_ROUND_DURATION,
        )
        round_.derive_missing_value()
        round_.calculate_end_date()
        return round_

    @staticmethod
    def calculate_next_round(
        previous_round: Round,
        people_per_group: Optional[Number],
        gate_size: Number,
        options: Optional[RoundOptions] = None,
    ) -> Round:
        """Build the round that follows ``previous_round``.

        Args:
            previous_round: The resolved preceding round
            people_per_group: Target people per group, or None
            gate_size: Number advancing from each group
            options: Name, duration, round number and optional group count

        Returns:
            The resolved round, scheduled the day after the previous one ends
        """
        options = options or RoundOptions()
        round_ = Round(
            name=options.name or _default_name(options.round_number),
            gate_size=gate_size,
            total_competitors=previous_round.get_advancing_competitors(),
            number_of_groups=options.number_of_groups,
            people_per_group=people_per_group,
            duration=options.duration or DEFAULT_ROUND_DURATION,
        )
        round_.derive_missing_value()
        RoundCalculator._schedule_after(previous_round, round_)
        return round_

    @staticmethod
    def calculate_all_rounds(
        config: Union["CompetitionConfig", Dict[str, Any]]
    ) -> List[Round]:
        """Calculate every round of a configuration.

        Args:
            config: Competition configuration, or its dictionary form

        Returns:
            The resolved rounds in order
        """
        if isinstance(config, dict):
            from roundcascade.models.competition.competition_config import (
                CompetitionConfig,
            )

            config = CompetitionConfig.from_dict(config)

        rounds: List[Round] = []
        for index, spec in enumerate(config.rounds):
            if index == 0:
                round_ = RoundCalculator.calculate_round1(
                    config.starting_competitors,
                    spec.number_of_groups,
                    spec.gate_size,
                    RoundOptions(
                        name=spec.name or _default_name(1),
                        start_date=config.start_date,
                        duration=spec.duration,
                        people_per_group=spec.people_per_group,
                    ),
                )
            else:
                round_ = RoundCalculator.calculate_next_round(
                    rounds[index - 1],
                    spec.people_per_group,
                    spec.gate_size,
                    RoundOptions(
                        name=spec.name or _default_name(index + 1),
                        round_number=index + 1,
                        duration=spec.duration,
                        number_of_groups=spec.number_of_groups,
                    ),
                )
            rounds.append(round_)

        logger.info(
            "Calculated %s rounds from %s starting competitors",
            len(rounds),
            config.starting_competitors,
        )
        return rounds

    @staticmethod
    def recalculate_from_index(rounds: List[Round], changed_index: int) -> List[Round]:
        """Re-derive a changed round and cascade the change forward.

        Direct edits of the changed round's group count or group size become
        its requested sizing. Every round after ``changed_index`` takes its
        population from its predecessor's new advancing count and is
        re-derived from its requested sizing. Rounds before the change are
        left untouched.

        Args:
            rounds: Existing rounds
            changed_index: Index of the round that changed (0-indexed)

        Returns:
            New list holding the updated rounds

        Raises:
            RoundNotFoundException: If ``changed_index`` is out of range
        """
        if not 0 <= changed_index < len(rounds):
            raise RoundNotFoundException(
                f"Round index {changed_index} out of range for {len(rounds)} rounds"
            )

        updated = list(rounds)

        changed_round = updated[changed_index]
        if changed_round.total_competitors is not None:
            changed_round.adopt_edited_sizing()
            changed_round.reset_to_requested()
            changed_round.derive_missing_value()
            changed_round.calculate_end_date()

        for i in range(changed_index + 1, len(updated)):
            previous_round = updated[i - 1]
            current_round = updated[i]

            current_round.total_competitors = previous_round.get_advancing_competitors()
            current_round.reset_to_requested()
            current_round.derive_missing_value()
            RoundCalculator._schedule_after(previous_round, current_round)

        logger.info(
            "Recalculated %s rounds from round %s",
            len(updated) - changed_index,
            changed_index + 1,
        )
        return updated

    @staticmethod
    def calculate_dates_from_start(
        rounds: List[Round], start_date: Union[date, ISODate]
    ) -> List[Round]:
        """Re-stamp every round's dates back to back from ``start_date``.

        Population fields are not touched.

        Raises:
            InvalidConfigurationException: If no valid start date is given
        """
        current = parse_iso_date(start_date)
        if current is None:
            raise InvalidConfigurationException("A start date is required to schedule rounds")

        updated = list(rounds)
        for round_ in updated:
            round_.start_date = current
            round_.calculate_end_date()
            current = next_day(round_.end_date)
        return updated

    @staticmethod
    def _schedule_after(previous_round: Round, round_: Round) -> None:
        # Rounds are only scheduled once the previous round has an end date
        if previous_round.end_date is None:
            return
        round_.start_date = next_day(previous_round.end_date)
        round_.calculate_end_date()
