"""Data model for one elimination round."""

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

from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Dict, List, Optional

from roundcascade.constants import DEFAULT_ROUND_DURATION
from roundcascade.exceptions import (
    InvalidRoundValueException,
    MissingRoundValueException,
)
from roundcascade.type_hints import Number
from roundcascade.utils import setup_logger
from roundcascade.utils.dates import add_days, format_iso_date, parse_iso_date
from roundcascade.utils.numbers import (
    approx_equal,
    is_whole_number,
    normalize_number,
    round_half_up,
)
from roundcascade.utils.validation import validate_non_empty

from .sizing import (
    BothKnown,
    GroupsKnown,
    RoundSizing,
    SizeKnown,
    Unresolved,
    sizing_from_dict,
    sizing_from_values,
    sizing_to_dict,
)

logger = setup_logger(__name__)


@dataclass
class Round:
    """A single elimination stage.

    Attributes
    ----------
    name : str
        Display name of the round.
    gate_size : int or None
        Number of competitors advancing from each group.
    total_competitors : int or None
        Entrants to this round; ``None`` until the cascade sets it.
    number_of_groups : int or None
        Group count, a whole number once resolved.
    people_per_group : int, float or None
        Group size. Fractional only in the first round, where the starting
        population need not divide evenly.
    start_date, end_date : datetime.date or None
        Schedule of the round; ISO strings are accepted on construction.
    duration : int
        Length of the round in days, the start day counting as day 1.
    requested : RoundSizing
        The sizing the caller asked for. Inferred from ``number_of_groups``
        and ``people_per_group`` when not given, and used to re-derive the
        round whenever its population changes.
    """

    name: str
    gate_size: Optional[Number] = None
    total_competitors: Optional[Number] = None
    number_of_groups: Optional[Number] = None
    people_per_group: Optional[Number] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    duration: int = DEFAULT_ROUND_DURATION
    requested: Optional[RoundSizing] = None

    def __post_init__(self):
        self.start_date = parse_iso_date(self.start_date)
        self.end_date = parse_iso_date(self.end_date)
        if self.requested is None:
            self.requested = sizing_from_values(
                self.number_of_groups, self.people_per_group
            )

    # ========== Derivation ==========

    def derive_missing_value(self) -> None:
        """Fill in whichever of group count and group size is missing.

        The group count is always rounded to a whole number; the group size
        is then recomputed so that groups x size equals the population.

        Raises:
            MissingRoundValueException: If ``total_competitors`` is not set
            InvalidRoundValueException: If a group size of zero or less is given
        """
        if self.total_competitors is None:
            raise MissingRoundValueException(
                f"{self.name}: totalCompetitors must be set before deriving missing values"
            )

        if self.total_competitors == 0:
            self.number_of_groups = 0
            self.people_per_group = 0
            return

        sizing = sizing_from_values(self.number_of_groups, self.people_per_group)

        if isinstance(sizing, GroupsKnown):
            self.number_of_groups = self._clamp_group_count(
                round_half_up(sizing.number_of_groups)
            )
            self.people_per_group = self._share_per_group()

        elif isinstance(sizing, SizeKnown):
            if sizing.people_per_group <= 0:
                raise InvalidRoundValueException(
                    f"{self.name}: peoplePerGroup must be positive, got {sizing.people_per_group}"
                )
            groups = round_half_up(self.total_competitors / sizing.people_per_group)
            if groups == 0:
                # A round with entrants always keeps at least one group
                logger.debug(
                    "%s: %s entrants fit in one group of %s, using 1 group",
                    self.name,
                    self.total_competitors,
                    sizing.people_per_group,
                )
                groups = 1
            self.number_of_groups = groups
            self.people_per_group = self._share_per_group()

        elif isinstance(sizing, BothKnown):
            self.number_of_groups = round_half_up(sizing.number_of_groups)
            calculated = self.number_of_groups * sizing.people_per_group
            if not approx_equal(calculated, self.total_competitors):
                logger.warning(
                    "%s: numberOfGroups (%s) x peoplePerGroup (%s) = %s, but totalCompetitors is %s",
                    self.name,
                    self.number_of_groups,
                    sizing.people_per_group,
                    calculated,
                    self.total_competitors,
                )

        elif isinstance(sizing, Unresolved):
            self.number_of_groups = 1
            self.people_per_group = normalize_number(self.total_competitors)

        logger.debug(
            "%s: %s entrants -> %s groups of %s",
            self.name,
            self.total_competitors,
            self.number_of_groups,
            self.people_per_group,
        )

    def _clamp_group_count(self, groups: int) -> int:
        """Keep a requested group count within [1, total_competitors]."""
        upper = int(self.total_competitors)
        if groups < 1:
            logger.warning(
                "%s: %s groups requested for %s entrants, using 1",
                self.name,
                groups,
                self.total_competitors,
            )
            return 1
        if groups > upper:
            logger.warning(
                "%s: %s groups requested for only %s entrants, using %s",
                self.name,
                groups,
                self.total_competitors,
                upper,
            )
            return upper
        return groups

    def _share_per_group(self) -> Number:
        return normalize_number(self.total_competitors / self.number_of_groups)

    def get_advancing_competitors(self) -> int:
        """Number of competitors advancing to the next round.

        Always a whole number, even if the inputs were stored as floats.

        Raises:
            MissingRoundValueException: If the group count or gate size is not set
        """
        if self.number_of_groups is None or self.gate_size is None:
            raise MissingRoundValueException(
                f"{self.name}: numberOfGroups and gateSize must be set to calculate advancing competitors"
            )
        return round_half_up(self.number_of_groups) * round_half_up(self.gate_size)

    def calculate_end_date(self) -> None:
        """Set ``end_date`` from ``start_date`` and ``duration``."""
        if self.start_date is None:
            return
        self.end_date = add_days(self.start_date, self.duration - 1)

    # ========== Requested sizing ==========

    def configure(
        self,
        number_of_groups: Optional[Number] = None,
        people_per_group: Optional[Number] = None,
    ) -> None:
        """Replace the requested sizing and drop previously derived values."""
        self.requested = sizing_from_values(number_of_groups, people_per_group)
        self.reset_to_requested()

    def adopt_edited_sizing(self) -> None:
        """Take direct edits of the group count or size as the new requested sizing.

        A round with one value set is requested by that value. A resolved
        round holds both values; there the requested knob is adopted when
        its current value differs from the request, and an edit of the
        derived value is left to :meth:`reset_to_requested`.
        """
        current = sizing_from_values(self.number_of_groups, self.people_per_group)
        requested_groups, requested_size = self.requested.values

        if not isinstance(current, BothKnown):
            self.requested = current
        elif isinstance(self.requested, GroupsKnown):
            if self.number_of_groups != requested_groups:
                self.requested = GroupsKnown(self.number_of_groups)
        elif isinstance(self.requested, SizeKnown):
            if self.people_per_group != requested_size:
                self.requested = SizeKnown(self.people_per_group)
        elif isinstance(self.requested, BothKnown):
            self.requested = current

        logger.debug("%s: requested sizing is %s", self.name, self.requested)

    def reset_to_requested(self) -> None:
        """Restore group count and size to what was requested, clearing derived values."""
        self.number_of_groups, self.people_per_group = self.requested.values

    # ========== Validation ==========

    def validate(self, allow_fractional_group_size: bool = True) -> List[str]:
        """Check the round's own invariants.

        Args:
            allow_fractional_group_size: False for every round but the first

        Returns:
            Descriptions of the violated invariants, empty when valid
        """
        errors = []
        groups = self.number_of_groups
        size = self.people_per_group
        gate = self.gate_size

        if not validate_non_empty(self.name):
            errors.append("Round must have a name")
        if gate is None or gate <= 0:
            errors.append("gateSize must be positive")
        if self.total_competitors is not None and self.total_competitors <= 0:
            errors.append("totalCompetitors must be positive")
        if groups is not None and groups <= 0:
            errors.append("numberOfGroups must be positive")
        if size is not None and size <= 0:
            errors.append("peoplePerGroup must be positive")

        if groups is not None and not is_whole_number(groups):
            errors.append(f"numberOfGroups must be a whole number, got {groups}")
        if gate is not None and not is_whole_number(gate):
            errors.append(f"gateSize must be a whole number, got {gate}")
        if groups is not None and gate is not None and not is_whole_number(groups * gate):
            errors.append(
                f"Advancing competitors must be a whole number, got {groups * gate}"
            )
        if (
            not allow_fractional_group_size
            and size is not None
            and not is_whole_number(size)
        ):
            errors.append(f"peoplePerGroup must be a whole number, got {size}")

        if gate is not None and size is not None and size > 0 and gate > size:
            errors.append(
                f"gateSize ({gate}) exceeds peoplePerGroup ({size})"
            )

        if self.total_competitors and groups and size:
            calculated = groups * size
            if not approx_equal(calculated, self.total_competitors):
                errors.append(
                    f"Inconsistent values: {groups} groups x {size} people/group = {calculated}, "
                    f"but totalCompetitors is {self.total_competitors}"
                )

        return errors

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize round to dictionary, including the derived advancing count."""
        return {
            "name": self.name,
            "totalCompetitors": self.total_competitors,
            "numberOfGroups": self.number_of_groups,
            "gateSize": self.gate_size,
            "peoplePerGroup": self.people_per_group,
            "startDate": format_iso_date(self.start_date),
            "endDate": format_iso_date(self.end_date),
            "duration": self.duration,
            "advancing": (
                self.get_advancing_competitors()
                if self.number_of_groups and self.gate_size
                else None
            ),
            "requested": sizing_to_dict(self.requested),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Round":
        """Deserialize round from dictionary without re-deriving anything.

        Accepts both resolved snapshots and raw round specs; ``advancing`` is
        ignored since it is always recomputed.
        """
        requested = data.get("requested")
        return cls(
            name=data.get("name", ""),
            gate_size=data.get("gateSize"),
            total_competitors=data.get("totalCompetitors"),
            number_of_groups=data.get("numberOfGroups"),
            people_per_group=data.get("peoplePerGroup"),
            start_date=data.get("startDate"),
            end_date=data.get("endDate"),
            duration=data.get("duration") or DEFAULT_ROUND_DURATION,
            requested=sizing_from_dict(requested) if requested is not None else None,
        )

    def clone(self) -> "Round":
        return replace(self)
