"""CompetitionConfig data class."""

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

from roundcascade.constants import (
    DEFAULT_COMPETITION_NAME,
    DEFAULT_TARGET_FINALISTS,
)
from roundcascade.exceptions import (
    InvalidConfigurationException,
    MissingConfigurationException,
)
from roundcascade.models.round.sizing import RoundSizing, sizing_from_values
from roundcascade.type_hints import Number
from roundcascade.utils.dates import format_iso_date, parse_iso_date


@dataclass
class RoundSpec:
    """Per-round knobs as supplied by the caller.

    Attributes
    ----------
    gate_size : int or None
        Number advancing from each group.
    name : str or None
        Round name; a "Round N" default is used when missing.
    number_of_groups : int or None
        Fixed group count, if the caller wants one.
    people_per_group : int, float or None
        Target group size, if the caller wants one.
    duration : int or None
        Length in days; the default duration is used when missing.
    """

    gate_size: Optional[Number] = None
    name: Optional[str] = None
    number_of_groups: Optional[Number] = None
    people_per_group: Optional[Number] = None
    duration: Optional[int] = None

    @property
    def sizing(self) -> RoundSizing:
        return sizing_from_values(self.number_of_groups, self.people_per_group)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize round spec to dictionary."""
        return {
            "name": self.name,
            "numberOfGroups": self.number_of_groups,
            "peoplePerGroup": self.people_per_group,
            "gateSize": self.gate_size,
            "duration": self.duration,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoundSpec":
        """Deserialize round spec from dictionary."""
        if not isinstance(data, dict):
            raise InvalidConfigurationException(
                f"Round configuration must be a mapping, got {type(data).__name__}"
            )
        return cls(
            gate_size=data.get("gateSize"),
            name=data.get("name"),
            number_of_groups=data.get("numberOfGroups"),
            people_per_group=data.get("peoplePerGroup"),
            duration=data.get("duration"),
        )


@dataclass
class CompetitionConfig:
    """Competition configuration settings.

    Attributes
    ----------
    starting_competitors : int
        Entrants to the first round.
    name : str
        Competition name.
    target_finalists : int or None
        Desired population of the final round.
    start_date : datetime.date or None
        First day of the first round; ISO strings are accepted.
    rounds : list of RoundSpec
        Ordered per-round knobs. Dictionaries are converted on construction.
    """

    starting_competitors: Number
    name: str = DEFAULT_COMPETITION_NAME
    target_finalists: Optional[Number] = DEFAULT_TARGET_FINALISTS
    start_date: Optional[date] = None
    rounds: List[RoundSpec] = field(default_factory=list)

    def __post_init__(self):
        self.start_date = parse_iso_date(self.start_date)
        self.rounds = [
            r if isinstance(r, RoundSpec) else RoundSpec.from_dict(r)
            for r in self.rounds
        ]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "name": self.name,
            "startingCompetitors": self.starting_competitors,
            "targetFinalists": self.target_finalists,
            "startDate": format_iso_date(self.start_date),
            "rounds": [r.to_dict() for r in self.rounds],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CompetitionConfig":
        """Deserialize configuration from dictionary.

        Raises:
            MissingConfigurationException: If ``startingCompetitors`` is absent
            InvalidConfigurationException: If a value cannot be interpreted
        """
        if "startingCompetitors" not in data:
            raise MissingConfigurationException(
                "Configuration must define startingCompetitors"
            )
        return cls(
            name=data.get("name") or DEFAULT_COMPETITION_NAME,
            starting_competitors=data["startingCompetitors"],
            target_finalists=data.get("targetFinalists", DEFAULT_TARGET_FINALISTS),
            start_date=data.get("startDate"),
            rounds=[RoundSpec.from_dict(r) for r in data.get("rounds") or []],
        )
