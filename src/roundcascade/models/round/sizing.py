"""Requested sizing of a round.

A round is sized either by a fixed number of groups, by a target group size,
by both, or not at all. The four cases are a closed set of frozen
dataclasses so the derivation in :meth:`Round.derive_missing_value` matches
on the variant instead of testing which optional fields are ``None``.
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
from typing import Any, Dict, Optional, Tuple, Union

from roundcascade.type_hints import Number


@dataclass(frozen=True)
class Unresolved:
    """Neither the group count nor the group size was given."""

    @property
    def values(self) -> Tuple[Optional[Number], Optional[Number]]:
        return None, None


@dataclass(frozen=True)
class GroupsKnown:
    """A fixed number of groups; the group size is derived."""

    number_of_groups: Number

    @property
    def values(self) -> Tuple[Optional[Number], Optional[Number]]:
        return self.number_of_groups, None


@dataclass(frozen=True)
class SizeKnown:
    """A target group size; the group count is derived."""

    people_per_group: Number

    @property
    def values(self) -> Tuple[Optional[Number], Optional[Number]]:
        return None, self.people_per_group


@dataclass(frozen=True)
class BothKnown:
    """Both values given; they are only checked against the population."""

    number_of_groups: Number
    people_per_group: Number

    @property
    def values(self) -> Tuple[Optional[Number], Optional[Number]]:
        return self.number_of_groups, self.people_per_group


RoundSizing = Union[Unresolved, GroupsKnown, SizeKnown, BothKnown]


def sizing_from_values(
    number_of_groups: Optional[Number] = None,
    people_per_group: Optional[Number] = None,
) -> RoundSizing:
    """Build the sizing variant matching the values that are present."""
    if number_of_groups is not None and people_per_group is not None:
        return BothKnown(number_of_groups, people_per_group)
    if number_of_groups is not None:
        return GroupsKnown(number_of_groups)
    if people_per_group is not None:
        return SizeKnown(people_per_group)
    return Unresolved()


def sizing_to_dict(sizing: RoundSizing) -> Dict[str, Any]:
    number_of_groups, people_per_group = sizing.values
    return {
        "numberOfGroups": number_of_groups,
        "peoplePerGroup": people_per_group,
    }


def sizing_from_dict(data: Dict[str, Any]) -> RoundSizing:
    return sizing_from_values(data.get("numberOfGroups"), data.get("peoplePerGroup"))
