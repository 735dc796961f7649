"""Backward planning of group counts and automatic round names.

Works from the final round back to the first: the final round holds every
finalist in one group, and each earlier round needs enough groups for its
gate size to feed the round after it.
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

import math
from dataclasses import replace
from typing import List, Optional

from roundcascade.constants import (
    AUTOMATIC_ROUND_NAMES,
    DEFAULT_ROUND_NAME_TEMPLATE,
    FALLBACK_FIRST_ROUND_GROUP_SIZE,
    FINAL_ROUND_GROUPS,
    PLANNING_PEOPLE_PER_GROUP,
)
from roundcascade.models.competition.competition_config import RoundSpec
from roundcascade.type_hints import Number
from roundcascade.utils import setup_logger
from roundcascade.utils.numbers import round_half_up

logger = setup_logger(__name__)


def automatic_round_name(index: int, total_rounds: int) -> str:
    """Name a round by its distance from the final.

    >>> automatic_round_name(3, 4)
    'Final Round'
    >>> automatic_round_name(0, 4)
    'Round 1'
    """
    position_from_end = total_rounds - index - 1
    if position_from_end in AUTOMATIC_ROUND_NAMES:
        return AUTOMATIC_ROUND_NAMES[position_from_end]
    return DEFAULT_ROUND_NAME_TEMPLATE.format(number=index + 1)


def plan_group_counts(
    starting_competitors: Number,
    target_finalists: Number,
    round_specs: List[RoundSpec],
) -> List[Optional[int]]:
    """Work out the group count of every round from the target finalists.

    Args:
        starting_competitors: Entrants to the first round
        target_finalists: Desired population of the final round
        round_specs: Round knobs; gate sizes (and group sizes where given)
            of every round but the last are used

    Returns:
        One group count per round, ``None`` only where a round has no
        usable gate size
    """
    if not round_specs:
        return []

    planned: List[Optional[int]] = [None] * len(round_specs)
    planned[-1] = FINAL_ROUND_GROUPS

    competitors_needed = target_finalists
    for i in range(len(round_specs) - 1, 0, -1):
        previous = round_specs[i - 1]
        if not previous.gate_size or previous.gate_size <= 0:
            logger.debug("Round %s has no gate size, planning stops", i)
            break

        groups_needed = math.ceil(competitors_needed / previous.gate_size)
        if i == 1:
            max_possible = math.floor(starting_competitors / previous.gate_size)
            groups_needed = max(1, min(groups_needed, max_possible))
        planned[i - 1] = groups_needed

        competitors_needed = groups_needed * (
            previous.people_per_group or PLANNING_PEOPLE_PER_GROUP
        )

    return planned


def fill_missing_group_counts(
    starting_competitors: Number,
    target_finalists: Number,
    round_specs: List[RoundSpec],
) -> List[RoundSpec]:
    """Return copies of ``round_specs`` with planned group counts applied.

    Rounds with a manual group count keep it. When the first round has a
    manual count, only the first round may be filled and later rounds derive
    their groups from their group size during the cascade.
    """
    planned = plan_group_counts(starting_competitors, target_finalists, round_specs)
    first_is_manual = bool(round_specs) and round_specs[0].number_of_groups is not None

    filled = []
    for i, spec in enumerate(round_specs):
        if spec.number_of_groups is None and (i == 0 or not first_is_manual):
            spec = replace(spec, number_of_groups=planned[i] or FINAL_ROUND_GROUPS)
        filled.append(spec)

    if filled and not filled[0].number_of_groups:
        fallback = max(
            1, round_half_up(starting_competitors / FALLBACK_FIRST_ROUND_GROUP_SIZE)
        )
        logger.info("No usable group count for round 1, falling back to %s", fallback)
        filled[0] = replace(filled[0], number_of_groups=fallback)

    return filled
