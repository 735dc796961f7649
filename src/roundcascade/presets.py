"""Built-in competition presets.

Each preset describes a complete planning form: 52,000 entrants cut down to
100 finalists, starting on the next 4th of a month.
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
from typing import Dict, List, Optional

from roundcascade.constants import (
    FINAL_ROUND_GROUPS,
    PRESET_START_DAY_OF_MONTH,
    PRESET_STARTING_COMPETITORS,
    PRESET_TARGET_FINALISTS,
)
from roundcascade.controllers.form_controller import FormSettings, RoundInput
from roundcascade.utils import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class Preset:
    """A named round layout with a shared round duration."""

    label: str
    round_duration: int
    rounds: List[RoundInput]

    @property
    def number_of_rounds(self) -> int:
        return len(self.rounds)


def _middle(count: int, gate: int, people: int = 20) -> List[RoundInput]:
    return [RoundInput(gate=gate, people=people) for _ in range(count)]


def _final() -> RoundInput:
    return RoundInput(gate=20, groups=FINAL_ROUND_GROUPS)


PRESETS: Dict[int, Preset] = {
    1: Preset(
        label="4 Rounds (16 days)",
        round_duration=4,
        rounds=[RoundInput(gate=4, groups=2500), *_middle(2, gate=2), _final()],
    ),
    2: Preset(
        label="5 Rounds (20 days)",
        round_duration=4,
        rounds=[
            RoundInput(gate=4, groups=6250),
            *_middle(2, gate=4),
            *_middle(1, gate=2),
            _final(),
        ],
    ),
    3: Preset(
        label="8 Rounds (16 days)",
        round_duration=2,
        rounds=[
            RoundInput(gate=10, groups=2560),
            *_middle(4, gate=10),
            *_middle(2, gate=5),
            _final(),
        ],
    ),
    4: Preset(
        label="10 Rounds (20 days)",
        round_duration=2,
        rounds=[RoundInput(gate=10, groups=2560), *_middle(8, gate=10), _final()],
    ),
}

DEFAULT_PRESET = 1


def next_fourth(today: Optional[date] = None) -> date:
    """The 4th of this month if it is still ahead of ``today``, else of next month.

    >>> next_fourth(date(2025, 10, 3))
    datetime.date(2025, 10, 4)
    >>> next_fourth(date(2025, 12, 4))
    datetime.date(2026, 1, 4)
    """
    today = today or date.today()
    candidate = today.replace(day=PRESET_START_DAY_OF_MONTH)
    if candidate > today:
        return candidate
    if today.month == 12:
        return date(today.year + 1, 1, PRESET_START_DAY_OF_MONTH)
    return date(today.year, today.month + 1, PRESET_START_DAY_OF_MONTH)


def load_preset(preset_number: int, today: Optional[date] = None) -> FormSettings:
    """Form settings for a built-in preset.

    Unknown preset numbers fall back to the first preset.

    Args:
        preset_number: Preset key, 1 to 4
        today: Reference day for the start date, defaults to today

    Returns:
        Fresh FormSettings; the preset itself is never shared
    """
    preset = PRESETS.get(preset_number)
    if preset is None:
        logger.warning(
            "Unknown preset %s, using preset %s", preset_number, DEFAULT_PRESET
        )
        preset = PRESETS[DEFAULT_PRESET]

    return FormSettings(
        starting_competitors=PRESET_STARTING_COMPETITORS,
        target_finalists=PRESET_TARGET_FINALISTS,
        number_of_rounds=preset.number_of_rounds,
        round_duration=preset.round_duration,
        start_date=next_fourth(today),
        rounds=[RoundInput(**r.to_dict()) for r in preset.rounds],
    )
