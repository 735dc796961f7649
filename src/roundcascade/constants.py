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

# --- Constants ---
ISO_DATE_FORMAT = "%Y-%m-%d"

# Absolute tolerance for every "equal" comparison between derived numbers
VALUE_TOLERANCE = 0.01

# Round defaults
DEFAULT_ROUND_DURATION = 4  # days, start day counts as day 1
DEFAULT_ROUND_NAME_TEMPLATE = "Round {number}"

# Competition defaults
DEFAULT_COMPETITION_NAME = "Competition"
DEFAULT_STARTING_COMPETITORS = 45000
DEFAULT_TARGET_FINALISTS = 100
GRAND_PRIZE_WINNERS = 1

# Target finalist checks
TARGET_TOLERANCE = 0.1  # +/- 10% of the target
LOW_FINALIST_RATIO = 0.5
HIGH_FINALIST_RATIO = 2.0

# Practical group sizes
MIN_PRACTICAL_GROUP_SIZE = 5
MAX_PRACTICAL_GROUP_SIZE = 100

# Automatic round names, keyed by distance from the final round
FINAL_ROUND_NAME = "Final Round"
SEMIFINAL_ROUND_NAME = "Semifinal Round"
QUARTERFINAL_ROUND_NAME = "Quarterfinal Round"
AUTOMATIC_ROUND_NAMES = {
    0: FINAL_ROUND_NAME,
    1: SEMIFINAL_ROUND_NAME,
    2: QUARTERFINAL_ROUND_NAME,
}

# Backward group planning
PLANNING_PEOPLE_PER_GROUP = 20
FALLBACK_FIRST_ROUND_GROUP_SIZE = 25
FINAL_ROUND_GROUPS = 1

# Form defaults for newly added rounds
DEFAULT_FIRST_ROUND_GATE = 4
DEFAULT_MIDDLE_ROUND_PEOPLE = 20
DEFAULT_MIDDLE_ROUND_GATE = 2
DEFAULT_FINAL_ROUND_GATE = 20
DEFAULT_NUMBER_OF_ROUNDS = 4

# Presets
PRESET_STARTING_COMPETITORS = 52000
PRESET_TARGET_FINALISTS = 100
PRESET_START_DAY_OF_MONTH = 4
