"""Numeric policy shared by the cascade engine and its validators."""

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
from typing import Optional

from roundcascade.constants import VALUE_TOLERANCE
from roundcascade.type_hints import Number


def round_half_up(value: Number) -> int:
    """Round to the nearest whole number, halves away from zero for positives.

    Python's ``round`` uses banker's rounding (``round(2.5) == 2``); group
    counts need ``2.5 -> 3``.
    """
    return int(math.floor(value + 0.5))


def is_whole_number(value: Optional[Number]) -> bool:
    """Check whether ``value`` has no fractional part."""
    if value is None:
        return False
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return float(value).is_integer()


def approx_equal(a: Number, b: Number, tolerance: float = VALUE_TOLERANCE) -> bool:
    return abs(a - b) <= tolerance


def normalize_number(value: Optional[Number]) -> Optional[Number]:
    """Collapse whole floats to ``int`` so ``20.0`` is stored as ``20``."""
    if value is None or isinstance(value, int):
        return value
    if float(value).is_integer():
        return int(value)
    return value
