"""Calendar-day arithmetic on ISO dates.

All schedule dates are plain calendar days with no time or timezone
component. Strings are accepted at the edges and ``datetime.date`` is used
inside the models.
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

from datetime import date, datetime, timedelta
from typing import Optional, Union

from roundcascade.constants import ISO_DATE_FORMAT
from roundcascade.exceptions import InvalidConfigurationException
from roundcascade.type_hints import ISODate

DateLike = Union[date, ISODate]


def parse_iso_date(value: Optional[DateLike]) -> Optional[date]:
    """Parse a ``YYYY-MM-DD`` string into a date.

    ``None`` and empty strings mean "no date". ``datetime`` values are
    truncated to their calendar day.

    Raises:
        InvalidConfigurationException: If the string is not an ISO date
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value).strip(), ISO_DATE_FORMAT).date()
    except ValueError as e:
        raise InvalidConfigurationException(
            f"Invalid date {value!r}, expected YYYY-MM-DD"
        ) from e


def format_iso_date(value: Optional[date]) -> Optional[ISODate]:
    """Format a date as ``YYYY-MM-DD`` (``None`` passes through)."""
    if value is None:
        return None
    return value.strftime(ISO_DATE_FORMAT)


def add_days(start: date, days: int) -> date:
    """Return the calendar day ``days`` after ``start``."""
    return start + timedelta(days=days)


def next_day(value: date) -> date:
    return add_days(value, 1)
