"""Type hints used in Round Cascade."""

from typing import Any, Dict, List, Union

# Calendar dates travel as "YYYY-MM-DD" strings outside the models
ISODate = str

# Populations and group sizes; ints except for the first round's group size
Number = Union[int, float]

# One row of Competition.to_table()
RoundRow = Dict[str, Any]
RoundTable = List[RoundRow]

# Plain-data snapshot produced by to_dict and consumed by from_dict
Snapshot = Dict[str, Any]
