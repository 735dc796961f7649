"""Round model and its requested-sizing variants."""

from .round import Round
from .sizing import (
    BothKnown,
    GroupsKnown,
    RoundSizing,
    SizeKnown,
    Unresolved,
    sizing_from_values,
)

__all__ = [
    "Round",
    "RoundSizing",
    "Unresolved",
    "GroupsKnown",
    "SizeKnown",
    "BothKnown",
    "sizing_from_values",
]
