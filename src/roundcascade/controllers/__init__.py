"""Adapters between planning forms and the round cascade."""

from .form_controller import (
    CompetitionFormController,
    FormSettings,
    RoundInput,
    default_round_input,
)

__all__ = [
    "CompetitionFormController",
    "FormSettings",
    "RoundInput",
    "default_round_input",
]
