"""Exceptions for use in Round Cascade"""

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


# ========== Base Application Exception ==========


class RoundCascadeException(Exception):
    """Base exception for all Round Cascade errors.

    All custom exceptions in the package inherit from this class, so callers
    can catch every cascade-specific failure with a single except clause.
    """

    pass


# ========== Round Exceptions ==========


class RoundException(RoundCascadeException):
    """Base exception for round-related errors."""

    pass


class MissingRoundValueException(RoundException):
    """Raised when a round lacks a value an operation depends on.

    Deriving the missing sizing value needs ``total_competitors``; computing
    the advancing count needs ``number_of_groups`` and ``gate_size``.
    """

    pass


class InvalidRoundValueException(RoundException):
    """Raised when a round value makes derivation impossible (e.g. a zero group size)."""

    pass


# ========== Competition Exceptions ==========


class CompetitionException(RoundCascadeException):
    """Base exception for competition-related errors."""

    pass


class CompetitionStateException(CompetitionException):
    """Raised when a competition is in an invalid state for the requested operation."""

    pass


class NoRoundsConfiguredException(CompetitionStateException):
    """Raised when calculating or editing a competition that has no rounds."""

    pass


class RoundNotFoundException(CompetitionException):
    """Raised when a requested round index does not exist."""

    pass


# ========== Validation Exceptions ==========


class ValidationException(RoundCascadeException):
    """Base exception for validation errors."""

    pass


class DateValidationException(ValidationException):
    """Raised when a date is not a valid ISO ``YYYY-MM-DD`` value."""

    pass


class NumberValidationException(ValidationException):
    """Raised when a numeric input is missing, non-numeric or not positive."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(RoundCascadeException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass


class MissingConfigurationException(ConfigurationException):
    """Raised when required configuration is missing."""

    pass
