"""Competition Validator - independent diagnosis of a round cascade.

The validator never trusts a competition's computed state: it re-derives
group products and advancing counts from the raw round fields, so drift
between the configuration and the calculated rounds is caught. Besides the
structural checks it produces heuristic warnings and suggestions.
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

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from roundcascade.constants import (
    HIGH_FINALIST_RATIO,
    LOW_FINALIST_RATIO,
    MAX_PRACTICAL_GROUP_SIZE,
    MIN_PRACTICAL_GROUP_SIZE,
    TARGET_TOLERANCE,
)
from roundcascade.models.competition import (
    Competition,
    CompetitionConfig,
    RoundSpec,
)
from roundcascade.models.round import Round
from roundcascade.type_hints import Number
from roundcascade.utils import setup_logger
from roundcascade.utils.numbers import approx_equal, is_whole_number

logger = setup_logger(__name__)


@dataclass
class CheckResult:
    """Errors, warnings and suggestions from one group of checks."""

    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def __bool__(self) -> bool:
        return self.valid

    def to_dict(self) -> Dict[str, Any]:
        return {
            "valid": self.valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "suggestions": list(self.suggestions),
        }


@dataclass
class TargetCheck:
    """How close the final round comes to the target finalist count.

    Attributes
    ----------
    met : bool
        True when the final count is within tolerance (or no target is set).
    message : str
        Human-readable verdict.
    actual, target, difference : number or None
        Final count, target and their absolute difference.
    percent_diff : float or None
        Difference as a percentage of the target.
    """

    met: bool
    message: str
    actual: Optional[Number] = None
    target: Optional[Number] = None
    difference: Optional[Number] = None
    percent_diff: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "met": self.met,
            "actual": self.actual,
            "target": self.target,
            "difference": self.difference,
            "percentDiff": self.percent_diff,
            "message": self.message,
        }


@dataclass
class ValidationReport:
    """Complete validation report for a competition."""

    errors: List[str]
    warnings: List[str]
    suggestions: List[str]
    target_check: TargetCheck
    summary: Dict[str, Any]

    @property
    def valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            "valid": self.valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "suggestions": list(self.suggestions),
            "targetCheck": self.target_check.to_dict(),
            "summary": dict(self.summary),
        }


class CompetitionValidator:
    """Read-only report generator for competitions and their configurations."""

    @classmethod
    def validate_config(
        cls, config: Union[CompetitionConfig, Dict[str, Any]]
    ) -> CheckResult:
        """Sanity-check a configuration before calculation.

        Rounds after the first that give neither a group count nor a group
        size only produce a warning, since they are derived automatically.

        Args:
            config: Competition configuration, or its dictionary form

        Returns:
            CheckResult with errors and warnings
        """
        if isinstance(config, dict):
            config = CompetitionConfig(
                starting_competitors=config.get("startingCompetitors"),
                rounds=[RoundSpec.from_dict(r) for r in config.get("rounds") or []],
            )

        result = CheckResult()

        if not config.starting_competitors or config.starting_competitors <= 0:
            result.errors.append("startingCompetitors must be a positive number")

        if not config.rounds:
            result.errors.append("At least one round must be configured")

        for index, spec in enumerate(config.rounds):
            round_number = index + 1

            if not spec.gate_size or spec.gate_size <= 0:
                result.errors.append(f"Round {round_number}: gateSize must be positive")

            has_groups = spec.number_of_groups is not None
            has_size = spec.people_per_group is not None
            if index == 0:
                if not has_groups and not has_size:
                    result.errors.append(
                        f"Round {round_number}: must specify either numberOfGroups or peoplePerGroup"
                    )
                if has_groups and spec.number_of_groups <= 0:
                    result.errors.append(
                        f"Round {round_number}: numberOfGroups must be positive"
                    )
            elif not has_groups and not has_size:
                result.warnings.append(
                    f"Round {round_number}: neither peoplePerGroup nor numberOfGroups "
                    f"specified, will be calculated"
                )

        return result

    @classmethod
    def check_target_finalists(
        cls, competition: Competition, tolerance: float = TARGET_TOLERANCE
    ) -> TargetCheck:
        """Compare the final competitor count with the target.

        Args:
            competition: The competition to check
            tolerance: Acceptable difference as a fraction of the target

        Returns:
            TargetCheck with the verdict and the percentage difference
        """
        actual = competition.get_final_competitor_count()
        target = competition.target_finalists

        if not target:
            return TargetCheck(met=True, message="No target finalists specified")

        difference = abs(actual - target)
        ratio = difference / target
        met = ratio <= tolerance
        verdict = "Target met" if met else "Target not met"
        return TargetCheck(
            met=met,
            actual=actual,
            target=target,
            difference=difference,
            percent_diff=ratio * 100,
            message=(
                f"{verdict}: {actual} finalists (target: {target}, diff: {ratio * 100:.2f}%)"
            ),
        )

    @classmethod
    def validate_round_consistency(cls, rounds: List[Round]) -> CheckResult:
        """Recompute each round's group product and every hand-over count.

        Args:
            rounds: Rounds in order

        Returns:
            CheckResult with one error per inconsistency
        """
        result = CheckResult()

        for index, round_ in enumerate(rounds):
            round_number = index + 1
            groups = round_.number_of_groups
            size = round_.people_per_group

            if round_.total_competitors and groups and size:
                expected = groups * size
                if not approx_equal(expected, round_.total_competitors):
                    result.errors.append(
                        f"Round {round_number}: Inconsistent calculation: {groups} x {size} = "
                        f"{expected}, but totalCompetitors is {round_.total_competitors}"
                    )

            if index == len(rounds) - 1:
                continue

            next_round = rounds[index + 1]
            if groups is None or round_.gate_size is None:
                result.errors.append(
                    f"Round {round_number}: advancing count unknown, round has not been calculated"
                )
                continue

            advancing = round_.get_advancing_competitors()
            if next_round.total_competitors is None or not approx_equal(
                next_round.total_competitors, advancing
            ):
                result.errors.append(
                    f"Round {round_number} -> {round_number + 1}: Advancing count mismatch. "
                    f"Round {round_number} advances {advancing}, but Round {round_number + 1} "
                    f"starts with {next_round.total_competitors}"
                )

        return result

    @classmethod
    def check_common_issues(cls, competition: Competition) -> CheckResult:
        """Heuristic diagnostics: collapsed populations, target drift, odd group sizes.

        Args:
            competition: A calculated competition

        Returns:
            CheckResult with errors, warnings and remediation suggestions
        """
        result = CheckResult()
        rounds = competition.rounds
        last_index = len(rounds) - 1

        # Zero entrants in the first round is the empty-competition case
        zero_index = next(
            (i for i, r in enumerate(rounds) if r.total_competitors == 0), None
        )
        if zero_index is not None and zero_index > 0:
            result.errors.append(
                f"Configuration is impossible: Round {zero_index + 1} has 0 competitors. "
                f"The cascade eliminated all competitors by Round {zero_index}."
            )
            result.suggestions.append("Try using larger gate sizes or fewer rounds.")

        target = competition.target_finalists
        if rounds and target and rounds[-1].total_competitors is not None:
            actual = rounds[-1].total_competitors
            if actual == 0:
                result.errors.append(
                    f"Configuration is impossible: Final round has 0 competitors "
                    f"(target: {target}). The configuration eliminates too many "
                    f"competitors too quickly."
                )
            elif actual < target * LOW_FINALIST_RATIO:
                result.warnings.append(
                    f"Final competitors ({actual}) is less than half the target ({target})."
                )
                result.suggestions.append(
                    "Consider increasing gate sizes to allow more competitors to advance."
                )
            elif actual > target * HIGH_FINALIST_RATIO:
                result.warnings.append(
                    f"Final competitors ({actual}) is more than double the target ({target})."
                )
                result.suggestions.append(
                    "Consider decreasing gate sizes or adding more rounds."
                )

        for index, round_ in enumerate(rounds):
            if not round_.total_competitors:
                continue
            cls._check_round_shape(result, index, round_, index == last_index)

        if rounds:
            final_round = rounds[-1]
            if final_round.number_of_groups != 1 and (final_round.total_competitors or 0) > 0:
                result.warnings.append(
                    f"Final round must have exactly 1 group, but has "
                    f"{final_round.number_of_groups}. All finalists must compete in a "
                    f"single final group."
                )

        return result

    @staticmethod
    def _check_round_shape(
        result: CheckResult, index: int, round_: Round, is_final: bool
    ) -> None:
        label = f"Round {index + 1}"
        groups = round_.number_of_groups
        size = round_.people_per_group
        gate = round_.gate_size

        if size:
            if size < MIN_PRACTICAL_GROUP_SIZE:
                result.warnings.append(f"{label}: Very small group size ({size:.1f}).")
                result.suggestions.append(f"{label}: Consider larger groups.")
            if size > MAX_PRACTICAL_GROUP_SIZE and not is_final:
                result.warnings.append(f"{label}: Very large group size ({size:.1f}).")
                result.suggestions.append(f"{label}: Consider smaller groups.")

        if groups and not is_whole_number(groups):
            result.warnings.append(
                f"{label}: Number of groups must be a whole number, got {groups:.2f}"
            )

        if groups and gate and not is_whole_number(groups * gate):
            result.warnings.append(
                f"{label}: Advancing competitors must be a whole number, got {groups * gate:.2f}"
            )

        if index > 0 and size and not is_whole_number(size):
            result.warnings.append(
                f"{label}: peoplePerGroup is fractional ({size:.2f}). "
                f"Only Round 1 should have fractional group sizes."
            )

        if gate is not None and size is not None and gate > size:
            result.errors.append(
                f"{label}: gateSize ({gate}) exceeds peoplePerGroup ({size:.1f}). "
                f"Cannot advance more people than are in each group."
            )

    @classmethod
    def generate_report(cls, competition: Competition) -> ValidationReport:
        """Run every check and merge the findings into one report.

        Args:
            competition: The competition to diagnose

        Returns:
            ValidationReport with all errors, warnings and suggestions, the
            target check and the competition summary
        """
        config_check = cls.validate_config(
            CompetitionConfig(
                starting_competitors=competition.starting_competitors,
                rounds=[
                    RoundSpec(
                        gate_size=r.gate_size,
                        number_of_groups=r.number_of_groups,
                        people_per_group=r.people_per_group,
                    )
                    for r in competition.rounds
                ],
            )
        )
        competition_check = competition.validate()
        consistency_check = cls.validate_round_consistency(competition.rounds)
        common_issues = cls.check_common_issues(competition)

        report = ValidationReport(
            errors=[
                *config_check.errors,
                *competition_check.errors,
                *consistency_check.errors,
                *common_issues.errors,
            ],
            warnings=[*config_check.warnings, *common_issues.warnings],
            suggestions=list(common_issues.suggestions),
            target_check=cls.check_target_finalists(competition),
            summary=competition.get_summary(),
        )

        logger.info(
            "Validated %s: %s errors, %s warnings",
            competition.name,
            len(report.errors),
            len(report.warnings),
        )
        return report
