import pytest

from roundcascade.models.competition import Competition, CompetitionConfig
from roundcascade.validation import CompetitionValidator


def _calculated(starting, rounds, target=100):
    competition = Competition(
        name="Validator Cup",
        starting_competitors=starting,
        target_finalists=target,
        start_date="2025-11-04",
        rounds=rounds,
    )
    competition.calculate_all_rounds()
    return competition


def _standard():
    return _calculated(
        63000,
        [
            {"numberOfGroups": 2500, "gateSize": 4},
            {"peoplePerGroup": 20, "gateSize": 2},
            {"peoplePerGroup": 20, "gateSize": 2},
            {"peoplePerGroup": 100, "gateSize": 20},
        ],
    )


def test_standard_competition_report_is_clean():
    report = CompetitionValidator.generate_report(_standard())

    assert report.valid
    assert report.errors == []
    assert report.warnings == []
    assert report.target_check.met
    assert report.target_check.percent_diff == 0
    assert report.summary["actualFinalists"] == 100


def test_report_to_dict_uses_wire_keys():
    data = CompetitionValidator.generate_report(_standard()).to_dict()

    assert data["valid"] is True
    assert data["targetCheck"]["percentDiff"] == 0
    assert data["summary"]["startingCompetitors"] == 63000


def test_validate_config_reports_missing_basics():
    result = CompetitionValidator.validate_config({"startingCompetitors": 0, "rounds": []})

    assert not result.valid
    assert "startingCompetitors must be a positive number" in result.errors
    assert "At least one round must be configured" in result.errors


def test_validate_config_first_round_needs_sizing():
    config = CompetitionConfig(
        starting_competitors=1000,
        rounds=[{"gateSize": 2}, {"gateSize": 2}, {"gateSize": 0, "peoplePerGroup": 10}],
    )
    result = CompetitionValidator.validate_config(config)

    assert result.errors == [
        "Round 1: must specify either numberOfGroups or peoplePerGroup",
        "Round 3: gateSize must be positive",
    ]
    assert result.warnings == [
        "Round 2: neither peoplePerGroup nor numberOfGroups specified, will be calculated"
    ]


def test_validate_config_rejects_non_positive_group_count():
    result = CompetitionValidator.validate_config(
        {"startingCompetitors": 1000, "rounds": [{"gateSize": 2, "numberOfGroups": 0}]}
    )

    assert result.errors == ["Round 1: numberOfGroups must be positive"]


@pytest.mark.parametrize(
    "target, met, percent",
    [
        (100, True, 0.0),
        (95, True, pytest.approx(100 * 5 / 95)),
        (200, False, 50.0),
    ],
)
def test_check_target_finalists(target, met, percent):
    competition = _standard()
    competition.target_finalists = target
    check = CompetitionValidator.check_target_finalists(competition)

    assert check.met is met
    assert check.actual == 100
    assert check.percent_diff == percent


def test_check_target_without_target():
    competition = _standard()
    competition.target_finalists = None
    check = CompetitionValidator.check_target_finalists(competition)

    assert check.met
    assert check.message == "No target finalists specified"
    assert check.percent_diff is None


def test_round_consistency_detects_drift():
    competition = _standard()
    competition.rounds[1].total_competitors = 9000

    result = CompetitionValidator.validate_round_consistency(competition.rounds)

    assert len(result.errors) == 2
    assert result.errors[0].startswith("Round 1 -> 2: Advancing count mismatch")
    assert result.errors[1].startswith("Round 2: Inconsistent calculation")


def test_collapsed_cascade_is_impossible():
    competition = _calculated(
        1000,
        [
            {"numberOfGroups": 50, "gateSize": 0},
            {"peoplePerGroup": 20, "gateSize": 2},
        ],
    )
    result = CompetitionValidator.check_common_issues(competition)

    assert result.errors[0].startswith(
        "Configuration is impossible: Round 2 has 0 competitors."
    )
    assert result.errors[1].startswith(
        "Configuration is impossible: Final round has 0 competitors"
    )
    assert "Try using larger gate sizes or fewer rounds." in result.suggestions


def test_small_groups_and_low_finalists_warn():
    competition = _calculated(
        100,
        [
            {"numberOfGroups": 50, "gateSize": 1},
            {"peoplePerGroup": 50, "gateSize": 10},
        ],
        target=200,
    )
    result = CompetitionValidator.check_common_issues(competition)

    assert result.valid
    assert "Round 1: Very small group size (2.0)." in result.warnings
    assert any("less than half the target" in w for w in result.warnings)
    assert "Round 1: Consider larger groups." in result.suggestions


def test_many_finalists_warn():
    competition = _calculated(
        63000,
        [
            {"numberOfGroups": 2500, "gateSize": 4},
            {"peoplePerGroup": 20, "gateSize": 2},
            {"peoplePerGroup": 100, "gateSize": 20},
        ],
    )
    result = CompetitionValidator.check_common_issues(competition)

    assert any("more than double the target" in w for w in result.warnings)
    assert "Final round must have exactly 1 group, but has 10." in " ".join(result.warnings)


def test_gate_larger_than_group_is_an_error():
    competition = _calculated(
        100,
        [
            {"numberOfGroups": 50, "gateSize": 4},
            {"peoplePerGroup": 200, "gateSize": 20},
        ],
    )
    report = CompetitionValidator.generate_report(competition)

    assert not report.valid
    assert any(
        e.startswith("Round 1: gateSize (4) exceeds peoplePerGroup (2.0)")
        for e in report.errors
    )


def test_large_groups_warn_except_in_final():
    competition = _calculated(
        10000,
        [
            {"numberOfGroups": 50, "gateSize": 4},
            {"peoplePerGroup": 200, "gateSize": 20},
        ],
        target=200,
    )
    result = CompetitionValidator.check_common_issues(competition)

    assert "Round 1: Very large group size (200.0)." in result.warnings
    assert not any(w.startswith("Round 2: Very large") for w in result.warnings)


def test_fractional_group_count_and_advancing_warn():
    competition = _standard()
    competition.rounds[0].number_of_groups = 9.3

    warnings = CompetitionValidator.check_common_issues(competition).warnings

    assert "Round 1: Number of groups must be a whole number, got 9.30" in warnings
    assert "Round 1: Advancing competitors must be a whole number, got 37.20" in warnings


def test_fractional_group_size_warns_only_after_first_round():
    competition = _standard()
    competition.rounds[1].people_per_group = 6.5

    warnings = CompetitionValidator.check_common_issues(competition).warnings

    assert (
        "Round 2: peoplePerGroup is fractional (6.50). "
        "Only Round 1 should have fractional group sizes."
    ) in warnings
    assert not any(w.startswith("Round 1: peoplePerGroup") for w in warnings)


def test_empty_first_round_is_not_a_collapse():
    competition = _calculated(0, [{"numberOfGroups": 5, "gateSize": 2}])

    result = CompetitionValidator.check_common_issues(competition)

    assert competition.rounds[0].total_competitors == 0
    assert not any("Round 1 has 0 competitors" in e for e in result.errors)
    assert result.errors == [
        "Configuration is impossible: Final round has 0 competitors (target: 100). "
        "The configuration eliminates too many competitors too quickly."
    ]
