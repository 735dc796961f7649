import logging
from datetime import date

import pytest

from roundcascade.exceptions import (
    InvalidRoundValueException,
    MissingRoundValueException,
)
from roundcascade.models.round import (
    BothKnown,
    GroupsKnown,
    Round,
    SizeKnown,
    Unresolved,
    sizing_from_values,
)


def _round(**kwargs):
    kwargs.setdefault("name", "Round 1")
    kwargs.setdefault("gate_size", 2)
    return Round(**kwargs)


def test_groups_known_derives_fractional_group_size():
    round_ = _round(total_competitors=63000, number_of_groups=2500, gate_size=4)
    round_.derive_missing_value()

    assert round_.number_of_groups == 2500
    assert round_.people_per_group == pytest.approx(25.2)
    assert round_.get_advancing_competitors() == 10000


def test_size_known_derives_group_count():
    round_ = _round(total_competitors=10000, people_per_group=20)
    round_.derive_missing_value()

    assert round_.number_of_groups == 500
    assert round_.people_per_group == 20
    assert isinstance(round_.people_per_group, int)
    assert round_.get_advancing_competitors() == 1000


def test_group_count_rounds_half_up():
    round_ = _round(total_competitors=25, people_per_group=10)
    round_.derive_missing_value()

    assert round_.number_of_groups == 3
    assert round_.people_per_group == pytest.approx(25 / 3)


def test_small_population_keeps_one_group():
    round_ = _round(total_competitors=5, people_per_group=50)
    round_.derive_missing_value()

    assert round_.number_of_groups == 1
    assert round_.people_per_group == 5


def test_zero_population_zeroes_grouping():
    round_ = _round(total_competitors=0, number_of_groups=5)
    round_.derive_missing_value()

    assert round_.number_of_groups == 0
    assert round_.people_per_group == 0
    assert round_.get_advancing_competitors() == 0


def test_group_count_clamped_to_population(caplog):
    round_ = _round(total_competitors=10, number_of_groups=20)
    with caplog.at_level(logging.WARNING):
        round_.derive_missing_value()

    assert round_.number_of_groups == 10
    assert round_.people_per_group == 1
    assert "using 10" in caplog.text


def test_both_known_mismatch_is_only_logged(caplog):
    round_ = _round(total_competitors=100, number_of_groups=3, people_per_group=30)
    with caplog.at_level(logging.WARNING):
        round_.derive_missing_value()

    assert round_.number_of_groups == 3
    assert round_.people_per_group == 30
    assert "totalCompetitors is 100" in caplog.text


def test_unresolved_round_is_one_group():
    round_ = _round(total_competitors=40)
    round_.derive_missing_value()

    assert round_.number_of_groups == 1
    assert round_.people_per_group == 40


def test_derive_requires_population():
    with pytest.raises(MissingRoundValueException):
        _round(number_of_groups=4).derive_missing_value()


def test_non_positive_group_size_is_rejected():
    with pytest.raises(InvalidRoundValueException):
        _round(total_competitors=100, people_per_group=0).derive_missing_value()


def test_advancing_requires_groups_and_gate():
    with pytest.raises(MissingRoundValueException):
        _round(total_competitors=100).get_advancing_competitors()


def test_advancing_is_whole_for_float_inputs():
    round_ = _round(number_of_groups=2500.0, gate_size=4.0)
    advancing = round_.get_advancing_competitors()

    assert advancing == 10000
    assert isinstance(advancing, int)


def test_end_date_counts_start_day():
    round_ = _round(start_date="2025-11-04", duration=4)
    round_.calculate_end_date()

    assert round_.end_date == date(2025, 11, 7)


def test_end_date_needs_start_date():
    round_ = _round(duration=4)
    round_.calculate_end_date()

    assert round_.end_date is None


@pytest.mark.parametrize(
    "groups, people, expected",
    [
        (None, None, Unresolved()),
        (4, None, GroupsKnown(4)),
        (None, 20, SizeKnown(20)),
        (4, 20, BothKnown(4, 20)),
    ],
)
def test_requested_sizing_inferred_from_values(groups, people, expected):
    assert sizing_from_values(groups, people) == expected
    assert _round(number_of_groups=groups, people_per_group=people).requested == expected


def test_reset_to_requested_drops_derived_value():
    round_ = _round(total_competitors=10000, people_per_group=20)
    round_.derive_missing_value()
    round_.total_competitors = 5000
    round_.reset_to_requested()
    round_.derive_missing_value()

    assert round_.number_of_groups == 250
    assert round_.requested == SizeKnown(20)


def test_configure_replaces_requested_sizing():
    round_ = _round(total_competitors=1000, people_per_group=20)
    round_.derive_missing_value()
    round_.configure(number_of_groups=40)

    assert round_.requested == GroupsKnown(40)
    assert round_.people_per_group is None
    round_.derive_missing_value()
    assert round_.people_per_group == 25


def test_validate_reports_every_violation():
    round_ = Round(
        name="",
        gate_size=30,
        total_competitors=100,
        number_of_groups=4,
        people_per_group=20,
    )
    errors = round_.validate(allow_fractional_group_size=False)

    assert "Round must have a name" in errors
    assert any("exceeds peoplePerGroup" in e for e in errors)
    assert any("Inconsistent values" in e for e in errors)


def test_validate_fractional_group_size_only_when_allowed():
    round_ = _round(total_competitors=63000, number_of_groups=2500, gate_size=4)
    round_.derive_missing_value()

    assert round_.validate(allow_fractional_group_size=True) == []
    assert round_.validate(allow_fractional_group_size=False) == [
        "peoplePerGroup must be a whole number, got 25.2"
    ]


def test_to_dict_and_back():
    round_ = _round(
        total_competitors=10000,
        people_per_group=20,
        start_date="2025-11-08",
        duration=4,
    )
    round_.derive_missing_value()
    round_.calculate_end_date()

    data = round_.to_dict()
    assert data["startDate"] == "2025-11-08"
    assert data["endDate"] == "2025-11-11"
    assert data["advancing"] == 1000
    assert data["requested"] == {"numberOfGroups": None, "peoplePerGroup": 20}

    restored = Round.from_dict(data)
    assert restored == round_


def test_clone_is_independent():
    round_ = _round(total_competitors=100, number_of_groups=5)
    copy = round_.clone()
    copy.total_competitors = 50

    assert round_.total_competitors == 100
    assert copy.requested == round_.requested


def test_adopt_edited_sizing_follows_the_requested_knob():
    round_ = _round(total_competitors=10000, people_per_group=20)
    round_.derive_missing_value()

    round_.people_per_group = 40
    round_.adopt_edited_sizing()
    assert round_.requested == SizeKnown(40)

    round_.number_of_groups = None
    round_.people_per_group = None
    round_.adopt_edited_sizing()
    assert round_.requested == Unresolved()


def test_adopt_edited_sizing_keeps_request_of_unedited_round():
    round_ = _round(total_competitors=63000, number_of_groups=2500, gate_size=4)
    round_.derive_missing_value()
    round_.adopt_edited_sizing()

    assert round_.requested == GroupsKnown(2500)
