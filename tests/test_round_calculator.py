from datetime import date

import pytest

from roundcascade.calculators import RoundCalculator, RoundOptions
from roundcascade.exceptions import (
    InvalidConfigurationException,
    RoundNotFoundException,
)
from roundcascade.models.competition import CompetitionConfig


def _config(**overrides):
    data = {
        "startingCompetitors": 63000,
        "targetFinalists": 100,
        "startDate": "2025-11-04",
        "rounds": [
            {"numberOfGroups": 2500, "gateSize": 4},
            {"peoplePerGroup": 20, "gateSize": 2},
            {"peoplePerGroup": 20, "gateSize": 2},
            {"peoplePerGroup": 100, "gateSize": 20},
        ],
    }
    data.update(overrides)
    return data


def test_calculate_all_rounds_cascades_populations():
    rounds = RoundCalculator.calculate_all_rounds(_config())

    assert [r.total_competitors for r in rounds] == [63000, 10000, 1000, 100]
    assert [r.number_of_groups for r in rounds] == [2500, 500, 50, 1]
    assert rounds[0].people_per_group == pytest.approx(25.2)
    assert [r.people_per_group for r in rounds[1:]] == [20, 20, 100]
    assert rounds[-1].get_advancing_competitors() == 20


def test_calculate_all_rounds_accepts_config_objects():
    config = CompetitionConfig.from_dict(_config())
    rounds = RoundCalculator.calculate_all_rounds(config)

    assert [r.name for r in rounds] == ["Round 1", "Round 2", "Round 3", "Round 4"]


def test_rounds_are_scheduled_back_to_back():
    rounds = RoundCalculator.calculate_all_rounds(_config())

    assert rounds[0].start_date == date(2025, 11, 4)
    assert rounds[0].end_date == date(2025, 11, 7)
    assert rounds[1].start_date == date(2025, 11, 8)
    assert rounds[1].end_date == date(2025, 11, 11)
    assert rounds[3].end_date == date(2025, 11, 19)


def test_rounds_without_start_date_are_unscheduled():
    rounds = RoundCalculator.calculate_all_rounds(_config(startDate=None))

    assert all(r.start_date is None and r.end_date is None for r in rounds)


def test_manual_group_count_after_first_round_is_kept():
    config = _config()
    config["rounds"][-1] = {"numberOfGroups": 20, "gateSize": 1}
    rounds = RoundCalculator.calculate_all_rounds(config)

    assert rounds[-1].number_of_groups == 20
    assert rounds[-1].people_per_group == 5


def test_calculate_round1_with_group_size():
    round_ = RoundCalculator.calculate_round1(
        1000, None, 2, RoundOptions(people_per_group=25, duration=3)
    )

    assert round_.name == "Round 1"
    assert round_.number_of_groups == 40
    assert round_.duration == 3


def test_calculate_next_round_uses_previous_advancing():
    first = RoundCalculator.calculate_round1(
        63000, 2500, 4, RoundOptions(start_date=date(2025, 11, 4))
    )
    second = RoundCalculator.calculate_next_round(
        first, 20, 2, RoundOptions(round_number=2)
    )

    assert second.name == "Round 2"
    assert second.total_competitors == 10000
    assert second.start_date == date(2025, 11, 8)


def test_recalculate_cascades_from_changed_round():
    rounds = RoundCalculator.calculate_all_rounds(_config())
    rounds[0].configure(number_of_groups=1250)

    updated = RoundCalculator.recalculate_from_index(rounds, 0)

    assert [r.total_competitors for r in updated] == [63000, 5000, 500, 50]
    assert [r.number_of_groups for r in updated] == [1250, 250, 25, 1]
    assert updated[0].people_per_group == pytest.approx(50.4)


def test_recalculate_leaves_earlier_rounds_untouched():
    rounds = RoundCalculator.calculate_all_rounds(_config())
    rounds[1].configure(people_per_group=40)

    updated = RoundCalculator.recalculate_from_index(rounds, 1)

    assert updated[0].number_of_groups == 2500
    assert updated[1].number_of_groups == 250
    assert [r.total_competitors for r in updated[2:]] == [500, 50]


def test_recalculate_rejects_bad_index():
    rounds = RoundCalculator.calculate_all_rounds(_config())
    with pytest.raises(RoundNotFoundException):
        RoundCalculator.recalculate_from_index(rounds, 4)
    with pytest.raises(RoundNotFoundException):
        RoundCalculator.recalculate_from_index(rounds, -1)


def test_calculate_dates_from_start_only_moves_dates():
    rounds = RoundCalculator.calculate_all_rounds(_config())
    updated = RoundCalculator.calculate_dates_from_start(rounds, "2026-01-01")

    assert updated[0].start_date == date(2026, 1, 1)
    assert updated[0].end_date == date(2026, 1, 4)
    assert updated[3].start_date == date(2026, 1, 13)
    assert [r.total_competitors for r in updated] == [63000, 10000, 1000, 100]


def test_calculate_dates_from_start_requires_date():
    rounds = RoundCalculator.calculate_all_rounds(_config())
    with pytest.raises(InvalidConfigurationException):
        RoundCalculator.calculate_dates_from_start(rounds, None)


def test_recalculate_picks_up_direct_group_size_edit():
    rounds = RoundCalculator.calculate_all_rounds(_config())
    rounds[1].people_per_group = 10
    rounds[1].number_of_groups = None

    updated = RoundCalculator.recalculate_from_index(rounds, 1)

    assert updated[1].number_of_groups == 1000
    assert updated[1].people_per_group == 10
    assert [r.total_competitors for r in updated[2:]] == [2000, 200]
    assert updated[3].number_of_groups == 2


def test_recalculate_picks_up_edited_group_count_on_resolved_round():
    rounds = RoundCalculator.calculate_all_rounds(_config())
    rounds[0].number_of_groups = 1250

    updated = RoundCalculator.recalculate_from_index(rounds, 0)

    assert updated[0].people_per_group == pytest.approx(50.4)
    assert [r.total_competitors for r in updated] == [63000, 5000, 500, 50]


def test_recalculate_unedited_round_keeps_its_result():
    rounds = RoundCalculator.calculate_all_rounds(_config())

    updated = RoundCalculator.recalculate_from_index(rounds, 1)

    assert [r.number_of_groups for r in updated] == [2500, 500, 50, 1]
