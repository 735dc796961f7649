from datetime import date

import pytest

from roundcascade.controllers import (
    CompetitionFormController,
    FormSettings,
    RoundInput,
)
from roundcascade.exceptions import (
    DateValidationException,
    InvalidConfigurationException,
    NumberValidationException,
)
from roundcascade.presets import PRESETS, load_preset, next_fourth


def test_default_form_rounds():
    settings = FormSettings()

    assert [r.to_dict() for r in settings.rounds] == [
        {"gate": 4, "people": None, "groups": None},
        {"gate": 2, "people": 20, "groups": None},
        {"gate": 2, "people": 20, "groups": None},
        {"gate": 20, "people": None, "groups": 1},
    ]


def test_build_config_names_and_plans_rounds():
    controller = CompetitionFormController(FormSettings(starting_competitors=45000))
    config = controller.build_config()

    assert [s.name for s in config.rounds] == [
        "Round 1",
        "Quarterfinal Round",
        "Semifinal Round",
        "Final Round",
    ]
    assert [s.number_of_groups for s in config.rounds] == [2500, 500, 50, 1]
    assert config.rounds[-1].people_per_group == 100
    assert config.rounds[0].people_per_group is None


def test_calculate_default_form():
    controller = CompetitionFormController(FormSettings(starting_competitors=45000))
    competition = controller.calculate()

    assert competition.rounds[0].people_per_group == 18
    assert competition.get_final_competitor_count() == 100
    assert controller.report().valid


def test_final_group_size_follows_target():
    settings = FormSettings(starting_competitors=45000, target_finalists=60)
    config = CompetitionFormController(settings).build_config()

    assert config.rounds[-1].people_per_group == 60


def test_set_round_count_resets_inputs():
    controller = CompetitionFormController()
    controller.set_round_count(2)

    assert controller.settings.number_of_rounds == 2
    assert controller.settings.rounds == [
        RoundInput(gate=4),
        RoundInput(gate=20, groups=1),
    ]
    with pytest.raises(InvalidConfigurationException):
        controller.set_round_count(0)


def test_settings_from_form_strings():
    settings = FormSettings.from_dict(
        {
            "startingCompetitors": "63000",
            "targetFinalists": "100",
            "numberOfRounds": "2",
            "roundDuration": "3",
            "startDate": "2025-11-04",
            "rounds": [
                {"gate": "4", "people": "", "groups": "2500"},
                {"gate": "20", "people": "100", "groups": "1"},
            ],
        }
    )

    assert settings.starting_competitors == 63000
    assert settings.round_duration == 3
    assert settings.start_date == date(2025, 11, 4)
    assert settings.rounds[0] == RoundInput(gate=4, groups=2500)


def test_settings_round_trip():
    settings = FormSettings(starting_competitors=1000, start_date="2025-11-04")

    assert FormSettings.from_dict(settings.to_dict()) == settings


def test_settings_from_dict_rejects_bad_values():
    with pytest.raises(NumberValidationException):
        FormSettings.from_dict({"startingCompetitors": "lots"})
    with pytest.raises(NumberValidationException):
        FormSettings.from_dict({"rounds": [{"gate": "2.5"}], "numberOfRounds": 1})
    with pytest.raises(DateValidationException):
        FormSettings.from_dict({"startDate": "04/11/2025"})


def test_settings_from_dict_blank_fields_use_defaults():
    settings = FormSettings.from_dict(
        {"startingCompetitors": "  ", "roundDuration": "", "startDate": " "}
    )

    assert settings.starting_competitors == FormSettings().starting_competitors
    assert settings.round_duration == FormSettings().round_duration
    assert settings.start_date is None


def test_settings_with_mismatched_rounds_use_defaults():
    settings = FormSettings.from_dict({"numberOfRounds": 3, "rounds": [{"gate": 4}]})

    assert len(settings.rounds) == 3
    assert settings.rounds[1] == RoundInput(gate=2, people=20)


@pytest.mark.parametrize(
    "today, expected",
    [
        (date(2025, 10, 3), date(2025, 10, 4)),
        (date(2025, 10, 4), date(2025, 11, 4)),
        (date(2025, 12, 20), date(2026, 1, 4)),
    ],
)
def test_next_fourth(today, expected):
    assert next_fourth(today) == expected


@pytest.mark.parametrize("preset_number", sorted(PRESETS))
def test_presets_reach_target(preset_number):
    controller = CompetitionFormController()
    competition = controller.apply_preset(preset_number, today=date(2025, 10, 20))

    assert competition.starting_competitors == 52000
    assert competition.start_date == date(2025, 11, 4)
    assert len(competition.rounds) == PRESETS[preset_number].number_of_rounds
    assert competition.get_final_competitor_count() == 100
    assert competition.rounds[-1].number_of_groups == 1
    assert controller.report().errors == []


def test_preset_schedule():
    competition = CompetitionFormController().apply_preset(1, today=date(2025, 10, 20))

    assert competition.rounds[0].people_per_group == pytest.approx(20.8)
    assert competition.rounds[-1].end_date == date(2025, 11, 19)


def test_unknown_preset_falls_back_to_first():
    settings = load_preset(9, today=date(2025, 10, 20))

    assert settings.number_of_rounds == 4
    assert settings.rounds[0].groups == 2500


def test_loaded_preset_is_a_copy():
    settings = load_preset(1, today=date(2025, 10, 20))
    settings.rounds[0].groups = 10

    assert PRESETS[1].rounds[0].groups == 2500
