import pytest

from conftest import AUSTRALIA, BRAZIL, CANADA, EGYPT, FINLAND, FRANCE, GERMANY, JAPAN, SPAIN
from geodle.geo import Direction
from geodle.round import DailyRound, GuessFeedback, RoundStatus, compare_countries

WRONG_GUESSES = [GERMANY, SPAIN, FINLAND, BRAZIL, JAPAN, AUSTRALIA]


def test_compare_countries_example():
    feedback = compare_countries(GERMANY, FRANCE)

    assert isinstance(feedback, GuessFeedback)
    assert feedback.country == GERMANY
    assert feedback.distance == pytest.approx(738.6, abs=2)
    assert feedback.direction == Direction.SW
    assert feedback.region
    assert feedback.continent


def test_compare_countries_different_region():
    feedback = compare_countries(BRAZIL, FRANCE)

    assert feedback.direction == Direction.NE
    assert not feedback.region
    assert not feedback.continent


def test_compare_same_country():
    feedback = compare_countries(FRANCE, FRANCE)

    assert feedback.distance == 0
    assert feedback.direction == Direction.FOUND


def test_compare_close_country_is_found():
    nearby = FRANCE.model_copy(update={"name": "Nearby", "latlng": [46.7, 2.2]})

    feedback = compare_countries(nearby, FRANCE)

    assert feedback.distance < 50
    assert feedback.direction == Direction.FOUND


def test_compare_same_name_is_found_regardless_of_distance():
    moved = FRANCE.model_copy(update={"latlng": [-46.6, 2.2]})

    assert compare_countries(moved, FRANCE).direction == Direction.FOUND


def test_compare_missing_continents():
    nowhere = GERMANY.model_copy(update={"continents": []})

    assert not compare_countries(nowhere, FRANCE.model_copy(update={"continents": []})).continent


def test_new_round():
    daily_round = DailyRound(FRANCE)

    assert daily_round.guesses == []
    assert daily_round.max_guesses == 6
    assert daily_round.remaining == 6
    assert not daily_round.is_over
    assert not daily_round.won
    assert daily_round.status == RoundStatus.IN_PROGRESS


def test_win_short_circuits():
    daily_round = DailyRound(FRANCE)

    daily_round.submit_guess(GERMANY)
    feedback = daily_round.submit_guess(FRANCE)

    assert feedback.direction == Direction.FOUND
    assert daily_round.won
    assert daily_round.is_over
    assert daily_round.status == RoundStatus.WON
    assert daily_round.guess_count == 2

    assert daily_round.submit_guess(SPAIN) is None
    assert daily_round.guessed_names == ["Germany", "France"]


def test_win_on_last_guess():
    daily_round = DailyRound(FRANCE)
    for country in WRONG_GUESSES[:5]:
        daily_round.submit_guess(country)

    daily_round.submit_guess(FRANCE)

    assert daily_round.won
    assert daily_round.status == RoundStatus.WON


def test_budget_runs_out():
    daily_round = DailyRound(FRANCE)

    for i, country in enumerate(WRONG_GUESSES):
        assert not daily_round.is_over
        assert daily_round.submit_guess(country) is not None
        assert daily_round.remaining == 5 - i

    assert daily_round.is_over
    assert not daily_round.won
    assert daily_round.status == RoundStatus.LOST

    assert daily_round.submit_guess(EGYPT) is None
    assert daily_round.submit_guess(FRANCE) is None
    assert daily_round.guess_count == 6


def test_duplicate_guess_rejected():
    daily_round = DailyRound(FRANCE)

    assert daily_round.submit_guess(GERMANY) is not None
    assert daily_round.submit_guess(GERMANY) is None

    assert daily_round.guess_count == 1
    assert daily_round.remaining == 5


def test_no_target_rejects_guesses():
    daily_round = DailyRound(None)

    assert daily_round.submit_guess(GERMANY) is None
    assert daily_round.guesses == []


def test_custom_budget():
    daily_round = DailyRound(FRANCE, max_guesses=2)

    daily_round.submit_guess(GERMANY)
    daily_round.submit_guess(SPAIN)

    assert daily_round.is_over
    assert not daily_round.won


def test_guesses_kept_in_order():
    daily_round = DailyRound(FRANCE)
    for country in [JAPAN, CANADA, EGYPT]:
        daily_round.submit_guess(country)

    assert daily_round.guessed_names == ["Japan", "Canada", "Egypt"]


def test_restore_in_progress(pool):
    daily_round = DailyRound(FRANCE)

    daily_round.restore(pool, ["Germany", "Japan"], False, False)

    assert daily_round.guessed_names == ["Germany", "Japan"]
    assert daily_round.guesses[0].direction == Direction.SW
    assert not daily_round.is_over
    assert daily_round.submit_guess(SPAIN) is not None


def test_restore_drops_unknown_and_duplicate_names(pool):
    daily_round = DailyRound(FRANCE)

    daily_round.restore(pool, ["Germany", "Atlantis", "Vatican City", "Germany", "Spain"], False, False)

    assert daily_round.guessed_names == ["Germany", "Spain"]


def test_restore_won(pool):
    daily_round = DailyRound(FRANCE)

    daily_round.restore(pool, ["Germany", "France"], True, True)

    assert daily_round.won
    assert daily_round.is_over
    assert daily_round.submit_guess(SPAIN) is None


def test_restore_lost(pool):
    daily_round = DailyRound(FRANCE)

    daily_round.restore(pool, [c.name for c in WRONG_GUESSES], True, False)

    assert daily_round.status == RoundStatus.LOST
    assert daily_round.guess_count == 6


def test_restore_caps_at_budget(pool):
    daily_round = DailyRound(FRANCE)

    daily_round.restore(pool, [c.name for c in WRONG_GUESSES] + ["Egypt"], False, False)

    assert daily_round.guess_count == 6
    assert daily_round.is_over


def test_restore_keeps_saved_game_over(pool):
    daily_round = DailyRound(FRANCE)

    # A guess that no longer exists was dropped, but the round had ended
    daily_round.restore(pool, ["Germany"], True, False)

    assert daily_round.is_over
    assert not daily_round.won
