import pytest

from specious.classification import TaxonSuggestion
from specious.config import GameConfig
from specious.errors import InvalidTransition, NoResultsFound
from specious.game import SpeciousGame
from specious.round import RoundState


def test_start_round_fetches_observation_then_classification(fake_provider):
    game = SpeciousGame(fake_provider)
    assert game.start_round()
    assert game.state is RoundState.AWAITING_GUESS
    assert fake_provider.calls == [("observation", None), ("classification", "7107")]
    assert game.machine.observation.id == "1001"


def test_full_scenario(fake_provider):
    game = SpeciousGame(fake_provider)
    game.start_round()
    game.select_rank("class")
    outcome = game.submit_guess("aves")
    assert (outcome.matched, outcome.points_awarded, outcome.score_after) == (True, 300, 300)

    assert game.next_round()
    assert game.machine.observation.id == "1002"
    outcome = game.submit_guess("pigeon")
    assert (outcome.matched, outcome.points_awarded, outcome.score_after) == (False, 0, 0)


def test_cannot_start_round_mid_guess(fake_provider):
    game = SpeciousGame(fake_provider)
    game.start_round()
    with pytest.raises(InvalidTransition):
        game.start_round()


def test_filter_is_passed_to_provider(fake_provider):
    game = SpeciousGame(fake_provider)
    aves = game.search_filters("Aves")[0]
    game.set_filter(aves)
    game.start_round()
    assert ("observation", "3") in fake_provider.calls


def test_no_results_is_retryable(fake_provider, observation):
    game = SpeciousGame(fake_provider)
    game.start_round()
    game.select_rank("kingdom")
    game.submit_guess("Animalia")

    fake_provider.observations.clear()
    with pytest.raises(NoResultsFound):
        game.next_round()
    assert game.score == 100
    assert game.state is RoundState.AWAITING_CLASSIFICATION

    fake_provider.observations.append(observation)
    assert game.start_round()
    assert game.state is RoundState.AWAITING_GUESS
    assert game.score == 100


def test_type_guess_fetches_suggestions(fake_provider):
    game = SpeciousGame(fake_provider)
    game.start_round()
    suggestions = game.type_guess("Aix")
    assert [s.name for s in suggestions] == ["Aix", "Aix sponsa"]
    assert game.machine.guess_text == "Aix"

    assert game.type_guess("  ") == []
    assert game.machine.suggestions == []


def test_config_policy_reaches_tracker(fake_provider):
    game = SpeciousGame(fake_provider, GameConfig(reset_on_miss=False, default_rank="genus"))
    game.start_round()
    assert game.machine.selected_rank == "genus"
    game.select_rank("order")
    game.submit_guess("Anseriformes")
    game.next_round()
    assert game.submit_guess("Anas").score_after == 400


def test_clear_filter(fake_provider):
    game = SpeciousGame(fake_provider)
    game.set_filter(TaxonSuggestion("3", "Aves", "class"))
    game.set_filter(None)
    game.start_round()
    assert fake_provider.calls[0] == ("observation", None)
