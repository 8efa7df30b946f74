from specious.classification import TaxonSuggestion
from specious.round import GuessOutcome
from specious.ui import (
    NO_DATA,
    display_outcome,
    display_rank_menu,
    format_answer,
    format_rank,
    index_to_label,
    label_to_index,
    pick_from_list,
)


def test_format_answer_placeholder():
    assert format_answer(None) == NO_DATA == "(no data)"
    assert format_answer("aves") == "aves"


def test_format_rank():
    assert format_rank("class") == "Class"
    assert format_rank("") == "Unknown"


def test_labels_round_trip():
    assert index_to_label(0) == "a"
    assert index_to_label(26) == ""
    assert label_to_index(" C ") == 2
    assert label_to_index("ab") == -1


def test_pick_from_list():
    items = [TaxonSuggestion("3", "Aves", "class"), TaxonSuggestion("40151", "Mammalia", "class")]
    assert pick_from_list(items, "b").name == "Mammalia"
    assert pick_from_list(items, "c") is None
    assert pick_from_list(items, "") is None


def test_display_wrong_outcome(capsys):
    display_outcome(GuessOutcome(
        correct_answer=None,
        matched=False,
        rank_guessed="family",
        points_awarded=0,
        score_after=0,
        observation_link="https://www.inaturalist.org/observations/1001",
        score_before=300,
    ))
    out = capsys.readouterr().out
    assert "Correct Family: (no data)" in out
    assert "Wrong guess. You scored 300 points in total." in out
    assert "Score reset to 0." in out
    assert "observations/1001" in out


def test_wrong_outcome_without_reset(capsys):
    display_outcome(GuessOutcome(
        correct_answer="aves",
        matched=False,
        rank_guessed="class",
        points_awarded=0,
        score_after=100,
        score_before=100,
    ))
    out = capsys.readouterr().out
    assert "You scored 100 points in total." in out
    assert "Score reset" not in out


def test_display_correct_outcome(capsys):
    display_outcome(GuessOutcome("aves", True, "class", 300, 300))
    assert "Correct! (+300 points)" in capsys.readouterr().out


def test_rank_menu_marks_selection(capsys):
    display_rank_menu("order")
    lines = capsys.readouterr().out.splitlines()
    selected = [line for line in lines if line.strip().startswith(">")]
    assert len(selected) == 1
    assert "Order" in selected[0]
    assert "400 pts" in selected[0]
