import pytest

from specious.evaluation import evaluate_guess


def test_case_and_whitespace_invariance():
    verdict = evaluate_guess("  Aves ", "aves")
    assert verdict.matched
    assert verdict.normalized_guess == "aves"


@pytest.mark.parametrize("guess", ["aves", "", "  ", "anything"])
def test_no_data_never_matches(guess):
    assert not evaluate_guess(guess, None).matched


def test_exact_match_only():
    assert not evaluate_guess("Ave", "aves").matched
    assert not evaluate_guess("Aix", "aix sponsa").matched
    assert not evaluate_guess("wood duck", "aix sponsa").matched


def test_resolved_name_is_normalized_too():
    assert evaluate_guess("aix sponsa", " Aix Sponsa ").matched


def test_inner_whitespace_is_significant():
    assert not evaluate_guess("aix  sponsa", "aix sponsa").matched
