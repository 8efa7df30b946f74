"""Terminal UI components for Specious.

Rendering helpers for the rank menu, suggestion lists and round results.
The engine reports missing rank data as None; the placeholder shown to the
player lives here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from specious.ranks import RANK_CATALOG, RankCatalog

if TYPE_CHECKING:
    from specious.classification import Observation, TaxonSuggestion
    from specious.round import GuessOutcome

NO_DATA = "(no data)"
WIDTH = 80


def clear_screen() -> None:
    """Clear the terminal screen."""
    print("\033[2J\033[H", end="")


def index_to_label(index: int) -> str:
    """Convert a numeric index to a letter label (a, b, ... z)."""
    if 0 <= index < 26:
        return chr(ord('a') + index)
    return ""


def label_to_index(label: str) -> int:
    """Convert a letter label back to a numeric index."""
    label = label.lower().strip()
    if len(label) == 1 and 'a' <= label <= 'z':
        return ord(label) - ord('a')
    return -1


def format_rank(rank: str) -> str:
    """Format a rank name for display."""
    return rank.capitalize() if rank else "Unknown"


def format_answer(answer: str | None) -> str:
    """Format a correct answer, using a placeholder when there is no data."""
    return answer if answer is not None else NO_DATA


def display_header(score: int, filter_name: str | None = None) -> None:
    """Display the title bar with the running score."""
    print("=" * WIDTH)
    print("  SPECIOUS - Name that organism!")
    print("=" * WIDTH)
    scope = filter_name or "all life"
    print(f"\n  Score: {score}   |   Observations from: {scope}")


def display_observation(observation: Observation | None) -> None:
    """Display where to view the observation photo."""
    print("\n" + "-" * WIDTH)
    if observation is None:
        print("  (no observation loaded)")
    else:
        print(f"  Photo: {observation.photo_url or '(no photo)'}")
    print("-" * WIDTH)


def display_rank_menu(
    selected_rank: str,
    catalog: RankCatalog = RANK_CATALOG,
) -> None:
    """Display the ranks with their point values, marking the selected one."""
    print("\n  Guess at rank:")
    for level in catalog:
        marker = ">" if level.key == selected_rank else " "
        print(f"  {marker} {level.name:<10} {level.points:>5} pts")


def display_suggestions(suggestions: list[TaxonSuggestion], header: str = "Suggestions:") -> None:
    """Display a lettered list of autocomplete candidates."""
    if not suggestions:
        print("\n  (No matches)")
        return
    print(f"\n  {header}")
    for i, suggestion in enumerate(suggestions[:26]):
        rank_str = f"[{suggestion.rank}]" if suggestion.rank else ""
        print(f"    ({index_to_label(i)}) {suggestion.name:<40} {rank_str}")


def display_outcome(outcome: GuessOutcome) -> None:
    """Display the result box for a resolved round."""
    print("\n" + "-" * WIDTH)
    print(f"  Correct {format_rank(outcome.rank_guessed)}: {format_answer(outcome.correct_answer)}")
    if outcome.matched:
        print(f"  Correct! (+{outcome.points_awarded} points)")
    else:
        print(f"  Wrong guess. You scored {outcome.score_before} points in total.")
        if outcome.score_after != outcome.score_before:
            print(f"  Score reset to {outcome.score_after}.")
    if outcome.observation_link:
        print(f"  View this observation on iNaturalist: {outcome.observation_link}")
    print("-" * WIDTH)


def display_command_bar(
    commands: list[tuple[str, str]],
    width: int = WIDTH,
) -> None:
    """Display a command bar at the bottom of the screen.

    Args:
        commands: List of (key, description) tuples.
        width: Total width of the bar.
    """
    print("-" * width)
    cmd_str = " | ".join(f"[{key}] {desc}" for key, desc in commands)
    print(f"  {cmd_str}")
    print("=" * width)


def pick_from_list(items: list, choice: str):
    """Return the item whose letter label is ``choice``, or None."""
    idx = label_to_index(choice)
    if 0 <= idx < len(items):
        return items[idx]
    return None
