"""Specious - terminal identification quiz.

Usage:
    specious [--filter QUERY] [--keep-score-on-miss] [--verbose]

Controls (at the guess prompt):
    <text>      Type a guess (Enter submits)
    :rank R     Select the rank to guess at (e.g. ':rank class')
    :suggest    Show suggestions for the current guess text
    :filter Q   Search for a taxon to restrict observations to
    :skip       Give up on this observation (counts as a wrong guess)
    :quit       Quit
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace

from specious.config import GameConfig
from specious.errors import (
    EmptyGuess,
    NoResultsFound,
    ProviderError,
    UnknownRank,
)
from specious.game import SpeciousGame
from specious.inaturalist import INaturalistClient
from specious.round import RoundState
from specious.ui import (
    clear_screen,
    display_command_bar,
    display_header,
    display_observation,
    display_outcome,
    display_rank_menu,
    display_suggestions,
    format_rank,
    pick_from_list,
)

COMMANDS = [
    ("text", "guess"),
    (":rank R", "rank"),
    (":suggest", "suggest"),
    (":filter Q", "filter"),
    (":skip", "give up"),
    (":quit", "quit"),
]


def _input(prompt: str) -> str | None:
    try:
        return input(prompt)
    except (KeyboardInterrupt, EOFError):
        return None


def choose_filter(game: SpeciousGame, query: str) -> None:
    """Search for a filter taxon and let the player pick one."""
    try:
        results = game.search_filters(query)
    except ProviderError as e:
        print(f"\n  Could not search taxa: {e}")
        return

    display_suggestions(results, header=f"Taxa matching {query!r}:")
    if not results:
        return
    choice = _input("\n  Pick a filter (letter, Enter for none): ")
    if choice is None:
        return
    taxon = pick_from_list(results, choice)
    game.set_filter(taxon)
    if taxon is None:
        print("  Filter cleared: observations from all life.")


def load_round(game: SpeciousGame) -> bool:
    """Load a round, re-prompting while the provider finds nothing."""
    while True:
        try:
            if game.start_round():
                return True
        except NoResultsFound as e:
            print(f"\n  {e}")
            query = _input("  Filter by another taxon (Enter for all life): ")
            if query is None:
                return False
            if query.strip():
                choose_filter(game, query)
            else:
                game.set_filter(None)
        except ProviderError as e:
            print(f"\n  Error loading observation: {e}")
            again = _input("  Try again? (y/n): ")
            if again is None or again.strip().lower() != "y":
                return False


def play_round(game: SpeciousGame) -> bool:
    """Run the guess prompt for one round. Returns False when quitting."""
    while game.state is RoundState.AWAITING_GUESS:
        clear_screen()
        display_header(game.score, game.filter.name if game.filter else None)
        display_observation(game.machine.observation)
        display_rank_menu(game.machine.selected_rank)
        display_command_bar(COMMANDS)

        text = _input(f"\n  Guess {format_rank(game.machine.selected_rank)} name: ")
        if text is None:
            return False
        command, _, arg = text.strip().partition(" ")

        try:
            if command == ":quit":
                return False
            elif command == ":rank":
                game.select_rank(arg)
            elif command == ":suggest":
                current = arg or game.machine.guess_text
                suggestions = game.type_guess(current)
                display_suggestions(suggestions)
                choice = _input("\n  Use suggestion (letter, Enter to skip): ")
                picked = pick_from_list(suggestions, choice or "")
                if picked:
                    game.machine.set_guess_text(picked.name)
                    display_outcome(game.submit_guess())
            elif command == ":filter":
                choose_filter(game, arg)
            elif command == ":skip":
                # Skipping forfeits the round as a miss
                display_outcome(game.submit_guess(":skip"))
            else:
                display_outcome(game.submit_guess(text))
        except UnknownRank as e:
            print(f"\n  {e}. Select a valid rank.")
            _input("  Press Enter to continue...")
            continue
        except EmptyGuess:
            print("\n  Type a guess first.")
            _input("  Press Enter to continue...")
            continue
        except ProviderError as e:
            print(f"\n  {e}")
            _input("  Press Enter to continue...")
            continue

    return True


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Specious - name the organism in a nature observation photo",
    )
    parser.add_argument(
        "--filter",
        default="",
        help="Restrict observations to a taxon (e.g. Aves, Fungi)",
    )
    parser.add_argument(
        "--keep-score-on-miss",
        action="store_true",
        help="Keep the running score on a wrong guess instead of resetting it",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = GameConfig.from_env()
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2
    if args.keep_score_on_miss:
        config = replace(config, reset_on_miss=False)

    game = SpeciousGame(INaturalistClient(config), config)
    if args.filter:
        choose_filter(game, args.filter)

    while True:
        if not load_round(game):
            break
        if not play_round(game):
            break
        again = _input("\n  Next round? (y/n): ")
        if again is None or again.strip().lower() == "n":
            break

    print(f"\n  Thanks for playing Specious! Final score: {game.score}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
