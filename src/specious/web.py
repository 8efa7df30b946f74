"""Specious Web - JSON API for the identification quiz.

Run with:
    flask --app specious.web run --port 8080

Then visit http://localhost:8080/health
"""

from __future__ import annotations

import logging
import os
import uuid
from collections import OrderedDict
from typing import TYPE_CHECKING, Any, Callable

from flask import Flask, jsonify, request, session

from specious.classification import TaxonSuggestion
from specious.config import GameConfig
from specious.errors import (
    EmptyGuess,
    InvalidTransition,
    MissingClassification,
    NoResultsFound,
    ProviderError,
    SpeciousError,
    UnknownRank,
)
from specious.game import SpeciousGame
from specious.inaturalist import INaturalistClient
from specious.ranks import RANK_CATALOG
from specious.ui import format_answer

if TYPE_CHECKING:
    from specious.game import TaxonomyProvider
    from specious.round import GuessOutcome

logger = logging.getLogger(__name__)

# Engine errors are re-promptable and map to 400
ERROR_STATUS = {
    MissingClassification: 400,
    UnknownRank: 400,
    EmptyGuess: 400,
    InvalidTransition: 409,
    NoResultsFound: 404,
    ProviderError: 502,
}


def outcome_to_dict(outcome: GuessOutcome) -> dict[str, Any]:
    return {
        'correct_answer': outcome.correct_answer,
        'correct_answer_display': format_answer(outcome.correct_answer),
        'matched': outcome.matched,
        'rank_guessed': outcome.rank_guessed,
        'points_awarded': outcome.points_awarded,
        'score_after': outcome.score_after,
        'score_before': outcome.score_before,
        'guess': outcome.guess,
        'observation_link': outcome.observation_link,
    }


def game_to_dict(game: SpeciousGame) -> dict[str, Any]:
    """Serialize the state the presentation layer needs."""
    machine = game.machine
    observation = machine.observation
    record = machine.record
    return {
        'state': machine.state.value,
        'score': machine.score,
        'selected_rank': machine.selected_rank,
        'ranks': [
            {'name': level.name, 'key': level.key, 'points': level.points}
            for level in RANK_CATALOG
        ],
        'observation': {
            'id': observation.id,
            'photo_url': observation.photo_url,
        } if observation else None,
        # Ranks present in the lineage, for display
        'lineage_ranks': [entry.rank for entry in record.get_lineage()] if record else [],
        'filter': {'id': game.filter.id, 'name': game.filter.name} if game.filter else None,
        'outcome': outcome_to_dict(machine.outcome) if machine.outcome else None,
    }


def parse_filter(value: Any) -> TaxonSuggestion | None:
    """Build a filter taxon from request JSON (None or {} clears the filter).

    Raises:
        ValueError: If the value is not an object.
    """
    if not value:
        return None
    if not isinstance(value, dict):
        raise ValueError("filter must be an object with 'id' and 'name'")
    return TaxonSuggestion(
        id=str(value.get('id') or ''),
        name=str(value.get('name') or ''),
        rank=str(value.get('rank') or ''),
    )


def create_app(
    config: GameConfig | None = None,
    provider_factory: Callable[[GameConfig], TaxonomyProvider] | None = None,
    max_games: int = 1000,
) -> Flask:
    """Create the Flask application.

    Args:
        config: Game configuration. Read from the environment if omitted.
        provider_factory: Builds the taxonomy provider for each new game.
            Defaults to an iNaturalist client.
        max_games: Games kept in the server-side store. The least recently
            used game is evicted beyond this.
    """
    config = config or GameConfig.from_env()
    provider_factory = provider_factory or INaturalistClient
    if max_games < 1:
        raise ValueError("max_games must be at least 1")

    app = Flask(__name__)
    app.secret_key = os.environ.get('SPECIOUS_SECRET_KEY', 'specious-secret-key-change-in-production')
    app.config['SESSION_COOKIE_SAMESITE'] = 'Lax'

    # Server-side game store keyed by game ID (the cookie only carries the ID),
    # in least recently used order. In production, use Redis or similar.
    games: OrderedDict[str, SpeciousGame] = OrderedDict()
    app.extensions['specious_games'] = games

    # Filter searches from players without a game share one provider
    search_provider = provider_factory(config)

    def current_game(create: bool = False) -> SpeciousGame | None:
        game_id = session.get('game_id')
        if game_id and game_id in games:
            games.move_to_end(game_id)
            return games[game_id]
        if not create:
            return None

        game_id = str(uuid.uuid4())
        games[game_id] = SpeciousGame(provider_factory(config), config)
        session['game_id'] = game_id
        logger.info("Started game %s", game_id)

        while len(games) > max_games:
            evicted_id, _ = games.popitem(last=False)
            logger.info("Evicted game %s", evicted_id)
        return games[game_id]

    def no_game():
        return jsonify({'error': 'NoActiveGame', 'message': 'No active game'}), 400

    def bad_request(message: str):
        return jsonify({'error': 'BadRequest', 'message': message}), 400

    @app.errorhandler(SpeciousError)
    def handle_game_error(error: SpeciousError):
        status = ERROR_STATUS.get(type(error), 400)
        return jsonify({'error': type(error).__name__, 'message': str(error)}), status

    @app.route('/health')
    def health():
        """Health check endpoint."""
        return jsonify({
            'status': 'ok',
            'active_games': len(games),
            'reset_on_miss': config.reset_on_miss,
        })

    @app.route('/api/round', methods=['POST'])
    def start_round():
        """Start the first round or move on to the next one."""
        data = request.get_json(silent=True) or {}
        if 'filter' in data:
            try:
                taxon = parse_filter(data['filter'])
            except ValueError as e:
                return bad_request(str(e))

        game = current_game(create=True)
        if 'filter' in data:
            game.set_filter(taxon)

        loaded = game.start_round()
        payload = game_to_dict(game)
        payload['loaded'] = loaded
        return jsonify(payload)

    @app.route('/api/rank', methods=['POST'])
    def select_rank():
        """Select the rank to guess at."""
        game = current_game()
        if not game:
            return no_game()
        data = request.get_json(silent=True) or {}
        game.select_rank(str(data.get('rank') or ''))
        return jsonify(game_to_dict(game))

    @app.route('/api/guess', methods=['POST'])
    def make_guess():
        """Submit a guess at the selected rank."""
        game = current_game()
        if not game:
            return no_game()
        data = request.get_json(silent=True) or {}
        if 'rank' in data:
            game.select_rank(str(data['rank'] or ''))
        # A null guess is blank, not the text 'None'
        outcome = game.submit_guess(str(data.get('guess') or ''))
        return jsonify(outcome_to_dict(outcome))

    @app.route('/api/suggest')
    def suggest():
        """Autocomplete taxon names for guesses (?for=guess) or filters."""
        query = request.args.get('q', '')
        target = request.args.get('for', 'filter')
        game = current_game()
        if target == 'guess':
            if not game:
                return no_game()
            results = game.type_guess(query)
        elif game:
            results = game.search_filters(query)
        else:
            results = search_provider.fetch_autocomplete(query)
        return jsonify({
            'query': query,
            'results': [{'id': s.id, 'name': s.name, 'rank': s.rank} for s in results],
        })

    @app.route('/api/state')
    def state():
        game = current_game()
        if not game:
            return no_game()
        return jsonify(game_to_dict(game))

    return app


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    create_app().run(debug=True, port=8080, host='127.0.0.1')
