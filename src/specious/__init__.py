"""Specious - name the organism in a nature observation photo."""

__version__ = "0.1.0"

# Ranks and points
from specious.ranks import RANK_CATALOG, RANK_LEVELS, RankCatalog, RankLevel

# Provider records
from specious.classification import (
    AncestorEntry,
    ClassificationRecord,
    Observation,
    TaxonSuggestion,
)

# Round engine
from specious.resolver import normalize_name, resolve_rank_name
from specious.evaluation import GuessVerdict, evaluate_guess
from specious.scoring import ScoreTracker
from specious.sequencing import RequestSequencer
from specious.round import GuessOutcome, RoundState, RoundStateMachine

# Errors
from specious.errors import (
    EmptyGuess,
    InvalidTransition,
    MissingClassification,
    NoResultsFound,
    ProviderError,
    SpeciousError,
    StaleResponse,
    UnknownRank,
)

# Configuration, provider and game driver
from specious.config import GameConfig
from specious.inaturalist import INaturalistClient
from specious.game import SpeciousGame

__all__ = [
    # Ranks
    "RANK_CATALOG",
    "RANK_LEVELS",
    "RankCatalog",
    "RankLevel",
    # Records
    "AncestorEntry",
    "ClassificationRecord",
    "Observation",
    "TaxonSuggestion",
    # Engine
    "GuessOutcome",
    "GuessVerdict",
    "RequestSequencer",
    "RoundState",
    "RoundStateMachine",
    "ScoreTracker",
    "evaluate_guess",
    "normalize_name",
    "resolve_rank_name",
    # Errors
    "EmptyGuess",
    "InvalidTransition",
    "MissingClassification",
    "NoResultsFound",
    "ProviderError",
    "SpeciousError",
    "StaleResponse",
    "UnknownRank",
    # Configuration and providers
    "GameConfig",
    "INaturalistClient",
    "SpeciousGame",
]
