"""Matching module."""

from .engine import IMatchingEngine, MatchingEngine, aggregate_confidence
from .scorer import score_skill
from .semantic import SEMANTIC_GROUPS, are_semantically_similar

__all__ = [
    "IMatchingEngine",
    "MatchingEngine",
    "SEMANTIC_GROUPS",
    "aggregate_confidence",
    "are_semantically_similar",
    "score_skill",
]
