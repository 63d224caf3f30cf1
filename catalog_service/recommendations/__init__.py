"""
Recommendation engine package for personalized article suggestions.

Provides a pure, pluggable engine that can be reused by the web layer,
the debug CLI, or any future batch jobs without creating Flask dependencies.
"""

from .engine import (
    AudienceAffinityRule,
    CandidateFilter,
    DiversitySelector,
    FoundationalBoostRule,
    JitterFactory,
    JitterSource,
    Recommendation,
    RecommendationEngine,
    RecommendationResponse,
    RecommendationTrace,
    RuleHit,
    SavedTopicRule,
    ScoredCandidate,
    Scorer,
    ScoringRule,
    SeededJitter,
    build_default_engine,
    default_rules,
    no_jitter,
    rank_candidates,
    without_jitter,
)

__all__ = [
    "AudienceAffinityRule",
    "CandidateFilter",
    "DiversitySelector",
    "FoundationalBoostRule",
    "JitterFactory",
    "JitterSource",
    "Recommendation",
    "RecommendationEngine",
    "RecommendationResponse",
    "RecommendationTrace",
    "RuleHit",
    "SavedTopicRule",
    "ScoredCandidate",
    "Scorer",
    "ScoringRule",
    "SeededJitter",
    "build_default_engine",
    "default_rules",
    "no_jitter",
    "rank_candidates",
    "without_jitter",
]
