"""
Reusable recommendation engine primitives.

This module lives inside catalog_service/ so it can be shared by the web
application, the debug CLI, or any future batch job without introducing
Flask dependencies. The engine is a pure function of a visitor profile and a
catalog snapshot: it performs no I/O and keeps no state between calls.

Pipeline: candidate filter -> scoring rules -> ranking -> diversity selection,
with a trace recorded alongside the result.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, Protocol, Sequence

from catalog_service.models import Article, UserRole, VisitorProfile, WILDCARD_AUDIENCE

_LOG = logging.getLogger(__name__)

DEFAULT_MAX_RESULTS = 3
DEFAULT_DIVERSITY_MIN_POOL = 5
DEFAULT_JITTER_MAGNITUDE = 5.0
FOUNDATIONAL_TOPIC = "Basics"
FALLBACK_REASON = "Recommended for you"
UNTAGGED_NEXT_STEP = "Explore related articles"


# ---------------------------------------------------------------------------
# Core data structures
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class RecommendationTrace:
    """Diagnostic record of one engine run. Never feeds back into ranking."""

    applied_rules: List[str] = field(default_factory=list)
    filtered_ids: List[str] = field(default_factory=list)
    audience_filtered_ids: List[str] = field(default_factory=list)
    scores: Dict[str, float] = field(default_factory=dict)

    def log(self, message: str) -> None:
        self.applied_rules.append(message)
        _LOG.debug(message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "applied_rules": list(self.applied_rules),
            "filtered_ids": list(self.filtered_ids),
            "audience_filtered_ids": list(self.audience_filtered_ids),
            "scores": dict(self.scores),
        }


@dataclass(slots=True)
class RuleHit:
    """Points (and optionally a reason) contributed by one scoring rule."""

    points: float
    reason: Optional[str] = None


@dataclass(slots=True)
class ScoredCandidate:
    """Per-invocation scoring state for a single candidate article."""

    article: Article
    score: float = 0.0
    reasons: List[str] = field(default_factory=list)

    @property
    def primary_reason(self) -> str:
        # Earliest-fired rule wins for display; rule order is the priority policy.
        return self.reasons[0] if self.reasons else FALLBACK_REASON

    @property
    def next_step(self) -> str:
        tag = self.article.primary_tag
        if tag is None:
            return UNTAGGED_NEXT_STEP
        return f"Learn about {tag}"


@dataclass(slots=True)
class Recommendation:
    """Output record surfaced to callers."""

    article_id: str
    title: str
    reason: str
    next_step: str
    score: float

    @classmethod
    def from_candidate(cls, candidate: ScoredCandidate) -> "Recommendation":
        return cls(
            article_id=candidate.article.id,
            title=candidate.article.title,
            reason=candidate.primary_reason,
            next_step=candidate.next_step,
            score=candidate.score,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "article_id": self.article_id,
            "title": self.title,
            "reason": self.reason,
            "next_step": self.next_step,
            "score": self.score,
        }


@dataclass(slots=True)
class RecommendationResponse:
    """Container for engine output."""

    recommendations: List[Recommendation]
    trace: RecommendationTrace
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def article_ids(self) -> List[str]:
        return [rec.article_id for rec in self.recommendations]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "recommendations": [rec.to_dict() for rec in self.recommendations],
            "trace": self.trace.to_dict(),
            "generated_at": self.generated_at.isoformat(),
        }


class ScoringRule(Protocol):
    """Interface for plug-and-play scoring rules."""

    name: str

    def apply(self, article: Article, profile: VisitorProfile) -> Optional[RuleHit]:
        """Return the rule's contribution, or None when it does not fire."""


# Tie-break jitter source: a zero-argument callable returning a float >= 0.
JitterSource = Callable[[], float]
# Builds a fresh JitterSource for each engine run, so runs share no RNG state.
JitterFactory = Callable[[], JitterSource]


def no_jitter() -> float:
    return 0.0


def without_jitter() -> JitterSource:
    return no_jitter


class SeededJitter:
    """Factory of uniform jitter streams in [0, magnitude).

    Every call starts a new ``random.Random(seed)``: with a seed, each engine
    run sees the same sequence; without one, each run is independently random.
    """

    def __init__(self, magnitude: float = DEFAULT_JITTER_MAGNITUDE, seed: Optional[int] = None):
        if magnitude < 0:
            raise ValueError("Jitter magnitude must be non-negative.")
        self.magnitude = magnitude
        self.seed = seed

    def __call__(self) -> JitterSource:
        rng = random.Random(self.seed)
        magnitude = self.magnitude

        def draw() -> float:
            return rng.random() * magnitude

        return draw


# ---------------------------------------------------------------------------
# Scoring rules
# ---------------------------------------------------------------------------


class AudienceAffinityRule:
    """Exactly one branch always fires: role match or wildcard audience."""

    name = "audience_affinity"

    def __init__(self, exact_points: float = 50.0, wildcard_points: float = 10.0):
        self.exact_points = exact_points
        self.wildcard_points = wildcard_points

    def apply(self, article: Article, profile: VisitorProfile) -> Optional[RuleHit]:
        if article.audience == profile.role:
            return RuleHit(self.exact_points, f"Perfect for {profile.role.value}s")
        return RuleHit(self.wildcard_points, "General foundational knowledge")


class SavedTopicRule:
    name = "saved_topic"

    def __init__(self, points: float = 30.0):
        self.points = points

    def apply(self, article: Article, profile: VisitorProfile) -> Optional[RuleHit]:
        if any(tag in profile.saved_topics for tag in article.tags):
            return RuleHit(self.points, "Matches your saved topics")
        return None


class FoundationalBoostRule:
    name = "foundational_boost"

    def __init__(self, topic: str = FOUNDATIONAL_TOPIC, points: float = 15.0):
        self.topic = topic
        self.points = points

    def apply(self, article: Article, profile: VisitorProfile) -> Optional[RuleHit]:
        if self.topic in article.tags:
            return RuleHit(self.points, "Recommended starting point")
        return None


def default_rules() -> List[ScoringRule]:
    """Rules in priority order; the first reason recorded is the displayed one."""
    return [AudienceAffinityRule(), SavedTopicRule(), FoundationalBoostRule()]


# ---------------------------------------------------------------------------
# Pipeline stages
# ---------------------------------------------------------------------------


class CandidateFilter:
    """Drops completed articles and articles aimed at another role."""

    def __init__(self, wildcard: UserRole = WILDCARD_AUDIENCE):
        self.wildcard = wildcard

    def filter(
        self,
        articles: Iterable[Article],
        profile: VisitorProfile,
        trace: RecommendationTrace,
    ) -> List[Article]:
        candidates: List[Article] = []
        for article in articles:
            if article.id in profile.completed_article_ids:
                trace.filtered_ids.append(article.id)
                continue
            if article.audience != profile.role and article.audience != self.wildcard:
                trace.audience_filtered_ids.append(article.id)
                continue
            candidates.append(article)

        trace.log(f"Filtered candidates count: {len(candidates)}")
        return candidates


class Scorer:
    """Applies additive rules plus a tie-break jitter term."""

    def __init__(self, rules: Sequence[ScoringRule]):
        if not rules:
            raise ValueError("At least one scoring rule is required.")
        self.rules = list(rules)

    def score(
        self,
        article: Article,
        profile: VisitorProfile,
        trace: RecommendationTrace,
        jitter: JitterSource = no_jitter,
    ) -> ScoredCandidate:
        candidate = ScoredCandidate(article=article)
        for rule in self.rules:
            hit = rule.apply(article, profile)
            if hit is None:
                continue
            candidate.score += hit.points
            if hit.reason:
                candidate.reasons.append(hit.reason)
            trace.log(f"{rule.name} -> {article.id}: +{hit.points:g} ({hit.reason or 'no reason'})")

        candidate.score += jitter()
        trace.scores[article.id] = candidate.score
        return candidate


def rank_candidates(candidates: Sequence[ScoredCandidate]) -> List[ScoredCandidate]:
    """Sort by score, descending. Equal scores keep catalog order (stable sort)."""
    return sorted(candidates, key=lambda candidate: candidate.score, reverse=True)


class DiversitySelector:
    """Picks the top results while avoiding repeated primary tags.

    The constraint is soft: it is relaxed entirely when the pool is smaller
    than ``min_pool_for_diversity``, and skipped candidates are used to fill
    any remaining slots once distinct primary tags run out. Output keeps
    ranked order, so scores never increase down the list.
    """

    def __init__(
        self,
        max_results: int = DEFAULT_MAX_RESULTS,
        min_pool_for_diversity: int = DEFAULT_DIVERSITY_MIN_POOL,
    ):
        if max_results < 1:
            raise ValueError("max_results must be at least 1.")
        self.max_results = max_results
        self.min_pool_for_diversity = min_pool_for_diversity

    def select(
        self,
        ranked: Sequence[ScoredCandidate],
        trace: RecommendationTrace,
    ) -> List[ScoredCandidate]:
        relaxed = len(ranked) < self.min_pool_for_diversity
        # None is the shared bucket for untagged articles.
        used_tags: set[Optional[str]] = set()
        picked: List[int] = []
        skipped: List[int] = []

        for index, candidate in enumerate(ranked):
            if len(picked) >= self.max_results:
                break
            tag = candidate.article.primary_tag
            if relaxed or tag not in used_tags:
                picked.append(index)
                used_tags.add(tag)
            else:
                skipped.append(index)
                trace.log(
                    f"diversity -> {candidate.article.id}: skipped, primary tag {tag!r} already used"
                )

        missing = self.max_results - len(picked)
        if missing > 0 and skipped:
            backfill = skipped[:missing]
            trace.log(
                "diversity -> backfilled "
                + ", ".join(ranked[i].article.id for i in backfill)
                + " in score order"
            )
            picked = sorted(picked + backfill)

        return [ranked[i] for i in picked]


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class RecommendationEngine:
    """Filters, scores, ranks and diversifies articles for one visitor."""

    def __init__(
        self,
        rules: Optional[Sequence[ScoringRule]] = None,
        jitter: JitterFactory = without_jitter,
        candidate_filter: Optional[CandidateFilter] = None,
        selector: Optional[DiversitySelector] = None,
    ):
        self.candidate_filter = candidate_filter or CandidateFilter()
        self.scorer = Scorer(rules if rules is not None else default_rules())
        self.jitter = jitter
        self.selector = selector or DiversitySelector()

    def recommend(
        self,
        profile: VisitorProfile,
        articles: Sequence[Article],
    ) -> RecommendationResponse:
        trace = RecommendationTrace()
        jitter = self.jitter()

        candidates = self.candidate_filter.filter(articles, profile, trace)
        scored = [self.scorer.score(article, profile, trace, jitter) for article in candidates]
        ranked = rank_candidates(scored)
        selected = self.selector.select(ranked, trace)

        trace.log(f"Selected top {len(selected)} diverse recommendations")
        return RecommendationResponse(
            recommendations=[Recommendation.from_candidate(c) for c in selected],
            trace=trace,
        )


def build_default_engine(config: Any = None) -> RecommendationEngine:
    """Factory for the engine used by the web layer.

    ``config`` is any object exposing the ``RecommendationConfig`` attributes
    (max_results, diversity_min_pool, jitter_enabled, jitter_magnitude,
    jitter_seed). Without one, jitter is disabled and defaults apply.
    """
    if config is None:
        return RecommendationEngine()

    jitter: JitterFactory = without_jitter
    if config.jitter_enabled:
        jitter = SeededJitter(magnitude=config.jitter_magnitude, seed=config.jitter_seed)

    return RecommendationEngine(
        jitter=jitter,
        selector=DiversitySelector(
            max_results=config.max_results,
            min_pool_for_diversity=config.diversity_min_pool,
        ),
    )
