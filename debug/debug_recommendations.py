#!/usr/bin/env python3
"""
Debug tool for the recommendation engine.

Prints the recommendations and the full trace (applied rules, filtered ids,
score map) for a visitor profile against the catalog file.

Usage:
    python debug/debug_recommendations.py --role student --topic Phishing --completed 1
    python debug/debug_recommendations.py --role business --seed 7 --json
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from catalog_service.catalog import CatalogProvider
from catalog_service.models import UserRole, VisitorProfile
from catalog_service.recommendations import (
    DiversitySelector,
    RecommendationEngine,
    SeededJitter,
    without_jitter,
)
from config_manager import get_catalog_config


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Inspect recommendations for a visitor profile")
    parser.add_argument("--role", default=UserRole.ALL.value, choices=[r.value for r in UserRole])
    parser.add_argument("--topic", action="append", default=[], help="Saved topic (repeatable)")
    parser.add_argument("--completed", action="append", default=[], help="Completed article id (repeatable)")
    parser.add_argument("--catalog", type=Path, help="Catalog JSON file (defaults to configuration)")
    parser.add_argument("--max-results", type=positive_int, default=3)
    parser.add_argument("--seed", type=int, help="Enable jitter with this seed")
    parser.add_argument("--json", action="store_true", help="Print the raw response as JSON")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    catalog_file = args.catalog or Path(__file__).parent.parent / get_catalog_config().catalog_file
    catalog = CatalogProvider(catalog_file)
    profile = VisitorProfile(
        id="debug",
        role=UserRole(args.role),
        saved_topics=frozenset(args.topic),
        completed_article_ids=frozenset(args.completed),
    )
    engine = RecommendationEngine(
        jitter=SeededJitter(seed=args.seed) if args.seed is not None else without_jitter,
        selector=DiversitySelector(max_results=args.max_results),
    )
    response = engine.recommend(profile, catalog.articles())

    if args.json:
        print(json.dumps(response.to_dict(), indent=2, ensure_ascii=False))
        return 0

    print(f"Profile: role={profile.role.value} topics={sorted(profile.saved_topics)} "
          f"completed={sorted(profile.completed_article_ids)}")
    print("\nRecommendations:")
    for position, rec in enumerate(response.recommendations, start=1):
        print(f"  {position}. [{rec.article_id}] {rec.title}  score={rec.score:.2f}")
        print(f"     reason: {rec.reason} | next: {rec.next_step}")

    trace = response.trace
    print("\nApplied rules:")
    for line in trace.applied_rules:
        print(f"  - {line}")
    print(f"\nFiltered (completed): {trace.filtered_ids}")
    print(f"Filtered (audience):  {trace.audience_filtered_ids}")
    print("\nScores:")
    for article_id, score in sorted(trace.scores.items(), key=lambda item: item[1], reverse=True):
        print(f"  {article_id}: {score:.2f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
