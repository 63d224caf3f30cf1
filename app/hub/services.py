"""
Hub services for building listing pages and the roadmap.
"""
import logging
from datetime import date
from typing import Any, Dict, List, Optional

from catalog_service.catalog import CatalogProvider, CatalogQuery, READ_TIME_BUCKETS
from catalog_service.models import Article, UserRole, VisitorProfile
from catalog_service.recommendations import RecommendationEngine
from .models import HUB_TYPES, HubPage

_LOG = logging.getLogger(__name__)


class HubNotFound(LookupError):
    """Raised for an unknown hub type or role."""


class HubService:
    """Builds hub pages from the catalog and the recommendation engine."""

    def __init__(self, catalog: CatalogProvider, recommendation_engine: RecommendationEngine):
        self.catalog = catalog
        self.recommendation_engine = recommendation_engine

    def build_hub(self, hub_type: str, value: str, read_time: Optional[str] = None) -> HubPage:
        """Build a hub page.

        Articles are listed newest first. Role and topic hubs also carry
        recommendations computed for a synthetic visitor of that role or
        with that single saved topic.
        """
        if hub_type not in HUB_TYPES:
            raise HubNotFound(f"Unknown hub type: {hub_type}")
        if read_time is not None and read_time not in READ_TIME_BUCKETS:
            raise ValueError(f"Unknown read time filter: {read_time}")

        catalog_articles = self.catalog.articles()
        profile: Optional[VisitorProfile] = None
        learning_order: List[str] = []

        if hub_type == "role":
            role = _parse_role(value)
            articles = CatalogQuery.by_role(catalog_articles, role)
            profile = VisitorProfile(id="hub-visitor", role=role)
        elif hub_type == "topic":
            articles = CatalogQuery.by_topic(catalog_articles, value)
            profile = VisitorProfile(id="hub-visitor", saved_topics=frozenset({value}))
            learning_order = [a.id for a in CatalogQuery.order_by_stage(articles)]
        elif hub_type == "series":
            articles = CatalogQuery.by_series(catalog_articles, value)
            learning_order = [a.id for a in CatalogQuery.order_by_stage(articles)]
        else:
            articles = CatalogQuery.by_archive(catalog_articles, value)

        if read_time:
            articles = CatalogQuery.by_read_time(articles, read_time)

        recommendations = []
        if profile is not None:
            response = self.recommendation_engine.recommend(profile, catalog_articles)
            recommendations = response.recommendations

        return HubPage(
            hub_type=hub_type,
            value=value,
            articles=_newest_first(articles),
            recommendations=recommendations,
            learning_order=learning_order,
            read_time=read_time,
        )

    def roadmap(self, role: Optional[str] = None) -> List[Dict[str, Any]]:
        """Learning paths with their steps resolved to article summaries."""
        paths = self.catalog.learning_paths()
        if role is not None:
            _parse_role(role)
            if role not in paths:
                raise HubNotFound(f"No learning path for role: {role}")
            paths = {role: paths[role]}

        resolved = []
        for role_key, path in paths.items():
            steps = []
            for article_id in path.steps:
                article = self.catalog.get(article_id)
                if article is None:
                    _LOG.warning("Learning path %s references unknown article %s", role_key, article_id)
                    continue
                steps.append(article.summary_dict())
            resolved.append({
                "role": role_key,
                "title": path.title,
                "description": path.description,
                "steps": steps,
            })
        return resolved

    def topics(self) -> List[Dict[str, object]]:
        return CatalogQuery.topic_counts(self.catalog.articles())

    def series(self) -> List[str]:
        return CatalogQuery.series_names(self.catalog.articles())


def _parse_role(value: str) -> UserRole:
    try:
        return UserRole(value)
    except ValueError as e:
        raise HubNotFound(f"Unknown role: {value}") from e


def _newest_first(articles: List[Article]) -> List[Article]:
    return sorted(articles, key=lambda a: a.publish_date or date.min, reverse=True)
