"""
Catalog provider and catalog queries.

The catalog is a JSON file of articles plus role learning paths. It is
loaded once, validated with the Pydantic models and cached until the file
changes on disk. Everything returned from here is read-only.
"""

import json
import logging
from collections import Counter
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from pydantic import ValidationError

from catalog_service.models import Article, CatalogSnapshot, LearningPath, UserRole, WILDCARD_AUDIENCE

_LOG = logging.getLogger(__name__)

# Progression stage per topic: lower is more foundational. Used to order
# hub listings from beginner to advanced material, never for scoring.
PROGRESSION_STAGES: Dict[str, int] = {
    "Basics": 10,
    "Passwords": 10,
    "MFA": 10,
    "Education": 10,
    "Social Media": 20,
    "Phishing": 20,
    "Email": 20,
    "Ransomware": 30,
    "Strategy": 30,
    "Compliance": 30,
    "Checklist": 25,
}

READ_TIME_BUCKETS = ("short", "medium", "long")


class CatalogError(RuntimeError):
    """Raised when the catalog file is missing or malformed."""


class CatalogProvider:
    """Loads and caches the article catalog from a JSON file."""

    def __init__(self, catalog_file: Path):
        self.catalog_file = Path(catalog_file)
        self._cache: Dict = {
            "snapshot": None,
            "mtime": 0.0,
        }

    def snapshot(self) -> CatalogSnapshot:
        """Return the current catalog, reloading it when the file changed."""
        try:
            mtime = self.catalog_file.stat().st_mtime
        except FileNotFoundError as e:
            raise CatalogError(f"Catalog file not found: {self.catalog_file}") from e
        except OSError as e:
            raise CatalogError(f"Catalog file could not be read: {e}") from e

        cached = self._cache.get("snapshot")
        if cached is not None and float(self._cache.get("mtime") or 0.0) >= mtime:
            return cached

        snapshot = self._load()
        self._cache["snapshot"] = snapshot
        self._cache["mtime"] = mtime
        _LOG.info("Loaded %d articles from %s", len(snapshot.articles), self.catalog_file)
        return snapshot

    def _load(self) -> CatalogSnapshot:
        try:
            raw = self.catalog_file.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise CatalogError(f"Catalog file is not valid UTF-8: {e}") from e
        except OSError as e:
            raise CatalogError(f"Catalog file could not be read: {e}") from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CatalogError(f"Catalog file is not valid JSON: {e}") from e

        try:
            snapshot = CatalogSnapshot.model_validate(data)
        except ValidationError as e:
            raise CatalogError(f"Catalog file failed validation: {e}") from e

        duplicates = [
            article_id
            for article_id, count in Counter(a.id for a in snapshot.articles).items()
            if count > 1
        ]
        if duplicates:
            raise CatalogError(f"Duplicate article ids in catalog: {', '.join(sorted(duplicates))}")
        return snapshot

    def articles(self) -> List[Article]:
        return list(self.snapshot().articles)

    def get(self, article_id: str) -> Optional[Article]:
        for article in self.snapshot().articles:
            if article.id == article_id:
                return article
        return None

    def learning_paths(self) -> Dict[str, LearningPath]:
        return dict(self.snapshot().learning_paths)

    def clear_cache(self) -> None:
        """Forget the cached snapshot."""
        self._cache = {
            "snapshot": None,
            "mtime": 0.0,
        }


class CatalogQuery:
    """Static filters over a list of articles."""

    @staticmethod
    def by_role(articles: Iterable[Article], role: UserRole) -> List[Article]:
        """Articles for a role, including wildcard-audience ones.

        The wildcard role sees the whole catalog.
        """
        if role == WILDCARD_AUDIENCE:
            return list(articles)
        return [a for a in articles if a.audience == role or a.audience == WILDCARD_AUDIENCE]

    @staticmethod
    def by_topic(articles: Iterable[Article], topic: str) -> List[Article]:
        return [a for a in articles if topic in a.tags]

    @staticmethod
    def by_series(articles: Iterable[Article], series: str) -> List[Article]:
        return [a for a in articles if a.series == series]

    @staticmethod
    def by_archive(articles: Iterable[Article], period: str) -> List[Article]:
        """Articles whose ISO publish date starts with ``period`` ("2024", "2024-02")."""
        return [
            a for a in articles
            if a.publish_date is not None and a.publish_date.isoformat().startswith(period)
        ]

    @staticmethod
    def by_read_time(articles: Iterable[Article], bucket: str) -> List[Article]:
        if bucket == "short":
            return [a for a in articles if a.read_minutes < 5]
        if bucket == "medium":
            return [a for a in articles if 5 <= a.read_minutes < 10]
        if bucket == "long":
            return [a for a in articles if a.read_minutes >= 10]
        raise ValueError(f"Unknown read time bucket: {bucket}")

    @staticmethod
    def related(article: Article, articles: Iterable[Article], limit: int = 3) -> List[Article]:
        """Other articles sharing the audience or at least one tag."""
        tags = set(article.tags)
        related = [
            a for a in articles
            if a.id != article.id and (a.audience == article.audience or tags.intersection(a.tags))
        ]
        return related[:limit]

    @staticmethod
    def topic_counts(articles: Iterable[Article]) -> List[Dict[str, object]]:
        counts: Counter = Counter()
        for article in articles:
            counts.update(article.tags)
        return sorted(
            ({"name": k, "count": v} for k, v in counts.items()),
            key=lambda item: (-item["count"], item["name"]),
        )

    @staticmethod
    def series_names(articles: Iterable[Article]) -> List[str]:
        return sorted({a.series for a in articles if a.series})

    @staticmethod
    def stage_of(article: Article) -> int:
        """Highest progression stage among the article's tags (0 when unknown)."""
        return max((PROGRESSION_STAGES.get(tag, 0) for tag in article.tags), default=0)

    @staticmethod
    def order_by_stage(articles: Iterable[Article]) -> List[Article]:
        """Foundational material first; catalog order is kept within a stage."""
        return sorted(articles, key=CatalogQuery.stage_of)
