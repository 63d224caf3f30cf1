"""
Tests for catalog loading, caching and the catalog queries.
"""

import json
import os

import pytest
from pydantic import ValidationError

from catalog_service.catalog import CatalogError, CatalogProvider, CatalogQuery
from catalog_service.models import Article, UserRole


def _write_catalog(path, articles, learning_paths=None):
    path.write_text(json.dumps({
        "articles": articles,
        "learning_paths": learning_paths or {},
    }), encoding="utf-8")
    return path


class TestCatalogProvider:
    """Loading and caching behaviour."""

    def test_bundled_catalog_loads(self, catalog):
        articles = catalog.articles()

        assert [a.id for a in articles] == ["1", "2", "3", "4", "7", "5", "6"]
        assert set(catalog.learning_paths()) == {"all", "student", "parent", "business", "educator"}
        assert catalog.get("5").title == "Phishing 101: Don't Take the Bait"
        assert catalog.get("missing") is None

    def test_snapshot_is_cached_until_file_changes(self, tmp_path):
        path = _write_catalog(tmp_path / "catalog.json", [{"id": "a", "title": "A", "audience": "all"}])
        provider = CatalogProvider(path)

        first = provider.snapshot()
        assert provider.snapshot() is first

        _write_catalog(path, [
            {"id": "a", "title": "A", "audience": "all"},
            {"id": "b", "title": "B", "audience": "student"},
        ])
        stat = path.stat()
        os.utime(path, (stat.st_atime, stat.st_mtime + 10))

        assert [a.id for a in provider.articles()] == ["a", "b"]

    def test_clear_cache_forces_reload(self, tmp_path):
        path = _write_catalog(tmp_path / "catalog.json", [{"id": "a", "title": "A", "audience": "all"}])
        provider = CatalogProvider(path)
        first = provider.snapshot()

        provider.clear_cache()

        assert provider.snapshot() is not first

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(CatalogError, match="not found"):
            CatalogProvider(tmp_path / "nope.json").articles()

    def test_invalid_json_raises(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text("{oops", encoding="utf-8")

        with pytest.raises(CatalogError, match="not valid JSON"):
            CatalogProvider(path).articles()

    def test_invalid_utf8_raises(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_bytes(b'\xff\xfe{}')

        with pytest.raises(CatalogError, match="not valid UTF-8"):
            CatalogProvider(path).articles()

    def test_unreadable_path_raises(self, tmp_path):
        with pytest.raises(CatalogError, match="could not be read"):
            CatalogProvider(tmp_path).articles()

    def test_unknown_audience_fails_validation(self, tmp_path):
        path = _write_catalog(tmp_path / "catalog.json", [{"id": "a", "title": "A", "audience": "robots"}])

        with pytest.raises(CatalogError, match="failed validation"):
            CatalogProvider(path).articles()

    def test_duplicate_ids_are_rejected(self, tmp_path):
        path = _write_catalog(tmp_path / "catalog.json", [
            {"id": "a", "title": "A", "audience": "all"},
            {"id": "a", "title": "Again", "audience": "student"},
        ])

        with pytest.raises(CatalogError, match="Duplicate article ids"):
            CatalogProvider(path).articles()


class TestArticleModel:
    """Normalization at the data-model boundary."""

    def test_missing_tags_become_empty_list(self):
        article = Article.model_validate({"id": "x", "title": "X", "audience": "all", "tags": None})

        assert article.tags == []
        assert article.primary_tag is None

    def test_tags_are_stripped_and_blank_ones_dropped(self):
        article = Article(id="x", title="X", audience="all", tags=[" MFA ", "", "  ", "Basics"])

        assert article.tags == ["MFA", "Basics"]
        assert article.primary_tag == "MFA"

    def test_read_minutes_parses_leading_integer(self):
        assert Article(id="x", title="X", audience="all", read_time="12 min").read_minutes == 12
        assert Article(id="x", title="X", audience="all", read_time="quick").read_minutes == 0

    def test_articles_are_frozen(self):
        article = Article(id="x", title="X", audience="all")

        with pytest.raises(ValidationError):
            article.title = "changed"


class TestCatalogQuery:
    """Filters over the bundled catalog."""

    def test_by_role_includes_wildcard_articles(self, catalog):
        ids = [a.id for a in CatalogQuery.by_role(catalog.articles(), UserRole.STUDENT)]
        assert ids == ["1", "7", "5"]

    def test_wildcard_role_sees_everything(self, catalog):
        assert len(CatalogQuery.by_role(catalog.articles(), UserRole.ALL)) == 7

    def test_by_topic_and_series(self, catalog):
        articles = catalog.articles()

        assert [a.id for a in CatalogQuery.by_topic(articles, "Basics")] == ["1", "7", "6"]
        assert [a.id for a in CatalogQuery.by_series(articles, "Business Resilience")] == ["2", "6"]

    def test_by_archive_matches_date_prefix(self, catalog):
        articles = catalog.articles()

        assert [a.id for a in CatalogQuery.by_archive(articles, "2024-02")] == ["5", "6"]
        assert len(CatalogQuery.by_archive(articles, "2023")) == 3

    def test_by_read_time_buckets(self, catalog):
        articles = catalog.articles()

        assert [a.id for a in CatalogQuery.by_read_time(articles, "short")] == ["5"]
        assert len(CatalogQuery.by_read_time(articles, "medium")) == 6
        assert CatalogQuery.by_read_time(articles, "long") == []
        with pytest.raises(ValueError):
            CatalogQuery.by_read_time(articles, "epic")

    def test_related_shares_audience_or_tag(self, catalog):
        article = catalog.get("1")
        related = CatalogQuery.related(article, catalog.articles())

        assert [a.id for a in related] == ["7", "5", "6"]
        assert article not in related

    def test_topic_counts_sorted_by_count_then_name(self, catalog):
        counts = CatalogQuery.topic_counts(catalog.articles())

        assert counts[0] == {"name": "Basics", "count": 3}
        assert {"name": "MFA", "count": 2} in counts

    def test_series_names(self, catalog):
        assert CatalogQuery.series_names(catalog.articles()) == [
            "Account Security Essentials",
            "Business Resilience",
        ]

    def test_order_by_stage_puts_foundations_first(self):
        articles = [
            Article(id="adv", title="A", audience="all", tags=["Ransomware"]),
            Article(id="mid", title="M", audience="all", tags=["Phishing", "Basics"]),
            Article(id="new", title="N", audience="all", tags=["Unknown"]),
            Article(id="base", title="B", audience="all", tags=["Basics"]),
        ]

        ordered = CatalogQuery.order_by_stage(articles)

        assert [a.id for a in ordered] == ["new", "base", "mid", "adv"]
        assert CatalogQuery.stage_of(articles[1]) == 20
