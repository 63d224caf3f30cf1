"""
Search services for free-text article search.
"""
import logging
from typing import Any, Dict, List, Optional

from catalog_service.assistant import ArticleAssistant, title_match
from catalog_service.catalog import CatalogProvider

_LOG = logging.getLogger(__name__)


class SearchService:
    """Searches the catalog, delegating relevance ranking to the assistant."""

    def __init__(self, catalog: CatalogProvider, assistant: Optional[ArticleAssistant] = None):
        self.catalog = catalog
        self.assistant = assistant

    def search(self, query: str) -> List[Dict[str, Any]]:
        """Search articles by query.

        Args:
            query: Free-text search query

        Returns:
            Matching article summaries, most relevant first
        """
        query = (query or "").strip()
        if not query:
            return []

        articles = self.catalog.articles()
        if self.assistant is not None:
            ids = self.assistant.search_articles(query, articles)
        else:
            ids = title_match(query, articles)

        by_id = {a.id: a for a in articles}
        results = []
        for rank, article_id in enumerate(ids, start=1):
            article = by_id.get(article_id)
            if article is None:
                continue
            results.append({**article.summary_dict(), "rank": rank})
        _LOG.info("Search %r returned %d results", query, len(results))
        return results

    def suggest(self, query: str, limit: int = 10) -> List[str]:
        """Suggestions from tags and title openings for a partial query."""
        needle = (query or "").strip().lower()
        if len(needle) < 2:
            return []

        suggestions = set()
        for article in self.catalog.articles():
            for tag in article.tags:
                if needle in tag.lower():
                    suggestions.add(tag)
            if needle in article.title.lower():
                suggestions.add(' '.join(article.title.split()[:3]))
        return sorted(suggestions)[:limit]
