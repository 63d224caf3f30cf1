"""
Hub page models for listing views.
"""
import math
from typing import Any, Dict, List, Optional

from catalog_service.models import Article
from catalog_service.recommendations import Recommendation

HUB_TYPES = ("role", "topic", "series", "archive")

FEATURED_COUNT = 2


class HubPage:
    """A filtered article listing with optional recommendations."""

    def __init__(
        self,
        hub_type: str,
        value: str,
        articles: List[Article],
        recommendations: Optional[List[Recommendation]] = None,
        learning_order: Optional[List[str]] = None,
        read_time: Optional[str] = None,
    ):
        self.hub_type = hub_type
        self.value = value
        self.articles = articles
        self.recommendations = recommendations or []
        self.learning_order = learning_order or []
        self.read_time = read_time

    @property
    def title(self) -> str:
        if self.hub_type == "role":
            return f"{self.value.capitalize()} Hub"
        if self.hub_type == "topic":
            return f"{self.value} - Topic Hub"
        if self.hub_type == "series":
            return f"{self.value} - Series"
        return f"Archive: {self.value}"

    @property
    def label(self) -> str:
        return {
            "role": "Audience Hub",
            "topic": "Topic Explorer",
            "series": "Content Series",
        }.get(self.hub_type, "Archive")

    @property
    def description(self) -> str:
        if self.hub_type == "role":
            return f"Curated learning paths, guides, and essential security resources tailored for {self.value}s."
        if self.hub_type == "topic":
            return f"Deep dive into {self.value}. Explore articles, guides, and checklists related to this critical topic."
        if self.hub_type == "series":
            return f'A curated collection of articles in the "{self.value}" series. Follow the path to mastery.'
        return f"Everything we published in {self.value}."

    @property
    def featured(self) -> List[Article]:
        return self.articles[:FEATURED_COUNT]

    def to_dict(self, pagination: Optional["Pagination"] = None) -> Dict[str, Any]:
        listed = pagination.get_page_items(self.articles) if pagination else self.articles
        data = {
            "type": self.hub_type,
            "value": self.value,
            "title": self.title,
            "label": self.label,
            "description": self.description,
            "read_time": self.read_time,
            "featured": [a.summary_dict() for a in self.featured],
            "articles": [a.summary_dict() for a in listed],
            "recommendations": [rec.to_dict() for rec in self.recommendations],
            "learning_order": list(self.learning_order),
        }
        if pagination:
            data.update(pagination.to_dict())
        return data


class Pagination:
    """Pagination data structure."""

    def __init__(self, total_items: int, page: int = 1, per_page: int = 9):
        self.total_items = total_items
        self.page = max(1, page)
        self.per_page = max(1, min(per_page, 50))
        self.total_pages = max(1, math.ceil(total_items / self.per_page))

        if self.page > self.total_pages:
            self.page = self.total_pages

        self.start = (self.page - 1) * self.per_page
        self.end = self.start + self.per_page

    def get_page_items(self, items: List[Any]) -> List[Any]:
        """Get items for current page."""
        return items[self.start:self.end]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "page": self.page,
            "per_page": self.per_page,
            "total_pages": self.total_pages,
            "total_items": self.total_items
        }
