"""
Article and catalog data models.

This module contains the Pydantic models for catalog records. Input
normalization happens here so downstream consumers (hubs, the recommendation
engine) can rely on a well-formed tag list.
"""

import re
from datetime import date
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserRole(str, Enum):
    """Audience roles. ``ALL`` is the wildcard audience."""
    STUDENT = "student"
    BUSINESS = "business"
    PARENT = "parent"
    EDUCATOR = "educator"
    ALL = "all"


WILDCARD_AUDIENCE = UserRole.ALL


class Language(str, Enum):
    """Supported interface languages."""
    EN = "en"
    ES = "es"
    FR = "fr"
    SW = "sw"
    HI = "hi"


_LEADING_INT = re.compile(r"^\s*(\d+)")


class Article(BaseModel):
    """A single catalog article. Read-only once loaded."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Unique, stable article identifier")
    title: str = Field(description="Display title")
    audience: UserRole = Field(description="Target role or the wildcard audience")
    tags: List[str] = Field(default_factory=list, description="Ordered topics; the first one is the primary tag")
    summary: str = Field(default="", description="Short teaser")
    content: str = Field(default="", description="Markdown body")
    content_beginner: Optional[str] = Field(default=None, description="Pre-written beginner variant")
    content_advanced: Optional[str] = Field(default=None, description="Pre-written advanced variant")
    read_time: str = Field(default="", description="Human readable read time, e.g. '6 min'")
    image_url: Optional[str] = Field(default=None)
    alt_text: str = Field(default="")
    image_caption: Optional[str] = Field(default=None)
    author: str = Field(default="")
    publish_date: Optional[date] = Field(default=None)
    seo_description: Optional[str] = Field(default=None)
    seo_keywords: List[str] = Field(default_factory=list)
    series: Optional[str] = Field(default=None, description="Multi-part learning path name")

    @field_validator("tags", "seo_keywords", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        # Missing tag lists are normalized here, once, for every consumer.
        if value is None:
            return []
        return value

    @field_validator("tags")
    @classmethod
    def _strip_tags(cls, value: List[str]) -> List[str]:
        return [tag.strip() for tag in value if tag and tag.strip()]

    @property
    def primary_tag(self) -> Optional[str]:
        """First tag, or None for untagged articles (a single shared bucket)."""
        return self.tags[0] if self.tags else None

    @property
    def read_minutes(self) -> int:
        match = _LEADING_INT.match(self.read_time or "")
        return int(match.group(1)) if match else 0

    def summary_dict(self) -> Dict[str, object]:
        """Compact representation used by list views."""
        return {
            "id": self.id,
            "title": self.title,
            "audience": self.audience.value,
            "tags": list(self.tags),
            "summary": self.summary,
            "read_time": self.read_time,
            "author": self.author,
            "publish_date": self.publish_date.isoformat() if self.publish_date else None,
            "series": self.series,
            "image_url": self.image_url,
            "alt_text": self.alt_text,
        }


class LearningPath(BaseModel):
    """Ordered reading path for a role."""
    title: str
    description: str = ""
    steps: List[str] = Field(default_factory=list, description="Article ids in reading order")


class CatalogSnapshot(BaseModel):
    """Complete catalog file contents."""
    articles: List[Article] = Field(default_factory=list)
    learning_paths: Dict[str, LearningPath] = Field(default_factory=dict)
