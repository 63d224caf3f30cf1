"""
Visitor profile model.

The profile is supplied by the caller on every request; nothing here is
persisted between calls.
"""

from typing import Dict, FrozenSet, Optional

from pydantic import BaseModel, Field

from .article import Language, UserRole


class VisitorProfile(BaseModel):
    """Visitor-declared preferences plus already-completed articles.

    Only role, saved_topics and completed_article_ids feed the recommendation
    engine. The assistant chat route takes its language per request.
    """
    id: Optional[str] = Field(default=None, description="Opaque visitor id, informational only")
    role: UserRole = Field(default=UserRole.ALL, description="Selected role; 'all' is the wildcard")
    language: Language = Field(
        default=Language.EN,
        description="Preferred interface language; informational only, ranking ignores it",
    )
    saved_topics: FrozenSet[str] = Field(default_factory=frozenset, description="Declared topic interests")
    completed_article_ids: FrozenSet[str] = Field(default_factory=frozenset, description="Articles already read")
    quiz_scores: Dict[str, int] = Field(
        default_factory=dict,
        description="Topic -> score (0-100); informational only, ranking ignores it",
    )
