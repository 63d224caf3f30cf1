"""
Models package for catalog and visitor data.

This package contains the Pydantic definitions shared by the catalog,
the recommendation engine and the web layer.
"""

from .article import (
    Article,
    CatalogSnapshot,
    Language,
    LearningPath,
    UserRole,
    WILDCARD_AUDIENCE,
)

from .profile import VisitorProfile

from .assistant import (
    ChatReply,
    QuizQuestion,
    SearchResponse,
)

from .utils import (
    clean_json_response,
    extract_recommended_ids,
    load_json_object,
    parse_quiz,
    parse_search_response,
)

__all__ = [
    # Catalog models
    "Article",
    "CatalogSnapshot",
    "Language",
    "LearningPath",
    "UserRole",
    "WILDCARD_AUDIENCE",

    # Visitor models
    "VisitorProfile",

    # Assistant models
    "ChatReply",
    "QuizQuestion",
    "SearchResponse",

    # Utilities
    "clean_json_response",
    "extract_recommended_ids",
    "load_json_object",
    "parse_quiz",
    "parse_search_response",
]
