# Catalog service package: article catalog, recommendations and assistant

from .catalog import (
    CatalogError,
    CatalogProvider,
    CatalogQuery,
    PROGRESSION_STAGES,
)
from .recommendations import (
    RecommendationEngine,
    RecommendationResponse,
    build_default_engine,
)
from .llm_utils import LLMProvider
from .assistant import ArticleAssistant, title_match
from .logging_config import (
    setup_logging,
    stop_logging,
    get_logger,
)

__all__ = [
    "CatalogError",
    "CatalogProvider",
    "CatalogQuery",
    "PROGRESSION_STAGES",
    "RecommendationEngine",
    "RecommendationResponse",
    "build_default_engine",
    "LLMProvider",
    "ArticleAssistant",
    "title_match",
    "setup_logging",
    "stop_logging",
    "get_logger",
]
