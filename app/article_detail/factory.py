"""
Factory for creating the article detail module.
"""
from typing import Optional

from catalog_service.assistant import ArticleAssistant
from catalog_service.catalog import CatalogProvider
from .routes import create_article_detail_routes
from .services import ArticleDetailService, ArticleRenderer


def create_article_detail_module(
    catalog: CatalogProvider,
    assistant: Optional[ArticleAssistant] = None,
) -> dict:
    """Create article detail module with services and routes.

    Args:
        catalog: Catalog provider shared with the other modules
        assistant: Optional generative assistant for quizzes and level adaptation

    Returns:
        Dictionary containing the services and blueprint
    """
    renderer = ArticleRenderer()
    detail_service = ArticleDetailService(catalog, renderer, assistant)
    blueprint = create_article_detail_routes(detail_service)

    return {
        "service": detail_service,
        "renderer": renderer,
        "blueprint": blueprint,
    }
