"""
Search subsystem factory for creating search modules.
"""
from typing import Optional

from catalog_service.assistant import ArticleAssistant
from catalog_service.catalog import CatalogProvider
from .routes import create_search_routes
from .services import SearchService


def create_search_module(catalog: CatalogProvider, assistant: Optional[ArticleAssistant] = None) -> dict:
    """Create search module with service and routes."""
    search_service = SearchService(catalog, assistant)
    search_routes = create_search_routes(search_service)

    return {
        "service": search_service,
        "blueprint": search_routes
    }
