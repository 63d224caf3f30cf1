"""
Factory for creating the assistant module.
"""
from catalog_service.assistant import ArticleAssistant
from catalog_service.catalog import CatalogProvider
from .routes import create_assistant_routes


def create_assistant_module(assistant: ArticleAssistant, catalog: CatalogProvider) -> dict:
    """Create assistant module with routes."""
    blueprint = create_assistant_routes(assistant, catalog)

    return {
        "service": assistant,
        "blueprint": blueprint,
    }
