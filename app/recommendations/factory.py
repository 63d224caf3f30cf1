"""
Factory for creating the recommendations module.
"""
from catalog_service.catalog import CatalogProvider
from catalog_service.recommendations import RecommendationEngine, build_default_engine
from .routes import create_recommendation_routes
from .services import RecommendationService


def create_recommendations_module(
    catalog: CatalogProvider,
    recommendation_engine: RecommendationEngine | None = None,
) -> dict:
    """Create recommendations module with service and routes."""
    recommendation_engine = recommendation_engine or build_default_engine()
    recommendation_service = RecommendationService(catalog, recommendation_engine)
    blueprint = create_recommendation_routes(recommendation_service)

    return {
        "service": recommendation_service,
        "blueprint": blueprint,
        "recommendation_engine": recommendation_engine,
    }
