"""
Factory for creating the hub module.
"""
from catalog_service.catalog import CatalogProvider
from catalog_service.recommendations import RecommendationEngine, build_default_engine
from .routes import create_hub_routes
from .services import HubService


def create_hub_module(
    catalog: CatalogProvider,
    recommendation_engine: RecommendationEngine | None = None,
) -> dict:
    """Create hub module with service and routes.

    Args:
        catalog: Catalog provider shared with the other modules
        recommendation_engine: Engine used for the hub recommendations

    Returns:
        Dictionary containing the service and blueprint
    """
    recommendation_engine = recommendation_engine or build_default_engine()
    hub_service = HubService(catalog, recommendation_engine)
    blueprint = create_hub_routes(hub_service)

    return {
        "service": hub_service,
        "blueprint": blueprint,
    }
