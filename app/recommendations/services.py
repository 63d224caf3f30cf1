"""
Recommendation services binding the engine to the catalog.
"""
import logging
from typing import Any, Dict, List, Mapping

from pydantic import ValidationError

from catalog_service.catalog import CatalogProvider
from catalog_service.models import VisitorProfile
from catalog_service.recommendations import RecommendationEngine, RecommendationResponse

_LOG = logging.getLogger(__name__)


class ProfileError(ValueError):
    """Raised when a request does not describe a valid visitor profile."""

    def __init__(self, messages: List[str]):
        super().__init__("; ".join(messages))
        self.messages = messages


class RecommendationService:
    """Runs the engine for a caller-supplied profile against the current catalog."""

    def __init__(self, catalog: CatalogProvider, recommendation_engine: RecommendationEngine):
        self.catalog = catalog
        self.recommendation_engine = recommendation_engine

    def recommend(self, profile: VisitorProfile) -> RecommendationResponse:
        response = self.recommendation_engine.recommend(profile, self.catalog.articles())
        _LOG.info(
            "Recommended %s for role=%s (%d filtered)",
            response.article_ids,
            profile.role.value,
            len(response.trace.filtered_ids) + len(response.trace.audience_filtered_ids),
        )
        return response

    @staticmethod
    def parse_profile(data: Any) -> VisitorProfile:
        """Validate a JSON body into a profile."""
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise ProfileError(["Profile must be a JSON object"])
        try:
            return VisitorProfile.model_validate(dict(data))
        except ValidationError as e:
            raise ProfileError(_format_errors(e)) from e

    @staticmethod
    def profile_from_query(args) -> VisitorProfile:
        """Build a profile from query parameters.

        ``topic`` and ``completed`` may repeat or hold comma-separated values.
        """
        data: Dict[str, Any] = {
            "saved_topics": _split_multi(args.getlist("topic")),
            "completed_article_ids": _split_multi(args.getlist("completed")),
        }
        for key in ("id", "role", "language"):
            value = (args.get(key) or "").strip()
            if value:
                data[key] = value
        return RecommendationService.parse_profile(data)


def _split_multi(values: List[str]) -> List[str]:
    items: List[str] = []
    for value in values:
        items.extend(part.strip() for part in value.split(",") if part.strip())
    return items


def _format_errors(error: ValidationError) -> List[str]:
    return [
        f"{'.'.join(str(part) for part in err['loc']) or 'profile'}: {err['msg']}"
        for err in error.errors()
    ]
