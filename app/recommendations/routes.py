"""
Recommendation API routes.
"""
from flask import Blueprint, jsonify, request

from .services import ProfileError, RecommendationService


def create_recommendation_routes(recommendation_service: RecommendationService) -> Blueprint:
    """Create recommendation routes."""
    bp = Blueprint('recommendations', __name__, url_prefix='/api/recommendations')

    def _respond(profile):
        response = recommendation_service.recommend(profile)
        return jsonify(response.to_dict())

    @bp.post("")
    def recommend_for_profile():
        """Recommendations for a profile sent as a JSON body."""
        try:
            profile = recommendation_service.parse_profile(request.get_json(silent=True))
        except ProfileError as e:
            return jsonify({"error": "Invalid profile", "messages": e.messages}), 400
        return _respond(profile)

    @bp.get("")
    def recommend_from_query():
        """Recommendations for a profile given as query parameters."""
        try:
            profile = recommendation_service.profile_from_query(request.args)
        except ProfileError as e:
            return jsonify({"error": "Invalid profile", "messages": e.messages}), 400
        return _respond(profile)

    return bp
