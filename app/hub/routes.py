"""
Hub routes for role, topic, series and archive listings and the roadmap.
"""
from typing import Dict

from flask import Blueprint, jsonify, request

from .models import Pagination
from .services import HubNotFound, HubService


def create_hub_routes(hub_service: HubService) -> Blueprint:
    """Create hub routes."""
    bp = Blueprint('hub', __name__)

    def _get_pagination_params() -> Dict[str, int]:
        """Extract and validate pagination parameters from request."""
        try:
            page = max(1, int(request.args.get("page", 1)))
        except ValueError:
            page = 1
        try:
            per_page = int(request.args.get("per_page", 9))
        except ValueError:
            per_page = 9
        return {
            'page': page,
            'per_page': max(1, min(per_page, 50))
        }

    @bp.get("/hub/<hub_type>/<path:value>")
    def hub_page(hub_type: str, value: str):
        """Listing page for one hub."""
        read_time = (request.args.get("read_time") or "").strip().lower() or None
        try:
            page = hub_service.build_hub(hub_type, value, read_time=read_time)
        except HubNotFound as e:
            return jsonify({"error": "Not found", "message": str(e)}), 404
        except ValueError as e:
            return jsonify({"error": "Bad request", "message": str(e)}), 400

        params = _get_pagination_params()
        pagination = Pagination(len(page.articles), params['page'], params['per_page'])
        return jsonify(page.to_dict(pagination))

    @bp.get("/roadmap")
    def roadmap():
        """All role learning paths."""
        return jsonify({"paths": hub_service.roadmap()})

    @bp.get("/roadmap/<role>")
    def roadmap_for_role(role: str):
        try:
            paths = hub_service.roadmap(role)
        except HubNotFound as e:
            return jsonify({"error": "Not found", "message": str(e)}), 404
        return jsonify(paths[0])

    @bp.get("/topics")
    def topics():
        return jsonify({"topics": hub_service.topics()})

    @bp.get("/series")
    def series():
        return jsonify({"series": hub_service.series()})

    return bp
