"""
Search routes for article search functionality.
"""
from flask import Blueprint, jsonify, request

from .services import SearchService


def create_search_routes(search_service: SearchService) -> Blueprint:
    """Create search routes."""
    bp = Blueprint('search', __name__, url_prefix='/search')

    @bp.route("/", methods=["GET"])
    def search_articles():
        """Search articles by query."""
        query = request.args.get("q", "").strip()

        if not query:
            return jsonify({
                "results": [],
                "query": query,
                "total": 0,
                "message": "Please provide a search query"
            })

        results = search_service.search(query)
        return jsonify({
            "results": results,
            "query": query,
            "total": len(results),
        })

    @bp.route("/suggest", methods=["GET"])
    def search_suggestions():
        """Get search suggestions based on partial query."""
        query = request.args.get("q", "").strip()
        return jsonify({"suggestions": search_service.suggest(query)})

    return bp
