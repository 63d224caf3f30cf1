"""
Article detail routes.
"""
from flask import Blueprint, jsonify, request

from .services import LEVELS, ArticleDetailService


def create_article_detail_routes(detail_service: ArticleDetailService) -> Blueprint:
    """Create article detail routes."""
    bp = Blueprint('article_detail', __name__, url_prefix='/article')

    @bp.get("/<article_id>")
    def article_detail(article_id: str):
        """Rendered article for the requested reading level."""
        level = (request.args.get("level") or "default").strip().lower()
        if level not in LEVELS:
            return jsonify({
                "error": "Bad request",
                "message": f"level must be one of {', '.join(LEVELS)}",
            }), 400

        article = detail_service.get_article(article_id)
        if article is None:
            return jsonify({"error": "Not found", "message": f"Unknown article: {article_id}"}), 404
        return jsonify(detail_service.render(article, level))

    @bp.get("/<article_id>/quiz")
    def article_quiz(article_id: str):
        """One generated comprehension question for the article."""
        article = detail_service.get_article(article_id)
        if article is None:
            return jsonify({"error": "Not found", "message": f"Unknown article: {article_id}"}), 404

        quiz = detail_service.quiz(article)
        if quiz is None:
            return jsonify({"error": "Quiz unavailable", "message": "Please try again later."}), 503
        return jsonify({"article_id": article.id, "quiz": quiz.model_dump()})

    return bp
