"""
Assistant chat routes.
"""
from typing import Any, Dict, List

from flask import Blueprint, jsonify, request

from catalog_service.assistant import ArticleAssistant
from catalog_service.catalog import CatalogProvider
from catalog_service.models import Language, UserRole

GREETING = "Hello! I am your Cyber Insights assistant. How can I help you stay safe online today?"
MAX_HISTORY_TURNS = 20


def create_assistant_routes(assistant: ArticleAssistant, catalog: CatalogProvider) -> Blueprint:
    """Create assistant routes."""
    bp = Blueprint('assistant', __name__, url_prefix='/assistant')

    def _parse_history(raw: Any) -> List[Dict[str, str]]:
        if not isinstance(raw, list):
            return []
        history = []
        for turn in raw[-MAX_HISTORY_TURNS:]:
            if isinstance(turn, dict) and isinstance(turn.get("text"), str):
                history.append({
                    "role": "user" if turn.get("role") == "user" else "assistant",
                    "text": turn["text"],
                })
        return history

    @bp.get("/greeting")
    def greeting():
        return jsonify({"text": GREETING})

    @bp.post("/chat")
    def chat():
        """Answer one visitor message in the context of their role and language."""
        data = request.get_json(silent=True) or {}
        message = str(data.get("message") or "").strip()
        if not message:
            return jsonify({"error": "Bad request", "message": "message is required"}), 400

        try:
            role = UserRole(data.get("role") or UserRole.ALL.value)
            language = Language(data.get("language") or Language.EN.value)
        except ValueError as e:
            return jsonify({"error": "Bad request", "message": str(e)}), 400

        reply = assistant.chat(
            message,
            role=role,
            language=language,
            articles=catalog.articles(),
            history=_parse_history(data.get("history")),
        )
        return jsonify(reply.model_dump())

    return bp
