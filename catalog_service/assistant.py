"""
Generative assistant for search, quizzes, content adaptation and chat.

All semantic judgement is delegated to the external chat model; this module
only forwards a query or catalog snapshot and parses the structured reply.
Every operation degrades gracefully when the provider is unreachable or the
reply cannot be parsed.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_core.prompts import PromptTemplate

from catalog_service.llm_utils import LLMProvider
from catalog_service.models import (
    Article,
    ChatReply,
    Language,
    QuizQuestion,
    UserRole,
    extract_recommended_ids,
    parse_quiz,
    parse_search_response,
)

_LOG = logging.getLogger(__name__)

QUIZ_CONTENT_LIMIT = 2000
ADAPT_LEVELS = ("beginner", "advanced")


class ArticleAssistant:
    """Thin, failure-tolerant wrapper around the configured LLM provider."""

    def __init__(self, llm: LLMProvider, prompts_dir: Path):
        self.llm = llm
        self.prompts_dir = Path(prompts_dir)

    @classmethod
    def from_config(cls, llm_config, prompts_dir: Path) -> "ArticleAssistant":
        return cls(LLMProvider.from_config(llm_config), prompts_dir)

    def _render(self, name: str, **values) -> str:
        template = PromptTemplate.from_file(self.prompts_dir / f"{name}.md", encoding="utf-8")
        return template.format(**values)

    # Search ------------------------------------------------------------------

    def search_articles(self, query: str, articles: Sequence[Article]) -> List[str]:
        """Article ids relevant to ``query``, most relevant first."""
        query = (query or "").strip()
        if not query:
            return []

        catalog = [
            {"id": a.id, "title": a.title, "summary": a.summary, "tags": list(a.tags)}
            for a in articles
        ]
        known_ids = {a.id for a in articles}
        try:
            prompt = self._render("search", query=query, articles=json.dumps(catalog, ensure_ascii=False))
            response = parse_search_response(self.llm.complete(prompt))
        except Exception as e:
            _LOG.warning("Search via LLM failed, falling back to title match: %s", e)
            return title_match(query, articles)

        ordered: List[str] = []
        for article_id in response.relevant_article_ids:
            if article_id in known_ids and article_id not in ordered:
                ordered.append(article_id)
        return ordered

    # Quiz --------------------------------------------------------------------

    def generate_quiz(self, article: Article) -> Optional[QuizQuestion]:
        content = (article.content or article.summary)[:QUIZ_CONTENT_LIMIT]
        if not content.strip():
            return None
        try:
            return parse_quiz(self.llm.complete(self._render("quiz", content=content)))
        except Exception as e:
            _LOG.error("Quiz generation failed for article %s: %s", article.id, e)
            return None

    # Content adaptation ------------------------------------------------------

    def adapt_content(self, content: str, level: str) -> str:
        """Rewrite ``content`` for a beginner or advanced reader."""
        if level not in ADAPT_LEVELS:
            raise ValueError(f"Unknown content level: {level}")
        try:
            adapted = self.llm.complete(self._render(f"adapt_{level}", content=content))
        except Exception as e:
            _LOG.error("Content adaptation to %s failed: %s", level, e)
            return content
        return adapted or content

    # Chat --------------------------------------------------------------------

    def chat(
        self,
        message: str,
        role: UserRole,
        language: Language,
        articles: Sequence[Article],
        history: Iterable[Dict[str, str]] = (),
    ) -> ChatReply:
        catalog = [{"id": a.id, "title": a.title, "tags": list(a.tags)} for a in articles]
        messages: List[BaseMessage] = [
            SystemMessage(content=self._render(
                "chat_system",
                role=role.value,
                language=language.value,
                articles=json.dumps(catalog, ensure_ascii=False),
            ))
        ]
        for turn in history:
            text = turn.get("text", "")
            if turn.get("role") == "user":
                messages.append(HumanMessage(content=text))
            else:
                messages.append(AIMessage(content=text))
        messages.append(HumanMessage(content=message))

        try:
            raw = str(self.llm.invoke(messages).content)
        except Exception as e:
            _LOG.error("Chat request failed: %s", e)
            return ChatReply(text="Sorry, I'm having trouble connecting right now. Please try again later.")

        text, ids = extract_recommended_ids(raw)
        known_ids = {a.id for a in articles}
        return ChatReply(text=text, recommended_article_ids=[i for i in ids if i in known_ids])


def title_match(query: str, articles: Iterable[Article]) -> List[str]:
    """Case-insensitive title substring match used when the LLM is unavailable."""
    needle = query.strip().lower()
    return [a.id for a in articles if needle and needle in a.title.lower()]
