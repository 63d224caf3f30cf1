"""
Article detail services for rendering individual articles.
"""
import logging
from typing import Any, Dict, Optional, Tuple

import markdown

from catalog_service.assistant import ArticleAssistant
from catalog_service.catalog import CatalogProvider, CatalogQuery
from catalog_service.models import Article, QuizQuestion

_LOG = logging.getLogger(__name__)

LEVELS = ("default", "beginner", "advanced")


class ArticleRenderer:
    """Service for rendering article bodies."""

    def render_markdown(self, md_text: str) -> str:
        """Convert Markdown → HTML (GitHub-flavoured-ish)."""
        return markdown.markdown(
            md_text,
            extensions=[
                "fenced_code",
                "tables",
                "toc",
                "attr_list",
            ],
        )


class ArticleDetailService:
    """Loads an article and prepares it for display."""

    def __init__(
        self,
        catalog: CatalogProvider,
        renderer: ArticleRenderer,
        assistant: Optional[ArticleAssistant] = None,
    ):
        self.catalog = catalog
        self.renderer = renderer
        self.assistant = assistant

    def get_article(self, article_id: str) -> Optional[Article]:
        return self.catalog.get(article_id)

    def select_body(self, article: Article, level: str) -> Tuple[str, str]:
        """Pick the markdown body for a reading level.

        Returns the body and where it came from: ``original``, ``prewritten``
        or ``adapted`` (rewritten on the fly by the assistant).
        """
        if level not in LEVELS:
            raise ValueError(f"Unknown reading level: {level}")
        if level == "default":
            return article.content, "original"

        prewritten = article.content_beginner if level == "beginner" else article.content_advanced
        if prewritten:
            return prewritten, "prewritten"

        if self.assistant is not None and article.content:
            adapted = self.assistant.adapt_content(article.content, level)
            if adapted != article.content:
                return adapted, "adapted"
        return article.content, "original"

    def render(self, article: Article, level: str = "default") -> Dict[str, Any]:
        body, source = self.select_body(article, level)
        related = CatalogQuery.related(article, self.catalog.articles())
        return {
            **article.summary_dict(),
            "image_caption": article.image_caption,
            "seo_description": article.seo_description,
            "seo_keywords": list(article.seo_keywords),
            "level": level,
            "content_source": source,
            "available_levels": [
                name for name, body_text in (
                    ("default", article.content),
                    ("beginner", article.content_beginner),
                    ("advanced", article.content_advanced),
                ) if body_text
            ],
            "html_content": self.renderer.render_markdown(body or ""),
            "related": [a.summary_dict() for a in related],
        }

    def quiz(self, article: Article) -> Optional[QuizQuestion]:
        if self.assistant is None:
            _LOG.info("Quiz requested for %s but no assistant is configured", article.id)
            return None
        return self.assistant.generate_quiz(article)
