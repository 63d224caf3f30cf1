"""
Article Detail Module

Single-article pages: rendered body per reading level, related articles, quiz.
"""

from .factory import create_article_detail_module

__all__ = ["create_article_detail_module"]
