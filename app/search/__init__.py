"""
Search Module

Free-text article search and tag/title suggestions.
"""

from .factory import create_search_module

__all__ = ["create_search_module"]
