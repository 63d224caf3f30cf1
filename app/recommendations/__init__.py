"""
Recommendations Module

JSON API around the recommendation engine.
"""

from .factory import create_recommendations_module

__all__ = ["create_recommendations_module"]
