"""
Hub Module

Role, topic, series and archive hubs plus the role learning roadmap.
"""

from .factory import create_hub_module

__all__ = ["create_hub_module"]
