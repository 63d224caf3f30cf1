"""
Assistant Module

Conversational help backed by the generative assistant.
"""

from .factory import create_assistant_module

__all__ = ["create_assistant_module"]
