"""
Package providing model-related modules.

This package includes the OpenAI API integration.
"""

from podscribe.models.openai_model import OpenAIModel

__all__ = ["OpenAIModel"]
