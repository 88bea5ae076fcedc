"""Credential lookup for the OpenAI-backed collaborators."""

import os
from typing import Optional

OPENAI_API_KEY_ENV = "OPENAI_API_KEY"


def has_openai_api_key() -> bool:
    """
    Check whether an OpenAI API key is present in the environment.

    Returns:
        bool: True if OPENAI_API_KEY is set to a non-empty string
    """
    api_key = os.environ.get(OPENAI_API_KEY_ENV)
    return isinstance(api_key, str) and len(api_key) > 0


def get_openai_api_key_or_none() -> Optional[str]:
    """
    Get the OpenAI API key from the environment.

    Returns:
        Optional[str]: The API key, or None if it is not set
    """
    return os.environ.get(OPENAI_API_KEY_ENV) if has_openai_api_key() else None
