"""Shared helpers used across podscribe components."""

from podscribe.common.credentials import get_openai_api_key_or_none, has_openai_api_key
from podscribe.common.source_type import SourceType

__all__ = ["SourceType", "get_openai_api_key_or_none", "has_openai_api_key"]
