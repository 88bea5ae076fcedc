"""Podcast creation pipeline.

Connects content extraction, script generation and speech synthesis into a
single call used by the web UI.
"""

import re
from dataclasses import dataclass
from typing import Any, Optional

from podscribe.common.source_type import SourceType
from podscribe.components.audio_generator import AudioGenerator, MissingOpenAIKeyError
from podscribe.components.content_extractor import ContentExtractor
from podscribe.components.script_generator import ScriptGenerator, ScriptOptions
from podscribe.models.openai_model import OpenAIModel
from podscribe.utils.logger import logger

DEFAULT_DOWNLOAD_NAME = "podcast.mp3"
MAX_DOWNLOAD_SLUG_LENGTH = 60


@dataclass
class PodcastResult:
    """Outcome of a podcast creation request."""

    script: str
    audio: Optional[bytes] = None
    missing_openai_key: bool = False


def make_download_name(title: Optional[str]) -> str:
    """
    Build an MP3 file name from an episode title.

    Args:
        title (Optional[str]): Episode title

    Returns:
        str: Slugified file name, or podcast.mp3 when the title is empty
    """
    if not title:
        return DEFAULT_DOWNLOAD_NAME
    slug = re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")
    slug = slug[:MAX_DOWNLOAD_SLUG_LENGTH].strip("-")
    return f"{slug}.mp3" if slug else DEFAULT_DOWNLOAD_NAME


class PodcastCreator:
    """Class that turns a source into a script and narrated audio."""

    def __init__(
        self,
        script_generator: Optional[ScriptGenerator] = None,
        audio_generator: Optional[AudioGenerator] = None,
    ) -> None:
        """Initialize PodcastCreator with one OpenAIModel shared by its components."""
        self.openai_model = OpenAIModel()
        self.script_generator = script_generator or ScriptGenerator(self.openai_model)
        self.audio_generator = audio_generator or AudioGenerator(self.openai_model)

    def extract_text(self, source_type: SourceType, value: Any) -> str:
        """
        Get raw text from a source.

        Raises:
            ContentExtractionError: If the source yields no usable text
        """
        if source_type == SourceType.TEXT:
            return ContentExtractor.extract_from_text(value)
        if source_type == SourceType.URL:
            return ContentExtractor.extract_from_url(value)
        if source_type == SourceType.YOUTUBE:
            return ContentExtractor.extract_from_youtube(value)
        if source_type == SourceType.FILE:
            return ContentExtractor.extract_from_file(value, self.openai_model)
        raise ValueError(f"Unsupported source type: {source_type}")

    def create(self, source_type: SourceType, value: Any, title: Optional[str] = None) -> PodcastResult:
        """
        Create a podcast episode from a source.

        Args:
            source_type (SourceType): Kind of source
            value: Text, URL or uploaded file
            title (Optional[str]): Episode title

        Returns:
            PodcastResult: Script plus audio, or the script alone when no
                OpenAI API key is configured for speech synthesis

        Raises:
            ContentExtractionError: If the source yields no usable text
        """
        logger.info(f"Creating podcast from {source_type.value} source")
        text = self.extract_text(source_type, value)

        # Transcribed media keeps the default opening line
        if source_type == SourceType.FILE and ContentExtractor.is_media_file(value):
            title = None

        script = self.script_generator.generate_script(text, ScriptOptions(title=title or None))

        try:
            audio = self.audio_generator.synthesize(script)
        except MissingOpenAIKeyError:
            logger.warning("OpenAI API key not set, returning script without audio")
            return PodcastResult(script=script, missing_openai_key=True)

        logger.info("Podcast creation completed")
        return PodcastResult(script=script, audio=audio)
