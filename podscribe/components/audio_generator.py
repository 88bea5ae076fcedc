"""Module providing audio generation functionality.

Provides narration of podcast scripts using OpenAI text-to-speech.
"""

import datetime
import os
import shutil
import time
import uuid
from pathlib import Path
from typing import Optional

from podscribe.common.credentials import has_openai_api_key
from podscribe.models.openai_model import OpenAIModel
from podscribe.utils.logger import logger


class MissingOpenAIKeyError(Exception):
    """Raised when speech synthesis is requested without an OpenAI API key."""

    def __init__(self) -> None:
        super().__init__("Missing OPENAI_API_KEY environment variable.")


class AudioGenerator:
    """Class for generating podcast audio from script text."""

    DEFAULT_OUTPUT_DIR = Path("data/output")
    EPISODE_DIR_PREFIX = "episode_"
    # Saved episodes older than this are removed on cleanup
    MAX_OUTPUT_AGE_DAYS = 1.0

    def __init__(
        self,
        openai_model: Optional[OpenAIModel] = None,
        output_dir: Optional[Path] = None,
    ) -> None:
        """
        Initialize AudioGenerator.

        Args:
            openai_model (Optional[OpenAIModel]): Model used for synthesis.
            output_dir (Optional[Path]): Directory for saved MP3 files.
                Defaults to PODSCRIBE_OUTPUT_DIR or data/output.
        """
        self.openai_model = openai_model if openai_model is not None else OpenAIModel()
        if output_dir is None:
            output_dir = Path(os.environ.get("PODSCRIBE_OUTPUT_DIR", str(self.DEFAULT_OUTPUT_DIR)))
        self.output_dir = output_dir

    def synthesize(self, text: str) -> bytes:
        """
        Generate MP3 audio from text.

        Args:
            text: Text to convert to speech

        Returns:
            bytes: Generated MP3 data

        Raises:
            MissingOpenAIKeyError: If no OpenAI API key is configured
        """
        if not has_openai_api_key():
            raise MissingOpenAIKeyError()

        audio = self.openai_model.synthesize_speech(text)
        if audio is None:
            raise MissingOpenAIKeyError()
        return audio

    def save_mp3(self, audio: bytes, file_name: str = "podcast.mp3") -> str:
        """
        Save MP3 data under a unique subdirectory of the output directory.

        Old episode directories are pruned first.

        Args:
            audio (bytes): MP3 data
            file_name (str): File name shown to the user on download

        Returns:
            str: Path of the saved file
        """
        self.cleanup_old_outputs()

        date_str = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
        target_dir = self.output_dir / f"{self.EPISODE_DIR_PREFIX}{date_str}_{uuid.uuid4().hex[:8]}"
        target_dir.mkdir(parents=True, exist_ok=True)

        output_file = target_dir / file_name
        with open(output_file, "wb") as f:
            f.write(audio)

        logger.debug(f"Saved audio: {output_file} ({len(audio) // 1024} KB)")
        return str(output_file)

    def cleanup_old_outputs(self, max_age_days: Optional[float] = None) -> int:
        """
        Remove saved episode directories older than the given age.

        Only directories created by save_mp3 are considered.

        Args:
            max_age_days (Optional[float]): Maximum age in days.
                Defaults to MAX_OUTPUT_AGE_DAYS.

        Returns:
            int: Number of removed directories
        """
        if max_age_days is None:
            max_age_days = self.MAX_OUTPUT_AGE_DAYS

        if not self.output_dir.exists():
            logger.debug(f"Output directory does not exist: {self.output_dir}")
            return 0

        cutoff = time.time() - max_age_days * 86400
        removed_count = 0
        try:
            for item in self.output_dir.iterdir():
                if not item.is_dir() or not item.name.startswith(self.EPISODE_DIR_PREFIX):
                    continue
                try:
                    if item.stat().st_mtime >= cutoff:
                        continue
                    logger.info(f"Removing old episode directory: {item}")
                    shutil.rmtree(item)
                    removed_count += 1
                except OSError as e:
                    logger.warning(f"Failed to remove old episode directory {item}: {e}")
        except OSError as e:
            logger.error(f"Error scanning output directory {self.output_dir}: {e}")

        if removed_count > 0:
            logger.info(f"Removed {removed_count} episode directories older than {max_age_days} days")
        return removed_count
