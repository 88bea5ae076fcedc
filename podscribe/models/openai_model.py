"""Module providing the OpenAI API integration.

Wraps the chat, speech and transcription endpoints used to write
monologues, synthesize narration and transcribe uploaded media.
"""

import threading
from typing import Dict, List, Optional

import httpx
from openai import OpenAI

from podscribe.common.credentials import get_openai_api_key_or_none
from podscribe.utils.logger import logger


class OpenAIModel:
    """Class that talks to the OpenAI API through one shared client."""

    # Class-level constants for model configuration
    DEFAULT_MODELS = [
        "gpt-4o-mini",
        "gpt-4o",
        "gpt-4.1-mini",
        "gpt-4.1",
    ]
    DEFAULT_MODEL = "gpt-4o-mini"
    DEFAULT_TEMPERATURE = 0.7
    SPEECH_MODEL = "gpt-4o-mini-tts"
    SPEECH_VOICE = "alloy"
    SPEECH_FORMAT = "mp3"
    TRANSCRIPTION_MODEL = "whisper-1"

    # Shared by every instance for the lifetime of the process
    _client: Optional[OpenAI] = None
    _client_lock = threading.Lock()

    def __init__(self) -> None:
        """Initialize OpenAIModel."""
        self.model_name: str = self.DEFAULT_MODEL
        self.temperature: float = self.DEFAULT_TEMPERATURE
        self._available_models = self.DEFAULT_MODELS.copy()
        self.last_token_usage: Dict[str, int] = {}

    @classmethod
    def get_client(cls) -> Optional[OpenAI]:
        """
        Get the shared OpenAI client, creating it on first use.

        Returns:
            Optional[OpenAI]: The client, or None when no API key is configured
        """
        api_key = get_openai_api_key_or_none()
        if api_key is None:
            return None

        if cls._client is None:
            with cls._client_lock:
                if cls._client is None:
                    logger.info("Creating shared OpenAI client")
                    # Explicit http client to avoid the proxies issue
                    cls._client = OpenAI(api_key=api_key, http_client=httpx.Client())
        return cls._client

    def get_available_models(self) -> List[str]:
        """
        Get available OpenAI models.

        Returns:
            List[str]: List of available model names
        """
        return self._available_models

    def set_model_name(self, model_name: str) -> bool:
        """
        Set the OpenAI model name.

        Args:
            model_name (str): Model name to use

        Returns:
            bool: Whether the model name was successfully set
        """
        if not model_name or model_name.strip() == "":
            return False

        model_name = model_name.strip()
        if model_name not in self._available_models:
            return False

        self.model_name = model_name
        return True

    def set_temperature(self, temperature: float) -> bool:
        """
        Set the sampling temperature.

        Args:
            temperature (float): Value between 0 and 2

        Returns:
            bool: Whether the temperature was successfully set
        """
        try:
            value = float(temperature)
        except (ValueError, TypeError):
            return False
        if value < 0.0 or value > 2.0:
            return False

        self.temperature = value
        return True

    def create_monologue(self, system_framing: str, prompt: str) -> Optional[str]:
        """
        Ask the chat model for a monologue.

        API errors are not caught here and reach the caller.

        Args:
            system_framing (str): System message
            prompt (str): User prompt

        Returns:
            Optional[str]: Trimmed response text, or None if the client is
                unavailable or the response had no content
        """
        client = self.get_client()
        if client is None:
            return None

        logger.info(f"Making OpenAI API request with model: {self.model_name}")

        response = client.chat.completions.create(
            model=self.model_name,
            messages=[
                {"role": "system", "content": system_framing},
                {"role": "user", "content": prompt},
            ],
            temperature=self.temperature,
        )

        usage = getattr(response, "usage", None)
        if usage is not None:
            self.last_token_usage = {
                "prompt_tokens": usage.prompt_tokens,
                "completion_tokens": usage.completion_tokens,
                "total_tokens": usage.total_tokens,
            }
            logger.info(f"Token usage: {self.last_token_usage}")

        if not response.choices:
            return None
        content = response.choices[0].message.content
        if not content or not content.strip():
            return None

        generated_text = content.strip()
        logger.info(f"Text generation completed. Length: {len(generated_text)} characters")
        return generated_text

    def synthesize_speech(self, text: str) -> Optional[bytes]:
        """
        Convert text to MP3 audio.

        Args:
            text (str): Text to narrate

        Returns:
            Optional[bytes]: MP3 data, or None if the client is unavailable
        """
        client = self.get_client()
        if client is None:
            return None

        logger.info(f"Requesting speech synthesis: {len(text)} characters")
        response = client.audio.speech.create(
            model=self.SPEECH_MODEL,
            voice=self.SPEECH_VOICE,
            input=text,
            response_format=self.SPEECH_FORMAT,
        )
        audio = response.content
        logger.debug(f"Speech synthesis completed: {len(audio) // 1024} KB")
        return audio

    def transcribe(self, file_name: str, data: bytes) -> Optional[str]:
        """
        Transcribe an audio or video file.

        Args:
            file_name (str): Original file name, used for format detection
            data (bytes): File content

        Returns:
            Optional[str]: Transcript text, or None if the client is unavailable
        """
        client = self.get_client()
        if client is None:
            return None

        logger.info(f"Requesting transcription for {file_name}")
        transcription = client.audio.transcriptions.create(
            model=self.TRANSCRIPTION_MODEL,
            file=(file_name, data),
            response_format="text",
            temperature=0,
        )
        return str(transcription)

    def get_last_token_usage(self) -> dict:
        """
        Get token usage of the last chat request.

        Returns:
            dict: prompt_tokens, completion_tokens, total_tokens, or an empty
                dict if no request has been made
        """
        return self.last_token_usage
