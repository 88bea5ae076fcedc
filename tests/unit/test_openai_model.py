"""Test for the OpenAI model wrapper.

This module tests client sharing and the chat, speech and transcription calls.
"""

import os
import threading
import time
import unittest
from unittest.mock import MagicMock, patch

import httpx
import openai

from podscribe.models.openai_model import OpenAIModel


def _chat_response(content):
    mock_usage = MagicMock()
    mock_usage.prompt_tokens = 100
    mock_usage.completion_tokens = 50
    mock_usage.total_tokens = 150

    mock_response = MagicMock()
    mock_response.choices = [MagicMock()]
    mock_response.choices[0].message.content = content
    mock_response.usage = mock_usage
    return mock_response


class TestOpenAIModel(unittest.TestCase):
    """Test cases for OpenAIModel."""

    def setUp(self):
        """Set up test cases."""
        OpenAIModel._client = None
        self.env_patcher = patch.dict(os.environ, {"OPENAI_API_KEY": "sk-test123456789"})
        self.env_patcher.start()
        self.model = OpenAIModel()

    def tearDown(self):
        """Reset shared state."""
        self.env_patcher.stop()
        OpenAIModel._client = None

    def test_initialization(self):
        """Test model initialization."""
        self.assertEqual(self.model.model_name, "gpt-4o-mini")
        self.assertEqual(self.model.temperature, 0.7)
        self.assertDictEqual(self.model.last_token_usage, {})

    def test_get_client_without_api_key(self):
        """No client is created without an API key."""
        with patch.dict(os.environ, {"OPENAI_API_KEY": ""}):
            self.assertIsNone(OpenAIModel.get_client())
        with patch.dict(os.environ, {}, clear=True):
            self.assertIsNone(OpenAIModel.get_client())

    @patch("podscribe.models.openai_model.OpenAI")
    def test_client_is_shared(self, mock_openai):
        """The client is created once and reused across instances."""
        first = OpenAIModel.get_client()
        second = OpenAIModel().get_client()

        self.assertIs(first, second)
        mock_openai.assert_called_once()
        self.assertEqual("sk-test123456789", mock_openai.call_args.kwargs["api_key"])
        self.assertIsInstance(mock_openai.call_args.kwargs["http_client"], httpx.Client)

    @patch("podscribe.models.openai_model.OpenAI")
    def test_concurrent_first_use_creates_one_client(self, mock_openai):
        """Simultaneous first calls still construct a single client."""

        def slow_client(**kwargs):
            time.sleep(0.05)
            return MagicMock()

        mock_openai.side_effect = slow_client
        barrier = threading.Barrier(8)
        clients = []

        def worker():
            barrier.wait()
            clients.append(OpenAIModel.get_client())

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(1, mock_openai.call_count)
        self.assertEqual(1, len({id(client) for client in clients}))

    def test_get_available_models(self):
        """Test getting available models."""
        models = self.model.get_available_models()
        self.assertIsInstance(models, list)
        self.assertIn("gpt-4o-mini", models)

    def test_set_model_name(self):
        """Test setting a model name."""
        self.assertTrue(self.model.set_model_name("gpt-4o"))
        self.assertEqual("gpt-4o", self.model.model_name)

        # Invalid names leave the model unchanged
        self.assertFalse(self.model.set_model_name("invalid-model"))
        self.assertFalse(self.model.set_model_name(""))
        self.assertEqual("gpt-4o", self.model.model_name)

    def test_set_temperature(self):
        """Test setting the temperature."""
        self.assertTrue(self.model.set_temperature(0.2))
        self.assertEqual(0.2, self.model.temperature)

        self.assertFalse(self.model.set_temperature(3))
        self.assertFalse(self.model.set_temperature("warm"))
        self.assertEqual(0.2, self.model.temperature)

    @patch("podscribe.models.openai_model.OpenAI")
    def test_create_monologue(self, mock_openai):
        """Test generating a monologue."""
        mock_client = mock_openai.return_value
        mock_client.chat.completions.create.return_value = _chat_response("  Generated monologue.\n")

        result = self.model.create_monologue("System framing", "Prompt text")

        self.assertEqual("Generated monologue.", result)
        kwargs = mock_client.chat.completions.create.call_args.kwargs
        self.assertEqual("gpt-4o-mini", kwargs["model"])
        self.assertEqual(0.7, kwargs["temperature"])
        self.assertEqual(
            [
                {"role": "system", "content": "System framing"},
                {"role": "user", "content": "Prompt text"},
            ],
            kwargs["messages"],
        )
        self.assertEqual(150, self.model.get_last_token_usage().get("total_tokens"))

    @patch("podscribe.models.openai_model.OpenAI")
    def test_create_monologue_empty_content(self, mock_openai):
        """Empty or missing content yields None."""
        mock_client = mock_openai.return_value

        mock_client.chat.completions.create.return_value = _chat_response("   ")
        self.assertIsNone(self.model.create_monologue("System", "Prompt"))

        mock_client.chat.completions.create.return_value = _chat_response(None)
        self.assertIsNone(self.model.create_monologue("System", "Prompt"))

        empty_response = _chat_response("unused")
        empty_response.choices = []
        mock_client.chat.completions.create.return_value = empty_response
        self.assertIsNone(self.model.create_monologue("System", "Prompt"))

    def test_create_monologue_without_api_key(self):
        """No request is made without an API key."""
        with patch.dict(os.environ, {}, clear=True):
            self.assertIsNone(self.model.create_monologue("System", "Prompt"))

    @patch("podscribe.models.openai_model.OpenAI")
    def test_create_monologue_error_propagates(self, mock_openai):
        """API errors are raised to the caller."""
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        mock_openai.return_value.chat.completions.create.side_effect = openai.APIConnectionError(request=request)

        with self.assertRaises(openai.APIConnectionError):
            self.model.create_monologue("System", "Prompt")

    @patch("podscribe.models.openai_model.OpenAI")
    def test_synthesize_speech(self, mock_openai):
        """Test speech synthesis."""
        mock_client = mock_openai.return_value
        mock_client.audio.speech.create.return_value.content = b"mp3-bytes"

        result = self.model.synthesize_speech("Hello listeners.")

        self.assertEqual(b"mp3-bytes", result)
        mock_client.audio.speech.create.assert_called_once_with(
            model="gpt-4o-mini-tts",
            voice="alloy",
            input="Hello listeners.",
            response_format="mp3",
        )

    @patch("podscribe.models.openai_model.OpenAI")
    def test_transcribe(self, mock_openai):
        """Test media transcription."""
        mock_client = mock_openai.return_value
        mock_client.audio.transcriptions.create.return_value = "Transcribed words."

        result = self.model.transcribe("talk.mp3", b"audio")

        self.assertEqual("Transcribed words.", result)
        kwargs = mock_client.audio.transcriptions.create.call_args.kwargs
        self.assertEqual("whisper-1", kwargs["model"])
        self.assertEqual(("talk.mp3", b"audio"), kwargs["file"])
        self.assertEqual("text", kwargs["response_format"])
        self.assertEqual(0, kwargs["temperature"])
