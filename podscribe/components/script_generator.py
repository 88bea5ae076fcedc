"""Script generator module for podcast generation.

Turns source text into a narrated monologue, using the language model when
an API key is configured and an extractive summary otherwise.
"""

from dataclasses import dataclass
from typing import Optional

from podscribe.common.credentials import has_openai_api_key
from podscribe.components.summarizer import ExtractiveSummarizer
from podscribe.models.openai_model import OpenAIModel
from podscribe.prompt_manager import PromptManager
from podscribe.utils.logger import logger
from podscribe.utils.text_utils import normalize_text


@dataclass(frozen=True)
class ScriptOptions:
    """Options for a single script generation call."""

    max_words: Optional[int] = None
    title: Optional[str] = None


class ScriptGenerator:
    """Class that converts source text into a podcast monologue."""

    DEFAULT_MAX_WORDS = 1200
    MAX_GENERATIVE_WORDS = 1400
    CLOSING_LINE = "Thanks for listening. If you enjoyed this episode, consider sharing it."
    DEFAULT_OPENING_LINE = "Welcome to today's episode."

    def __init__(self, openai_model: Optional[OpenAIModel] = None) -> None:
        """Initialize ScriptGenerator."""
        self.prompt_manager = PromptManager()
        self.openai_model = openai_model if openai_model is not None else OpenAIModel()

    @classmethod
    def resolve_max_words(cls, options: ScriptOptions) -> int:
        """Word budget for the summary; 0 is a valid (empty) budget."""
        return cls.DEFAULT_MAX_WORDS if options.max_words is None else options.max_words

    @classmethod
    def opening_line(cls, title: Optional[str]) -> str:
        if title:
            return f"Today, we're exploring {title}."
        return cls.DEFAULT_OPENING_LINE

    def generate_script(self, raw_text: str, options: Optional[ScriptOptions] = None) -> str:
        """
        Generate a podcast monologue from source text.

        Args:
            raw_text (str): Source text, possibly with irregular whitespace
            options (Optional[ScriptOptions]): Word budget and title

        Returns:
            str: Monologue text

        Raises:
            openai.OpenAIError: If the language model request fails
        """
        options = options or ScriptOptions()
        text = normalize_text(raw_text)
        credential_present = has_openai_api_key()

        if credential_present:
            monologue = self._generate_with_model(text, options)
            if monologue:
                logger.info("Monologue generated by language model")
                return monologue
            logger.info("Language model returned no content, using extractive fallback")
        else:
            logger.info("OpenAI API key not set, using extractive fallback")

        return self.build_fallback_monologue(text, options)

    def _generate_with_model(self, text: str, options: ScriptOptions) -> Optional[str]:
        target_words = min(self.resolve_max_words(options), self.MAX_GENERATIVE_WORDS)
        prompt = self.prompt_manager.generate_monologue_prompt(text, target_words)
        return self.openai_model.create_monologue(self.prompt_manager.get_system_framing(), prompt)

    @classmethod
    def build_fallback_monologue(cls, text: str, options: Optional[ScriptOptions] = None) -> str:
        """
        Build a monologue from an extractive summary and a fixed intro/outro.

        Args:
            text (str): Normalized source text
            options (Optional[ScriptOptions]): Word budget and title

        Returns:
            str: Opening line, summary and closing line separated by blank lines
        """
        options = options or ScriptOptions()
        summary = ExtractiveSummarizer.summarize(text, cls.resolve_max_words(options))
        return "\n".join(
            [
                cls.opening_line(options.title),
                "",
                summary,
                "",
                cls.CLOSING_LINE,
            ]
        )
