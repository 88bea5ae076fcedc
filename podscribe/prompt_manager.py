"""Prompt manager module for podscribe.

This module renders the prompts sent to the language model when writing a
podcast monologue.
"""

from pathlib import Path

import jinja2

from podscribe.utils.logger import logger


class PromptManager:
    """Manages templates and prompt generation for podcast monologues."""

    TEMPLATE_DIR = Path(__file__).parent / "templates"
    MONOLOGUE_TEMPLATE = "monologue.j2"
    SYSTEM_FRAMING = "You produce natural, human-like podcast monologues."

    # Used when the template file is missing from the installation
    FALLBACK_TEMPLATE = (
        "Write a natural solo podcast monologue of about {{ target_words }} words "
        "with a short intro and outro, no headings, no speaker labels and no lists, "
        "based on the content below.\n\nContent:\n{{ content }}"
    )

    def __init__(self) -> None:
        """Initialize the PromptManager."""
        self.environment = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(self.TEMPLATE_DIR)),
            undefined=jinja2.StrictUndefined,
        )

    @classmethod
    def check_template_files(cls) -> bool:
        """Check if template files exist."""
        template_path = cls.TEMPLATE_DIR / cls.MONOLOGUE_TEMPLATE
        if not template_path.exists():
            logger.warning(f"Template file not found: {template_path}")
            return False
        logger.debug(f"Template file found: {template_path}")
        return True

    def get_system_framing(self) -> str:
        return self.SYSTEM_FRAMING

    def get_template(self) -> jinja2.Template:
        """Load the monologue template, or the built-in fallback if missing."""
        try:
            return self.environment.get_template(self.MONOLOGUE_TEMPLATE)
        except jinja2.TemplateNotFound:
            logger.error(f"Template file not found: {self.MONOLOGUE_TEMPLATE}")
            return self.environment.from_string(self.FALLBACK_TEMPLATE)

    def generate_monologue_prompt(self, content: str, target_words: int) -> str:
        """Render the user prompt for a monologue.

        Args:
            content (str): Normalized source text.
            target_words (int): Word count the model should aim for.

        Returns:
            str: Rendered prompt.
        """
        return self.get_template().render(content=content, target_words=target_words)
