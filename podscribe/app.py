#!/usr/bin/env python3

"""Main application module.

Builds the podscribe web application using Gradio.
"""

import logging
import os
from typing import Any, Optional, Tuple

import gradio as gr

from podscribe.common.source_type import SourceType
from podscribe.components.content_extractor import ContentExtractionError, ContentExtractor
from podscribe.podcast_creator import PodcastCreator, PodcastResult, make_download_name
from podscribe.prompt_manager import PromptManager
from podscribe.utils.logger import logger, setup_logger

# Default port
DEFAULT_PORT = 7860

MISSING_KEY_NOTICE = "OpenAI key missing on server; showing the script without audio."

# (audio path, download path, script, status message)
GenerationOutput = Tuple[Optional[str], Optional[str], str, str]


class PodscribeApp:
    """Main class for the podscribe application."""

    def __init__(self, podcast_creator: Optional[PodcastCreator] = None):
        """Initialize the PodscribeApp."""
        logger.info("Initializing PodscribeApp")
        self.podcast_creator = podcast_creator or PodcastCreator()
        PromptManager.check_template_files()

        # Remove episodes left over from previous runs
        self.podcast_creator.audio_generator.cleanup_old_outputs()

    def generate_podcast(self, source_type: SourceType, value: Any, title: Optional[str]) -> GenerationOutput:
        """
        Generate a podcast episode and format the result for the UI.

        Args:
            source_type (SourceType): Kind of source
            value: Text, URL or uploaded file
            title (Optional[str]): Episode title

        Returns:
            GenerationOutput: Values for the audio player, download file,
                script box and status message
        """
        title = (title or "").strip() or None
        try:
            result = self.podcast_creator.create(source_type, value, title)
            return self._format_result(result, title)
        except ContentExtractionError as e:
            logger.warning(f"Content extraction failed: {e}")
            return None, None, "", f"**Error:** {e}"
        except Exception as e:
            logger.error(f"Podcast generation error: {e}")
            return None, None, "", f"**Error:** {str(e) or 'Server error'}"

    def _format_result(self, result: PodcastResult, title: Optional[str]) -> GenerationOutput:
        if result.missing_openai_key or result.audio is None:
            return None, None, result.script, MISSING_KEY_NOTICE

        audio_path = self.podcast_creator.audio_generator.save_mp3(result.audio, make_download_name(title))
        return audio_path, audio_path, result.script, "Podcast generated."

    def generate_from_text(self, text: str, title: str) -> GenerationOutput:
        return self.generate_podcast(SourceType.TEXT, text, title)

    def generate_from_url(self, url: str, title: str) -> GenerationOutput:
        return self.generate_podcast(SourceType.URL, url, title)

    def generate_from_youtube(self, url: str, title: str) -> GenerationOutput:
        return self.generate_podcast(SourceType.YOUTUBE, url, title)

    def generate_from_file(self, file_obj: Any, title: str) -> GenerationOutput:
        return self.generate_podcast(SourceType.FILE, file_obj, title)

    def ui(self) -> gr.Blocks:
        """
        Create the Gradio interface.

        Returns:
            gr.Blocks: Gradio Blocks instance
        """
        app = gr.Blocks(
            title="podscribe",
            css="footer {display: none !important;}",
            theme=gr.themes.Soft(),
        )

        # Limit concurrent generations; each one may call paid APIs
        app.queue(
            default_concurrency_limit=2,
            api_open=False,
            max_size=10,
        )

        with app:
            gr.Markdown(
                """# AI Podcast Generator
Turn text, links, or videos into a podcast."""
            )

            title_input = gr.Textbox(label="Title (optional)", placeholder="Episode title")

            with gr.Tabs():
                with gr.Tab(SourceType.TEXT.label_name):
                    text_input = gr.Textbox(
                        label="Text",
                        placeholder="Paste an article, notes or any text...",
                        lines=12,
                    )
                    text_button = gr.Button("Generate podcast", variant="primary")

                with gr.Tab(SourceType.URL.label_name):
                    url_input = gr.Textbox(label="URL", placeholder="https://example.com/article")
                    url_button = gr.Button("Generate podcast", variant="primary")

                with gr.Tab(SourceType.YOUTUBE.label_name):
                    youtube_input = gr.Textbox(label="YouTube URL", placeholder="https://www.youtube.com/watch?v=...")
                    youtube_button = gr.Button("Generate podcast", variant="primary")

                with gr.Tab(SourceType.FILE.label_name):
                    file_input = gr.File(
                        label="Document, audio or video",
                        file_types=self._supported_file_types(),
                        type="filepath",
                    )
                    file_button = gr.Button("Generate podcast", variant="primary")

            status_output = gr.Markdown(elem_id="status")
            audio_output = gr.Audio(label="Podcast", type="filepath", interactive=False)
            download_output = gr.File(label="Download MP3", interactive=False)
            script_output = gr.Textbox(label="Podcast Script", lines=16, interactive=False)

            outputs = [audio_output, download_output, script_output, status_output]
            text_button.click(fn=self.generate_from_text, inputs=[text_input, title_input], outputs=outputs)
            url_button.click(fn=self.generate_from_url, inputs=[url_input, title_input], outputs=outputs)
            youtube_button.click(fn=self.generate_from_youtube, inputs=[youtube_input, title_input], outputs=outputs)
            file_button.click(fn=self.generate_from_file, inputs=[file_input, title_input], outputs=outputs)

        return app

    @staticmethod
    def _supported_file_types():
        return list(ContentExtractor.SUPPORTED_EXTENSIONS)


def main() -> None:
    """
    Main function to launch the Gradio app.

    This function creates an instance of PodscribeApp and launches
    the Gradio interface with appropriate configuration.
    """
    import argparse

    # Get port from environment variable if available
    env_port = os.environ.get("PORT")
    default_port = int(env_port) if env_port else DEFAULT_PORT

    parser = argparse.ArgumentParser(description="podscribe - AI Podcast Generator")
    parser.add_argument(
        "--port",
        type=int,
        default=default_port,
        help=f"Port to run the server on (default: {default_port})",
    )
    parser.add_argument(
        "--host",
        type=str,
        default="0.0.0.0",
        help="Host to run the server on (default: 0.0.0.0)",
    )
    parser.add_argument("--share", action="store_true", help="Create a public link via Gradio tunneling")
    parser.add_argument("--debug", action="store_true", help="Enable debug mode")

    args = parser.parse_args()

    if args.debug:
        setup_logger(level=logging.DEBUG)

    app_instance = PodscribeApp()
    gradio_app = app_instance.ui()

    launch_kwargs = {
        "server_name": args.host,
        "server_port": args.port,
        "share": args.share,
        "debug": args.debug,
        "show_error": True,
        "quiet": not args.debug,
    }

    logger.info(f"Starting podscribe on http://{args.host}:{args.port}")
    if args.share:
        logger.info("Public sharing enabled - this will create a public URL")

    try:
        gradio_app.launch(**launch_kwargs)
    except KeyboardInterrupt:
        logger.info("Application stopped by user")
    except Exception as e:
        logger.error(f"Failed to start application: {e}")
        raise


if __name__ == "__main__":
    main()
