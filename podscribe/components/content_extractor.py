"""Module providing content extraction functionality.

Extracts source text for podcast generation from pasted text, web pages,
YouTube captions and uploaded files (documents or audio/video).
"""

import io
import os
from pathlib import Path
from typing import Any, List, Optional, Tuple
from urllib.parse import urlparse

import httpx
from bs4 import BeautifulSoup
from markitdown import MarkItDown, StreamInfo

from podscribe.common.credentials import has_openai_api_key
from podscribe.models.openai_model import OpenAIModel
from podscribe.utils.logger import logger

# Global markdown converter shared by all instances and users
_markdown_converter = MarkItDown()


class ContentExtractionError(Exception):
    """Raised when source content cannot be turned into text.

    The message is meant to be shown to the user as is.
    """


class ContentExtractor:
    """Class for extracting text content from various sources."""

    # Class constants for supported file extensions
    SUPPORTED_TEXT_EXTENSIONS = [".txt", ".md", ".text"]
    SUPPORTED_DOCUMENT_EXTENSIONS = [".pdf", ".docx", ".pptx", ".xlsx", ".html", ".htm", ".epub"]
    SUPPORTED_MEDIA_EXTENSIONS = [".mp3", ".mp4", ".mpeg", ".mpga", ".m4a", ".wav", ".webm", ".ogg"]
    SUPPORTED_EXTENSIONS = SUPPORTED_TEXT_EXTENSIONS + SUPPORTED_DOCUMENT_EXTENSIONS + SUPPORTED_MEDIA_EXTENSIONS

    YOUTUBE_HOSTS = ["youtube.com", "www.youtube.com", "m.youtube.com", "music.youtube.com", "youtu.be"]

    # Web page extraction
    USER_AGENT = "Mozilla/5.0 PodcastBot"
    MAIN_CONTENT_SELECTORS = ["article", "main", "#content", "#main", ".post", ".article", ".entry", "body"]
    MIN_MAIN_CONTENT_WORDS = 120
    MIN_PARAGRAPH_CHARS = 40
    TRANSCRIPT_HEADING = "### Transcript"

    @classmethod
    def is_url(cls, text: Optional[str]) -> bool:
        """
        Check if the input text is a valid HTTP/HTTPS URL.

        Args:
            text (Optional[str]): Text to check

        Returns:
            bool: True if text is a valid HTTP/HTTPS URL, False otherwise
        """
        if not text or not isinstance(text, str):
            return False

        try:
            parsed = urlparse(text.strip())
            return bool(parsed.scheme in ["http", "https"] and parsed.netloc)
        except ValueError:
            return False

    @classmethod
    def is_youtube_url(cls, text: Optional[str]) -> bool:
        """Check if the input text is a YouTube video URL."""
        if not cls.is_url(text):
            return False
        host = (urlparse(str(text).strip()).hostname or "").lower()
        return host in cls.YOUTUBE_HOSTS

    @classmethod
    def extract_from_text(cls, text: Any) -> str:
        """
        Validate pasted text.

        Whitespace-only text is accepted; it normalizes to empty input and
        yields a monologue with only the opening and closing lines.

        Args:
            text: Text entered by the user

        Returns:
            str: The text unchanged

        Raises:
            ContentExtractionError: If the text is missing, empty or not a string
        """
        if not text or not isinstance(text, str):
            raise ContentExtractionError("Missing 'text'")
        return text

    @classmethod
    def extract_main_text_from_html(cls, html: str) -> str:
        """
        Extract the readable main text from an HTML document.

        The first container in MAIN_CONTENT_SELECTORS holding enough words
        wins. Otherwise every reasonably long paragraph is collected.

        Args:
            html (str): HTML document

        Returns:
            str: Extracted text, empty if nothing readable was found
        """
        soup = BeautifulSoup(html, "html.parser")
        for tag in soup(["script", "style", "noscript"]):
            tag.decompose()

        for selector in cls.MAIN_CONTENT_SELECTORS:
            elements = soup.select(selector)
            if elements:
                text = "".join(element.get_text() for element in elements).strip()
                if len(text.split()) > cls.MIN_MAIN_CONTENT_WORDS:
                    return text

        parts: List[str] = []
        for paragraph in soup.find_all("p"):
            paragraph_text = paragraph.get_text().strip()
            if len(paragraph_text) > cls.MIN_PARAGRAPH_CHARS:
                parts.append(paragraph_text)
        return "\n\n".join(parts)

    @classmethod
    def extract_from_url(cls, url: Any) -> str:
        """
        Fetch a web page and extract its main text.

        Args:
            url: Web page URL

        Returns:
            str: Extracted text content

        Raises:
            ContentExtractionError: If the URL is missing, cannot be fetched
                successfully or holds no readable text
            httpx.HTTPError: On transport failures
        """
        if not url or not isinstance(url, str):
            raise ContentExtractionError("Missing 'url'")
        if not cls.is_url(url):
            raise ContentExtractionError("Invalid URL format.")

        logger.debug(f"Fetching URL: {url}")
        with httpx.Client(follow_redirects=True) as client:
            response = client.get(url.strip(), headers={"User-Agent": cls.USER_AGENT})

        if not response.is_success:
            raise ContentExtractionError(f"Failed to fetch URL ({response.status_code})")

        main_text = cls.extract_main_text_from_html(response.text)
        if not main_text:
            raise ContentExtractionError("Could not extract readable text")

        logger.debug(f"Extracted {len(main_text)} characters from {url}")
        return main_text

    @classmethod
    def parse_youtube_transcript(cls, markdown_content: str) -> str:
        """
        Pull the caption text out of a converted YouTube page.

        Args:
            markdown_content (str): Markdown produced for a YouTube URL

        Returns:
            str: Caption text joined with spaces, empty if there is none
        """
        heading_index = markdown_content.find(cls.TRANSCRIPT_HEADING)
        if heading_index == -1:
            return ""

        section = markdown_content[heading_index + len(cls.TRANSCRIPT_HEADING) :]
        next_heading = section.find("\n#")
        if next_heading != -1:
            section = section[:next_heading]

        return " ".join(line.strip() for line in section.splitlines() if line.strip())

    @classmethod
    def extract_from_youtube(cls, url: Any) -> str:
        """
        Fetch the captions of a YouTube video.

        Args:
            url: YouTube video URL

        Returns:
            str: Caption text

        Raises:
            ContentExtractionError: If the URL is missing or has no captions
        """
        if not url or not isinstance(url, str):
            raise ContentExtractionError("Missing 'url'")

        caption_error = "Could not fetch YouTube transcript (captions may be disabled)"
        if not cls.is_youtube_url(url):
            raise ContentExtractionError(caption_error)

        try:
            logger.debug(f"Processing YouTube URL: {url}")
            result = _markdown_converter.convert(url.strip())
        except Exception as e:
            logger.error(f"YouTube conversion failed: {e}")
            raise ContentExtractionError(caption_error) from e

        transcript = cls.parse_youtube_transcript(result.text_content or "")
        if not transcript:
            raise ContentExtractionError(caption_error)
        return transcript

    @classmethod
    def extract_file_content(cls, file_obj: Any) -> Tuple[Optional[str], Optional[str], Optional[bytes]]:
        """
        Read an uploaded file in memory.

        Args:
            file_obj: Gradio file value (path string, file object, or a list of them)

        Returns:
            tuple: (file name, file extension, file content bytes)
        """
        if file_obj is None:
            return None, None, None

        if isinstance(file_obj, list):
            if not file_obj:
                return None, None, None
            file_obj = file_obj[0]

        path = cls._get_file_path(file_obj)
        file_name, extension = cls.get_file_name_and_extension(file_obj)

        file_content = None
        if hasattr(file_obj, "read") and callable(file_obj.read):
            pos = file_obj.tell() if hasattr(file_obj, "tell") and callable(file_obj.tell) else 0
            file_content = file_obj.read()
            # Rewind so the file can be reused
            if hasattr(file_obj, "seek") and callable(file_obj.seek):
                file_obj.seek(pos)
        elif path and os.path.exists(path):
            with open(path, "rb") as source:
                file_content = source.read()

        return file_name, extension, file_content

    @classmethod
    def extract_from_file(cls, file_obj: Any, openai_model: Optional[OpenAIModel] = None) -> str:
        """
        Extract text from an uploaded file.

        Args:
            file_obj: Gradio file value
            openai_model (Optional[OpenAIModel]): Model used to transcribe media files

        Returns:
            str: Extracted text

        Raises:
            ContentExtractionError: If the file is missing, unsupported or empty
        """
        if file_obj is None:
            raise ContentExtractionError("Missing file")

        file_name, file_ext, file_content = cls.extract_file_content(file_obj)
        if file_name is None or file_ext is None or file_content is None:
            raise ContentExtractionError("Missing file")

        text = cls.extract_from_bytes(file_content, file_ext, file_name, openai_model)
        if not text.strip():
            raise ContentExtractionError("Could not extract readable text")
        return text

    @classmethod
    def extract_from_bytes(
        cls,
        file_content: bytes,
        file_ext: str,
        file_name: str = "upload",
        openai_model: Optional[OpenAIModel] = None,
    ) -> str:
        """
        Extract text from file content in memory.

        Args:
            file_content (bytes): File content as bytes
            file_ext (str): File extension (e.g., ".pdf", ".txt", ".mp3")
            file_name (str): Original file name
            openai_model (Optional[OpenAIModel]): Model used to transcribe media files

        Returns:
            str: Extracted text content
        """
        if file_ext in cls.SUPPORTED_TEXT_EXTENSIONS:
            try:
                return file_content.decode("utf-8")
            except UnicodeDecodeError:
                return file_content.decode("latin-1")

        if file_ext in cls.SUPPORTED_DOCUMENT_EXTENSIONS:
            try:
                stream_info = StreamInfo(extension=file_ext, filename=file_name)
                logger.debug(f"Converting {file_ext} document from memory stream")
                result = _markdown_converter.convert(io.BytesIO(file_content), stream_info=stream_info)
                return result.text_content or ""
            except Exception as e:
                logger.error(f"Document to Markdown conversion failed: {e}")
                raise ContentExtractionError(f"Document conversion error: {e}") from e

        if file_ext in cls.SUPPORTED_MEDIA_EXTENSIONS:
            if not has_openai_api_key():
                raise ContentExtractionError("Transcription requires OPENAI_API_KEY")
            model = openai_model if openai_model is not None else OpenAIModel()
            transcript = model.transcribe(file_name, file_content)
            if transcript is None:
                raise ContentExtractionError("Transcription requires OPENAI_API_KEY")
            return transcript

        raise ContentExtractionError(
            f"Unsupported file type: {file_ext}. Supported types: {', '.join(cls.SUPPORTED_EXTENSIONS)}"
        )

    @staticmethod
    def _get_file_path(file_obj: Any) -> Optional[str]:
        if isinstance(file_obj, (str, Path)):
            return str(file_obj)
        # File objects (including Gradio temp files) carry their path in name
        name = getattr(file_obj, "name", None)
        if isinstance(name, str) and name:
            return name
        if isinstance(file_obj, os.PathLike):
            return os.fspath(file_obj)
        return None

    @classmethod
    def get_file_name_and_extension(cls, file_obj: Any) -> Tuple[str, str]:
        """
        Get the display name and lowercase extension of an uploaded file.

        Files without an extension are treated as plain text.
        """
        if isinstance(file_obj, list) and file_obj:
            file_obj = file_obj[0]
        path = cls._get_file_path(file_obj)
        file_name = Path(path).name if path else "upload.txt"
        extension = os.path.splitext(file_name)[1].lower() or ".txt"
        return file_name, extension

    @classmethod
    def is_media_file(cls, file_obj: Any) -> bool:
        """Check whether an uploaded file is audio or video."""
        if file_obj is None:
            return False
        _, extension = cls.get_file_name_and_extension(file_obj)
        return extension in cls.SUPPORTED_MEDIA_EXTENSIONS
