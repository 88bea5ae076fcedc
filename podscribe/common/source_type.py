"""Source type enumeration for podcast input content."""

from enum import Enum


class SourceType(Enum):
    """Enumeration for supported input sources."""

    TEXT = ("text", "Text")
    URL = ("url", "Web page")
    YOUTUBE = ("youtube", "YouTube")
    FILE = ("file", "Upload")

    def __init__(self, value, label_name):
        self._value_ = value
        self.label_name: str = label_name
