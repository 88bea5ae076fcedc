"""podscribe: turn articles, videos and documents into narrated podcast episodes."""

__version__ = "0.1.0"
