"""Speaker attribution engine for Malaysian parliamentary transcripts."""

__version__ = "0.1.0"
