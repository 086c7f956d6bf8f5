"""Lead search, import and outreach backend."""

__version__ = "1.0.0"
