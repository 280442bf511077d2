"""Text summarization relay for Azure AI Language analyze-text jobs."""

__version__ = "1.0.0"
