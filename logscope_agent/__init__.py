"""LogScope-Agent: natural-language CloudWatch log analysis through a hosted AI agent."""

__version__ = "0.1.0"
