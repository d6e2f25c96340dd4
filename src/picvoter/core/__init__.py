"""Core configuration, context and error types."""
