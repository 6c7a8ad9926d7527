"""Core engine: configuration, logging and notification events."""
