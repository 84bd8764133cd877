"""Core — domain models, engine, persistence and use cases."""
