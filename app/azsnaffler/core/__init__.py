"""Core orchestration, configuration and presentation support."""
